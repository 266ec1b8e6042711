"""
Ticklist Backend — Liveness Route
===================================

What:  GET / answers 200 with an empty body.
Who:   The hosting environment's liveness/readiness probe.

Liveness Philosophy:
    The probe reports that the process is up and serving HTTP. It does not
    query the database, so a database outage shows up as 500s on the data
    endpoints while `/` keeps answering 200.
"""

from fastapi import APIRouter, Response

router = APIRouter(tags=["Health"])


@router.get(
    "/",
    status_code=200,
    response_class=Response,
    summary="Liveness probe",
)
async def ready() -> Response:
    return Response(status_code=200)
