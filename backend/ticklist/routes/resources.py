"""
Ticklist Backend — Resource Route Handlers
============================================

What:  Builds the list (GET) and create (POST) endpoints for one resource path.
Why:   Crags, routes, and ascents expose the same two operations; one factory
       instantiated three times keeps them uniform.
How:   `build_resource_router()` closes over the resource and its schemas and
       registers two handlers on a fresh APIRouter.

Status codes:
    GET   200  JSON array of rows (possibly empty)
    POST  201  empty body
    POST  422  body is not valid JSON, misses a field, or has an unknown field
    any   500  database failure (see register_exception_handlers in main.py)
"""

from typing import List, Type

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ticklist.database import get_db_session
from ticklist.schemas import (
    AscentCreate,
    AscentResponse,
    CragCreate,
    CragResponse,
    RouteCreate,
    RouteResponse,
)
from ticklist.services.resource_service import (
    TableResource,
    ascent_resource,
    crag_resource,
    route_resource,
)


def build_resource_router(
    path: str,
    resource: TableResource,
    create_schema: Type[BaseModel],
    response_schema: Type[BaseModel],
    tag: str,
) -> APIRouter:
    """
    Create a router exposing `GET path` and `POST path` for one table.

    Args:
        path:             URL path, e.g. "/crags"
        resource:         TableResource doing the database work
        create_schema:    Pydantic model the POST body is decoded into
        response_schema:  Pydantic model for each element of the GET array
        tag:              OpenAPI tag (only visible when docs are enabled)
    """
    router = APIRouter(tags=[tag])

    @router.get(
        path,
        response_model=List[response_schema],
        name=f"list_{resource.table_name}s",
        summary=f"List all {resource.table_name} records",
    )
    async def list_records(db: AsyncSession = Depends(get_db_session)):
        return await resource.list_all(db)

    @router.post(
        path,
        status_code=201,
        response_class=Response,
        name=f"create_{resource.table_name}",
        summary=f"Create a {resource.table_name} record",
    )
    async def create_record(
        payload: create_schema,
        db: AsyncSession = Depends(get_db_session),
    ) -> Response:
        await resource.create(db, payload)
        return Response(status_code=201)

    return router


crags_router = build_resource_router("/crags", crag_resource, CragCreate, CragResponse, "Crags")
routes_router = build_resource_router("/routes", route_resource, RouteCreate, RouteResponse, "Routes")
ascents_router = build_resource_router("/ascents", ascent_resource, AscentCreate, AscentResponse, "Ascents")
