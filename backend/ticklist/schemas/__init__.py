"""
Ticklist Backend — Pydantic Request/Response Schemas
======================================================

One module per entity, each with a Create schema (request body) and a
Response schema (list item). JSON field names equal the column names.

Create schemas:
    - accept an optional `id` and ignore it (the server always assigns one)
    - require every other field
    - reject unknown fields (extra="forbid" → 422 from FastAPI)
"""

from ticklist.schemas.crag import CragCreate, CragResponse
from ticklist.schemas.route import RouteCreate, RouteResponse
from ticklist.schemas.ascent import AscentCreate, AscentResponse

__all__ = [
    "CragCreate",
    "CragResponse",
    "RouteCreate",
    "RouteResponse",
    "AscentCreate",
    "AscentResponse",
]
