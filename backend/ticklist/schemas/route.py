"""
Ticklist Backend — Route Schemas
==================================

What:  API contract for routes.

crag_id is taken as given; whether the crag exists is left to the
database's foreign key.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class RouteCreate(BaseModel):
    """Request body for POST /routes."""
    id: Optional[uuid.UUID] = Field(
        default=None,
        description="Ignored; the server assigns a time-ordered UUID",
    )
    crag_id: uuid.UUID = Field(description="Identifier of the crag this route belongs to")
    name: str = Field(description="Name of the route")

    model_config = {"extra": "forbid"}


class RouteResponse(BaseModel):
    """One row of the route table."""
    id: uuid.UUID
    crag_id: uuid.UUID
    name: str

    model_config = {"from_attributes": True}
