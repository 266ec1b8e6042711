"""
Ticklist Backend — Crag Schemas
=================================

What:  API contract for crags.
Who:   CragCreate validates POST /crags bodies; CragResponse shapes GET /crags items.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class CragCreate(BaseModel):
    """
    Request body for POST /crags.

    Example:
        {"name": "Peak District", "location": "UK"}
    """
    id: Optional[uuid.UUID] = Field(
        default=None,
        description="Ignored; the server assigns a time-ordered UUID",
    )
    name: str = Field(description="Name of the climbing location")
    location: str = Field(description="Where the crag is")

    model_config = {"extra": "forbid"}


class CragResponse(BaseModel):
    """One row of the crag table."""
    id: uuid.UUID = Field(description="Server-assigned identifier (UUIDv7)")
    name: str
    location: str

    model_config = {"from_attributes": True}
