"""
Ticklist Backend — Ascent Schemas
===================================

What:  API contract for ascents.

`date` is a calendar date and travels as ISO 8601 `YYYY-MM-DD`.
A datetime string with a non-midnight time part fails validation (422).
"""

import datetime
import uuid
from typing import Optional

from pydantic import BaseModel, Field


class AscentCreate(BaseModel):
    """Request body for POST /ascents."""
    id: Optional[uuid.UUID] = Field(
        default=None,
        description="Ignored; the server assigns a time-ordered UUID",
    )
    route_id: uuid.UUID = Field(description="Identifier of the route that was climbed")
    date: datetime.date = Field(description="Day of the ascent (YYYY-MM-DD)")

    model_config = {"extra": "forbid"}


class AscentResponse(BaseModel):
    """One row of the ascent table."""
    id: uuid.UUID
    route_id: uuid.UUID
    date: datetime.date

    model_config = {"from_attributes": True}
