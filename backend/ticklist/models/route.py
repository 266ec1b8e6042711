"""
Ticklist Backend — Route SQLAlchemy Model
===========================================

What:  ORM model for the `route` table: a named line at one crag.

The crag_id foreign key is declared here so the schema enforces it; the
application never checks that the referenced crag exists.
"""

import uuid

from sqlalchemy import ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ticklist.database import Base


class Route(Base):
    """A climbing route belonging to exactly one crag."""

    __tablename__ = "route"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    crag_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("crag.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Route(id={self.id}, crag_id={self.crag_id}, name='{self.name}')>"
