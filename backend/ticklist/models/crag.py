"""
Ticklist Backend — Crag SQLAlchemy Model
==========================================

What:  ORM model for the `crag` table: a named climbing location.
Who:   Queried and inserted into by the crags TableResource.

Root entity: no foreign keys. Rows are never updated or deleted by the
application.
"""

import uuid

from sqlalchemy import Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ticklist.database import Base


class Crag(Base):
    """A climbing location."""

    __tablename__ = "crag"

    # Always assigned by the service (time-ordered UUID); no server default
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Crag(id={self.id}, name='{self.name}')>"
