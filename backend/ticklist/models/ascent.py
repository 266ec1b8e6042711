"""
Ticklist Backend — Ascent SQLAlchemy Model
============================================

What:  ORM model for the `ascent` table: a route climbed on a given day.
"""

import datetime
import uuid

from sqlalchemy import Date, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ticklist.database import Base


class Ascent(Base):
    """A recorded ascent of one route. `date` is a calendar date, no time part."""

    __tablename__ = "ascent"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    route_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("route.id"), nullable=False
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    def __repr__(self) -> str:
        return f"<Ascent(id={self.id}, route_id={self.route_id}, date={self.date})>"
