"""
Ticklist Backend — Table-Backed Resource Service
==================================================

What:  One implementation of "list every row" and "insert one row", shared by
       crags, routes, and ascents.
Why:   The three entities differ only in table and columns. Parameterizing a
       single class by ORM model and response schema keeps their behavior
       identical instead of repeating three near-copies.
How:   SQLAlchemy Core statements built from the ORM model:
           list_all → SELECT <columns> FROM <table>            (no ORDER BY)
           create   → INSERT INTO <table> (id, ...) VALUES (...)   (bound params)
Who:   Called by the routers produced in ticklist.routes.resources.

Error Handling Strategy:
    Every SQLAlchemyError, and any OSError a driver raises unwrapped, is
    re-raised as DatabaseError with the statement text as its message and the
    original exception chained as __cause__. A failed insert is rolled back
    first. Nothing is retried. The exception handler in main.py logs the chain and
    answers 500 with an empty body.

Design Decision:
    The service is stateless; it receives the session for each call. One
    request, one session, one statement.
"""

import logging
from typing import Generic, List, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ticklist.database import Base
from ticklist.exceptions import DatabaseError
from ticklist.identifiers import new_id
from ticklist.models import Ascent, Crag, Route
from ticklist.schemas import AscentResponse, CragResponse, RouteResponse

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class TableResource(Generic[ResponseT]):
    """
    List/create operations for one table.

    Attributes:
        model:            ORM class mapped to the table
        response_schema:  Pydantic model each row is serialized through
        table_name:       Name of the underlying table (for logs)
    """

    def __init__(self, model: Type[Base], response_schema: Type[ResponseT]):
        self.model = model
        self.response_schema = response_schema
        self.table_name = model.__tablename__

    async def list_all(self, db: AsyncSession) -> List[ResponseT]:
        """
        Return every row of the table.

        Order is whatever the database produces; an empty table yields [].

        Raises:
            DatabaseError: the query failed for any reason
        """
        stmt = select(self.model)
        try:
            result = await db.execute(stmt)
            rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseError(
                message=str(stmt),
                context={"table": self.table_name, "operation": "list"},
            ) from e

        return [self.response_schema.model_validate(row) for row in rows]

    async def create(self, db: AsyncSession, payload: BaseModel) -> UUID:
        """
        Insert one row built from `payload` and commit it.

        Any `id` on the payload is discarded. The generated id is bound first,
        followed by the remaining fields in the order the schema declares them.
        Not idempotent: identical payloads create distinct rows.

        Returns:
            The server-generated identifier of the new row

        Raises:
            DatabaseError: the insert or commit failed (the transaction is rolled back)
        """
        values = {"id": new_id()}
        values.update(payload.model_dump(exclude={"id"}))
        stmt = insert(self.model).values(values)

        try:
            await db.execute(stmt)
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            await self._rollback(db)
            raise DatabaseError(
                message=str(stmt),
                context={"table": self.table_name, "operation": "create"},
            ) from e

        logger.info("Created %s %s: %s", self.table_name, values["id"], values)
        return values["id"]

    async def _rollback(self, db: AsyncSession) -> None:
        # A failed rollback must not mask the original error
        try:
            await db.rollback()
        except (SQLAlchemyError, OSError):
            logger.warning("Rollback failed for %s", self.table_name, exc_info=True)

    def __repr__(self) -> str:
        return f"<TableResource(table='{self.table_name}')>"


# ── Resource Instances ────────────────────────────────────────────────────
crag_resource: TableResource[CragResponse] = TableResource(Crag, CragResponse)
route_resource: TableResource[RouteResponse] = TableResource(Route, RouteResponse)
ascent_resource: TableResource[AscentResponse] = TableResource(Ascent, AscentResponse)
