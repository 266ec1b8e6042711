"""
Ticklist Backend — TableResource Unit Tests
=============================================

What:  Tests for the generic list/create logic.
How:   Uses a mock AsyncSession (no database); inspects the statements the
       resource hands to it.

What we test:
    ✅ list_all maps every row through the response schema
    ✅ list_all on an empty table returns []
    ✅ create binds a fresh id first, then the fields in declaration order
    ✅ create discards a client-supplied id
    ✅ SQLAlchemy and driver OS errors become DatabaseError with the cause chained
    ✅ a failed create is rolled back
"""

import datetime
import logging
import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from ticklist.exceptions import DatabaseError
from ticklist.models import Ascent, Crag
from ticklist.schemas import AscentCreate, CragCreate, RouteCreate
from ticklist.services.resource_service import (
    ascent_resource,
    crag_resource,
    route_resource,
)


def _rows_result(rows):
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


class TestListAll:

    @pytest.mark.asyncio
    async def test_list_empty_table(self, mock_db_session):
        mock_db_session.execute.return_value = _rows_result([])

        assert await crag_resource.list_all(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_maps_rows(self, mock_db_session):
        rows = [
            Crag(id=uuid.uuid4(), name="Stanage", location="UK"),
            Crag(id=uuid.uuid4(), name="Fontainebleau", location="France"),
        ]
        mock_db_session.execute.return_value = _rows_result(rows)

        result = await crag_resource.list_all(mock_db_session)

        assert [r.name for r in result] == ["Stanage", "Fontainebleau"]
        assert result[0].id == rows[0].id
        assert result[1].location == "France"

    @pytest.mark.asyncio
    async def test_list_selects_whole_table_without_ordering(self, mock_db_session):
        mock_db_session.execute.return_value = _rows_result([])

        await ascent_resource.list_all(mock_db_session)

        stmt = mock_db_session.execute.call_args.args[0]
        sql = str(stmt)
        assert "FROM ascent" in sql
        assert "WHERE" not in sql
        assert "ORDER BY" not in sql

    @pytest.mark.asyncio
    async def test_list_keeps_calendar_date(self, mock_db_session):
        row = Ascent(id=uuid.uuid4(), route_id=uuid.uuid4(), date=datetime.date(2024, 5, 18))
        mock_db_session.execute.return_value = _rows_result([row])

        result = await ascent_resource.list_all(mock_db_session)

        assert result[0].model_dump(mode="json")["date"] == "2024-05-18"

    @pytest.mark.asyncio
    async def test_list_failure_raises_database_error(self, mock_db_session):
        cause = OperationalError("SELECT", {}, Exception("server closed the connection"))
        mock_db_session.execute.side_effect = cause

        with pytest.raises(DatabaseError) as exc_info:
            await crag_resource.list_all(mock_db_session)

        assert exc_info.value.__cause__ is cause
        assert "FROM crag" in exc_info.value.message
        assert exc_info.value.context == {"table": "crag", "operation": "list"}


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_inserts_id_then_fields(self, mock_db_session):
        payload = CragCreate(name="Peak District", location="UK")

        new_id = await crag_resource.create(mock_db_session, payload)

        stmt = mock_db_session.execute.call_args.args[0]
        assert str(stmt) == "INSERT INTO crag (id, name, location) VALUES (:id, :name, :location)"
        params = stmt.compile().params
        assert params == {"id": new_id, "name": "Peak District", "location": "UK"}
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_route_column_order(self, mock_db_session):
        crag_id = uuid.uuid4()
        payload = RouteCreate(crag_id=crag_id, name="Flying Buttress")

        await route_resource.create(mock_db_session, payload)

        stmt = mock_db_session.execute.call_args.args[0]
        assert str(stmt) == "INSERT INTO route (id, crag_id, name) VALUES (:id, :crag_id, :name)"
        assert stmt.compile().params["crag_id"] == crag_id

    @pytest.mark.asyncio
    async def test_create_ignores_client_id(self, mock_db_session):
        client_id = uuid.uuid4()
        payload = AscentCreate(id=client_id, route_id=uuid.uuid4(), date="2024-05-18")

        new_id = await ascent_resource.create(mock_db_session, payload)

        assert new_id != client_id
        assert new_id.version == 7
        params = mock_db_session.execute.call_args.args[0].compile().params
        assert params["id"] == new_id
        assert params["date"] == datetime.date(2024, 5, 18)

    @pytest.mark.asyncio
    async def test_identical_payloads_create_distinct_rows(self, mock_db_session):
        payload = CragCreate(name="Stanage", location="UK")

        first = await crag_resource.create(mock_db_session, payload)
        second = await crag_resource.create(mock_db_session, payload)

        assert first != second
        assert first < second
        assert mock_db_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_create_failure_raises_database_error(self, mock_db_session):
        cause = IntegrityError("INSERT", {}, Exception("foreign key violation"))
        mock_db_session.execute.side_effect = cause
        payload = RouteCreate(crag_id=uuid.uuid4(), name="Goliath")

        with pytest.raises(DatabaseError) as exc_info:
            await route_resource.create(mock_db_session, payload)

        assert exc_info.value.__cause__ is cause
        assert exc_info.value.message.startswith("INSERT INTO route")
        mock_db_session.commit.assert_not_awaited()
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure_raises_database_error(self, mock_db_session):
        mock_db_session.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk I/O error"))

        with pytest.raises(DatabaseError):
            await crag_resource.create(mock_db_session, CragCreate(name="Kalymnos", location="Greece"))

        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_successful_create_does_not_roll_back(self, mock_db_session):
        await crag_resource.create(mock_db_session, CragCreate(name="Ceuse", location="France"))
        mock_db_session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_rollback_keeps_original_error(self, mock_db_session, caplog):
        caplog.set_level(logging.WARNING, logger="ticklist.services.resource_service")
        cause = IntegrityError("INSERT", {}, Exception("foreign key violation"))
        mock_db_session.execute.side_effect = cause
        mock_db_session.rollback.side_effect = OperationalError("ROLLBACK", {}, Exception("connection lost"))

        with pytest.raises(DatabaseError) as exc_info:
            await route_resource.create(mock_db_session, RouteCreate(crag_id=uuid.uuid4(), name="Goliath"))

        assert exc_info.value.__cause__ is cause
        assert any("Rollback failed for route" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_unwrapped_driver_error_raises_database_error(self, mock_db_session):
        cause = ConnectionRefusedError("connection refused")
        mock_db_session.execute.side_effect = cause

        with pytest.raises(DatabaseError) as exc_info:
            await crag_resource.create(mock_db_session, CragCreate(name="Kalymnos", location="Greece"))

        assert exc_info.value.__cause__ is cause
        mock_db_session.rollback.assert_awaited_once()
