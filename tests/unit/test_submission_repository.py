"""Tests for SubmissionRepository statement building and error mapping (no DB)."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from geoform.errors import StoreError
from geoform.models import FormSubmission, GeocodedAddress
from geoform.repositories.submission import SubmissionRepository
from geoform.schemas.submission import Submission


@pytest.fixture
def mock_db():
    """Mock AsyncSession."""
    db = MagicMock()
    db.execute = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    return db


def _compiled(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestSubmissionRepository:
    """Test cache, insert and listing operations."""

    @pytest.mark.asyncio
    async def test_find_coordinates_hit(self, mock_db):
        result = MagicMock()
        result.first.return_value = SimpleNamespace(latitude=Decimal("-37.8100000"), longitude=Decimal("144.9600000"))
        mock_db.execute.return_value = result

        coords = await SubmissionRepository(mock_db).find_coordinates("1 Main St")

        assert coords == (-37.81, 144.96)
        assert "geocoded_addresses.address = " in _compiled(mock_db.execute.call_args.args[0])

    @pytest.mark.asyncio
    async def test_find_coordinates_miss(self, mock_db):
        result = MagicMock()
        result.first.return_value = None
        mock_db.execute.return_value = result

        assert await SubmissionRepository(mock_db).find_coordinates("1 Main St") is None

    @pytest.mark.asyncio
    async def test_stage_coordinates_ignores_existing_entry(self, mock_db):
        await SubmissionRepository(mock_db).stage_coordinates("1 Main St", -37.81, 144.96)

        sql = _compiled(mock_db.execute.call_args.args[0])
        assert sql.startswith("INSERT INTO geocoded_addresses")
        assert "ON CONFLICT (address) DO NOTHING" in sql
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_submission_flushes_without_commit(self, mock_db):
        submission = Submission(
            name="Ann", email="a@x.com", address="1 Main St",
            newsletter=True, latitude=-37.81, longitude=144.96,
        )

        row = await SubmissionRepository(mock_db).add_submission(submission)

        mock_db.add.assert_called_once_with(row)
        mock_db.flush.assert_awaited_once()
        mock_db.commit.assert_not_awaited()
        assert (row.name, row.address, row.newsletter) == ("Ann", "1 Main St", True)

    @pytest.mark.asyncio
    async def test_list_addresses_in_id_order(self, mock_db):
        result = MagicMock()
        result.all.return_value = [
            SimpleNamespace(address="1 Main St", latitude=Decimal("-37.81"), longitude=Decimal("144.96")),
            SimpleNamespace(address="1 Main St", latitude=Decimal("-37.81"), longitude=Decimal("144.96")),
        ]
        mock_db.execute.return_value = result

        rows = await SubmissionRepository(mock_db).list_addresses()

        assert [r.model_dump() for r in rows] == [
            {"address": "1 Main St", "latitude": -37.81, "longitude": 144.96},
        ] * 2
        assert "ORDER BY form_submissions.id" in _compiled(mock_db.execute.call_args.args[0])

    @pytest.mark.asyncio
    async def test_db_errors_become_store_errors(self, mock_db):
        mock_db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        repo = SubmissionRepository(mock_db)

        with pytest.raises(StoreError):
            await repo.find_coordinates("1 Main St")
        with pytest.raises(StoreError):
            await repo.list_addresses()

    @pytest.mark.asyncio
    async def test_commit_failure_rolls_back(self, mock_db):
        mock_db.commit.side_effect = ConnectionRefusedError()

        with pytest.raises(StoreError):
            await SubmissionRepository(mock_db).commit()

        mock_db.rollback.assert_awaited_once()


class TestTables:
    """Rows are insert-only: a creation timestamp and no update tracking."""

    @pytest.mark.parametrize("model", [FormSubmission, GeocodedAddress])
    def test_only_created_at_timestamp(self, model):
        columns = set(model.__table__.columns.keys())

        assert "created_at" in columns
        assert "updated_at" not in columns
