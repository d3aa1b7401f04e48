"""Test fixtures and configuration."""

from types import SimpleNamespace
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from geoform.api.dependencies import get_geocoder, get_mirror, get_repository
from geoform.errors import StoreError
from geoform.main import app
from geoform.schemas.submission import AddressOut, Submission


class InMemoryRepository:
    """Stand-in for SubmissionRepository with the same staged/committed split."""

    def __init__(self):
        self.cache: dict[str, tuple[float, float]] = {}
        self.rows: list[Submission] = []
        self._staged_cache: dict[str, tuple[float, float]] = {}
        self._staged_rows: list[Submission] = []
        self.fail_on: Optional[str] = None
        self.events: list[str] = []

    def _maybe_fail(self, op: str) -> None:
        if self.fail_on == op:
            raise StoreError(f"{op} failed")

    async def find_coordinates(self, address: str):
        self._maybe_fail("find_coordinates")
        return self.cache.get(address)

    async def stage_coordinates(self, address, latitude, longitude, provider="google"):
        self._maybe_fail("stage_coordinates")
        self._staged_cache.setdefault(address, (latitude, longitude))

    async def add_submission(self, submission: Submission):
        self._maybe_fail("add_submission")
        self._staged_rows.append(submission)
        return SimpleNamespace(id=len(self.rows) + len(self._staged_rows))

    async def commit(self) -> None:
        self._maybe_fail("commit")
        for address, coords in self._staged_cache.items():
            self.cache.setdefault(address, coords)
        self.rows.extend(self._staged_rows)
        self._staged_cache.clear()
        self._staged_rows.clear()
        self.events.append("commit")

    def rollback(self) -> None:
        self._staged_cache.clear()
        self._staged_rows.clear()

    async def list_addresses(self):
        self._maybe_fail("list_addresses")
        return [
            AddressOut(address=r.address, latitude=r.latitude, longitude=r.longitude)
            for r in self.rows
        ]


@pytest.fixture
def repository():
    """In-memory store shared across requests of one test."""
    return InMemoryRepository()


@pytest.fixture
def mock_geocoder():
    """Mock Google geocoder returning a fixed Melbourne coordinate."""
    geocoder = MagicMock()
    geocoder.provider = "google"
    geocoder.geocode = AsyncMock(return_value=(-37.81, 144.96))
    return geocoder


@pytest.fixture
def mock_mirror(repository):
    """Mock Sheets mirror that records the order of appends relative to commits."""
    mirror = MagicMock()

    async def append_row(row):
        repository.events.append("append")
        return "Melbourne!A2:D2"

    mirror.append_row = AsyncMock(side_effect=append_row)
    return mirror


@pytest.fixture
def client(repository, mock_geocoder, mock_mirror):
    """TestClient with the store and third-party clients overridden."""

    async def _repository():
        # One request = one session: anything not committed is discarded
        try:
            yield repository
        finally:
            repository.rollback()

    app.dependency_overrides[get_repository] = _repository
    app.dependency_overrides[get_geocoder] = lambda: mock_geocoder
    app.dependency_overrides[get_mirror] = lambda: mock_mirror
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ann():
    return {
        "name": "Ann",
        "email": "a@x.com",
        "address": "1 Main St",
        "newsletter": True,
    }


@pytest.fixture
def bob():
    return {
        "name": "Bob",
        "email": "b@x.com",
        "address": "1 Main St",
        "newsletter": False,
    }
