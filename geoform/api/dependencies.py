"""FastAPI dependencies wiring the store and third-party clients into the core."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from geoform.database import get_db
from geoform.geocoding.client import GoogleGeocoder
from geoform.geocoding.resolver import AddressResolver
from geoform.repositories.submission import SubmissionRepository
from geoform.sheets.client import SheetsMirror
from geoform.submissions.recorder import SubmissionRecorder


def get_geocoder(request: Request) -> GoogleGeocoder:
    """Geocoder built once at startup (see lifespan in geoform.main)."""
    return request.app.state.geocoder


def get_mirror(request: Request) -> SheetsMirror:
    """Sheets mirror built once at startup (see lifespan in geoform.main)."""
    return request.app.state.mirror


def get_repository(db: AsyncSession = Depends(get_db)) -> SubmissionRepository:
    return SubmissionRepository(db)


def get_resolver(
    repository: SubmissionRepository = Depends(get_repository),
    geocoder: GoogleGeocoder = Depends(get_geocoder),
) -> AddressResolver:
    return AddressResolver(repository, geocoder)


def get_recorder(
    repository: SubmissionRepository = Depends(get_repository),
    mirror: SheetsMirror = Depends(get_mirror),
) -> SubmissionRecorder:
    return SubmissionRecorder(repository, mirror)
