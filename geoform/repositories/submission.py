"""Submission repository — the store behind the resolver, recorder and listing."""

from __future__ import annotations

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from geoform.errors import StoreError
from geoform.models.geocoded_address import GeocodedAddress
from geoform.models.submission import FormSubmission
from geoform.schemas.submission import AddressOut, Submission

logger = structlog.get_logger()


class SubmissionRepository:
    """Reads and writes submissions and cached coordinates in one session.

    Nothing is durable until commit(): a staged cache entry becomes visible
    to other requests together with the submission that caused it.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_coordinates(self, address: str) -> Optional[tuple[float, float]]:
        """Return cached (latitude, longitude) for an exact address match."""
        stmt = select(GeocodedAddress.latitude, GeocodedAddress.longitude).where(
            GeocodedAddress.address == address
        )
        try:
            row = (await self.db.execute(stmt)).first()
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Cache lookup failed: {e}") from e

        if row is None:
            return None
        return float(row.latitude), float(row.longitude)

    async def stage_coordinates(
        self,
        address: str,
        latitude: float,
        longitude: float,
        provider: str = "google",
    ) -> None:
        """Stage a cache entry; an existing entry for the address is kept as is."""
        stmt = (
            insert(GeocodedAddress)
            .values(address=address, latitude=latitude, longitude=longitude, provider=provider)
            .on_conflict_do_nothing(index_elements=[GeocodedAddress.address])
        )
        try:
            await self.db.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Cache write failed: {e}") from e

    async def add_submission(self, submission: Submission) -> FormSubmission:
        """Insert a submission row and flush it to obtain its id."""
        row = FormSubmission(
            name=submission.name,
            email=submission.email,
            address=submission.address,
            newsletter=submission.newsletter,
            latitude=submission.latitude,
            longitude=submission.longitude,
        )
        self.db.add(row)
        try:
            await self.db.flush()
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Submission insert failed: {e}") from e
        return row

    async def commit(self) -> None:
        try:
            await self.db.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            raise StoreError(f"Commit failed: {e}") from e

    async def list_addresses(self) -> list[AddressOut]:
        """Every stored submission's address and coordinates, in storage order."""
        stmt = select(
            FormSubmission.address,
            FormSubmission.latitude,
            FormSubmission.longitude,
        ).order_by(FormSubmission.id)
        try:
            result = await self.db.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Address listing failed: {e}") from e

        return [
            AddressOut(
                address=row.address,
                latitude=float(row.latitude),
                longitude=float(row.longitude),
            )
            for row in result.all()
        ]
