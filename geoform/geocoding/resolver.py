"""Address resolver — cached coordinates first, the geocoding provider second."""

from __future__ import annotations

import structlog

from geoform.errors import GeocodingError
from geoform.geocoding.client import GoogleGeocoder
from geoform.repositories.submission import SubmissionRepository
from geoform.schemas.submission import GeocodeResult

logger = structlog.get_logger()


class AddressResolver:
    """Turns an address string into coordinates and owns the geocode cache.

    A miss stages a write-through entry in the repository's session. It is
    committed by the recorder along with the submission, so the address only
    becomes a cache hit for later requests once that submission is stored.
    """

    def __init__(self, repository: SubmissionRepository, geocoder: GoogleGeocoder):
        self.repository = repository
        self.geocoder = geocoder

    async def resolve(self, address: str) -> GeocodeResult:
        """Resolve an address, exact string match against the cache.

        Raises:
            GeocodingError: the provider could not resolve the address
            StoreError: the cache could not be read or written
        """
        cached = await self.repository.find_coordinates(address)
        if cached is not None:
            latitude, longitude = cached
            logger.info("geocode_cache_hit", address=address)
            return GeocodeResult(address=address, latitude=latitude, longitude=longitude, cached=True)

        try:
            latitude, longitude = await self.geocoder.geocode(address)
        except GeocodingError as e:
            logger.warning("geocoding_failed", address=address, status=e.status, error=str(e))
            raise

        await self.repository.stage_coordinates(
            address, latitude, longitude, provider=self.geocoder.provider
        )
        logger.info(
            "geocode_cache_miss",
            address=address,
            latitude=latitude,
            longitude=longitude,
        )
        return GeocodeResult(address=address, latitude=latitude, longitude=longitude)
