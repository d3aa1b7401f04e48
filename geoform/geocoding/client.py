"""Google Geocoding API client."""

from __future__ import annotations

import asyncio

import requests
import structlog

from geoform.errors import GeocodingError

logger = structlog.get_logger()

GOOGLE_GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class GoogleGeocoder:
    """Async wrapper around a synchronous requests session for forward geocoding."""

    provider = "google"

    def __init__(self, api_key: str, timeout: float = 10.0, session: requests.Session | None = None):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    async def geocode(self, address: str) -> tuple[float, float]:
        """Return (latitude, longitude) of the first result for an address.

        Args:
            address: Raw address string, sent URL-encoded as-is

        Raises:
            GeocodingError: on any non-OK status, transport failure or
                unexpected response shape. Never retried here.
        """
        # requests is synchronous — run in thread pool
        return await asyncio.to_thread(self._geocode_sync, address)

    def _geocode_sync(self, address: str) -> tuple[float, float]:
        try:
            response = self.session.get(
                GOOGLE_GEOCODING_URL,
                params={"address": address, "key": self.api_key},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise GeocodingError("TIMEOUT", f"Geocoding timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise GeocodingError("UNREACHABLE", f"Geocoding request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise GeocodingError(
                "MALFORMED_RESPONSE",
                f"Geocoding returned non-JSON body (HTTP {response.status_code})",
            ) from e

        status = data.get("status") if isinstance(data, dict) else None
        if status != "OK":
            raise GeocodingError(str(status or f"HTTP_{response.status_code}"))

        try:
            location = data["results"][0]["geometry"]["location"]
            latitude, longitude = float(location["lat"]), float(location["lng"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GeocodingError("MALFORMED_RESPONSE", f"Unexpected geocoding payload: {e}") from e

        logger.debug("address_geocoded", latitude=latitude, longitude=longitude)
        return latitude, longitude

    def close(self) -> None:
        self.session.close()
