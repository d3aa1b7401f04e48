"""Failure taxonomy for the submission path.

Every error carries enough detail for the server log. The HTTP layer maps
all of them to the same short 500 response, so none of this reaches clients.
"""

from __future__ import annotations


class GeoformError(Exception):
    """Base class for failures in the resolve → record path."""


class GeocodingError(GeoformError):
    """The geocoding provider returned a non-OK status or could not be used."""

    def __init__(self, status: str, message: str = ""):
        super().__init__(message or f"Geocoding failed: {status}")
        self.status = status


class RecordError(GeoformError):
    """Recording a submission failed; the remaining steps were skipped."""


class StoreError(RecordError):
    """A persistence read or write failed."""


class MirrorError(RecordError):
    """Appending the submission to the spreadsheet failed."""
