"""SQLAlchemy ORM models."""

from geoform.models.base import Base
from geoform.models.geocoded_address import GeocodedAddress
from geoform.models.submission import FormSubmission

__all__ = [
    "Base",
    "GeocodedAddress",
    "FormSubmission",
]
