"""Geocoded address cache — coordinates keyed by the raw address string."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from geoform.models.base import Base, TimestampMixin


class GeocodedAddress(Base, TimestampMixin):
    __tablename__ = "geocoded_addresses"

    # Exact string, no normalisation: "1 Main St" and "1 main st" are different keys
    address: Mapped[str] = mapped_column(Text, primary_key=True)

    latitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)
    longitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)
    provider: Mapped[str] = mapped_column(String(50), default="google", nullable=False)
