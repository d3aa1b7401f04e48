"""Form submission model — one row per accepted form entry."""

from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from geoform.models.base import Base, TimestampMixin


class FormSubmission(Base, TimestampMixin):
    __tablename__ = "form_submissions"

    # Serial id doubles as storage order for the address listing
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    newsletter: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    latitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)
    longitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)
