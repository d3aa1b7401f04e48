"""Submission schemas for the form API and the resolve/record path."""

from typing import Optional

from pydantic import BaseModel, Field


class SubmissionIn(BaseModel):
    """Form body posted to /submit. Fields are taken as received."""

    name: str
    email: str
    address: str = Field(min_length=1)
    newsletter: bool


class GeocodeResult(BaseModel):
    """Coordinates resolved for one address string."""

    address: str
    latitude: float
    longitude: float
    cached: bool = False


class Submission(BaseModel):
    """A form entry with its resolved coordinates, ready to be recorded."""

    name: str
    email: str
    address: str
    newsletter: bool
    latitude: float
    longitude: float

    def mirror_row(self) -> list:
        """Spreadsheet row, fixed column order: name, email, address, newsletter."""
        return [self.name, self.email, self.address, self.newsletter]


class RecordOutcome(BaseModel):
    """Result of recording a submission."""

    submission_id: int
    latitude: float
    longitude: float
    mirrored_range: Optional[str] = None


class AddressOut(BaseModel):
    address: str
    latitude: float
    longitude: float


class SubmitResponse(BaseModel):
    message: str
