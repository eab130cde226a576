"""Schemas shared by scheduled trips (flights and trains)."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import default_to_zero, to_naive_utc


class CreateTripRequest(BaseModel):
    """Route, schedule, fare and seat fields common to flight and train creation."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    origin: str = Field(..., min_length=1, max_length=255, alias="from", description="Origin")
    destination: str = Field(..., min_length=1, max_length=255, alias="to", description="Destination")
    departure_time: datetime = Field(..., alias="departureTime", description="Departure (ISO 8601)")
    arrival_time: datetime = Field(..., alias="arrivalTime", description="Arrival (ISO 8601)")
    price: float = Field(..., ge=0, description="Fare")
    available_seats: int = Field(0, ge=0, alias="availableSeats", description="Seats in stock")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation time (ISO 8601)")

    @field_validator("available_seats", mode="before")
    @classmethod
    def default_seats(cls, v):
        return default_to_zero(v)

    @field_validator("departure_time", "arrival_time", "created_at")
    @classmethod
    def normalize_times(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v) if v else v


class TripSearchCriteria(BaseModel):
    """Optional route and date filters, exactly as received."""

    origin: Optional[str] = None
    destination: Optional[str] = None
    date: Optional[str] = None


class Trip(BaseModel):
    """Fields shared by flight and train responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    origin: str = Field(..., alias="from")
    destination: str = Field(..., alias="to")
    departure_time: datetime = Field(..., alias="departureTime")
    arrival_time: datetime = Field(..., alias="arrivalTime")
    price: float
    available_seats: int = Field(..., alias="availableSeats")
    created_at: datetime = Field(..., alias="createdAt")
