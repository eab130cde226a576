"""Flight-related Pydantic schemas."""

from pydantic import BaseModel, Field

from .trip import CreateTripRequest, Trip


class CreateFlightRequest(CreateTripRequest):
    """Request schema for creating a flight."""

    airline: str = Field(..., min_length=1, max_length=255, description="Operating airline")


class Flight(Trip):
    """Flight response schema."""

    airline: str


class FlightResponse(BaseModel):
    """Envelope for a single created flight."""

    success: bool = True
    message: str
    data: Flight


class FlightListResponse(BaseModel):
    """Envelope for flight search results."""

    success: bool = True
    count: int
    data: list[Flight]
