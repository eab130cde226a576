"""Hotel-related Pydantic schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import default_to_zero, to_naive_utc


class CreateHotelRequest(BaseModel):
    """Request schema for creating a hotel."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, description="Hotel name")
    location: str = Field(..., min_length=1, max_length=255, description="City or address")
    price_per_night: float = Field(..., ge=0, alias="pricePerNight", description="Nightly price")
    amenities: list[str] = Field(default_factory=list, description="Amenities offered")
    available_rooms: int = Field(0, ge=0, alias="availableRooms", description="Rooms in stock")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation time (ISO 8601)")

    @field_validator("available_rooms", mode="before")
    @classmethod
    def default_rooms(cls, v):
        return default_to_zero(v)

    @field_validator("amenities", mode="before")
    @classmethod
    def default_amenities(cls, v):
        return [] if v is None else v

    @field_validator("amenities")
    @classmethod
    def normalize_amenities(cls, v: list[str]) -> list[str]:
        """Strip names, drop blanks and duplicates, keep first-seen order."""
        seen: dict[str, None] = {}
        for amenity in v:
            amenity = amenity.strip()
            if amenity:
                seen.setdefault(amenity, None)
        return list(seen)

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v) if v else v


class HotelSearchCriteria(BaseModel):
    """
    Optional hotel search filters, exactly as received.

    Values stay raw strings; turning them into query conditions (and
    rejecting malformed ones) belongs to the catalog.
    """

    location: Optional[str] = None
    max_price: Optional[str] = None
    amenities: Optional[str] = None


class Hotel(BaseModel):
    """Hotel response schema."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(..., description="Unique hotel ID")
    name: str
    location: str
    price_per_night: float = Field(..., alias="pricePerNight")
    amenities: list[str]
    available_rooms: int = Field(..., alias="availableRooms")
    created_at: datetime = Field(..., alias="createdAt")


class HotelResponse(BaseModel):
    """Envelope for a single created hotel."""

    success: bool = True
    message: str
    data: Hotel


class HotelListResponse(BaseModel):
    """Envelope for hotel search results."""

    success: bool = True
    count: int
    data: list[Hotel]
