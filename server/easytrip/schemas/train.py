"""Train-related Pydantic schemas."""

from pydantic import BaseModel, Field

from .trip import CreateTripRequest, Trip


class CreateTrainRequest(CreateTripRequest):
    """Request schema for creating a train."""

    train_name: str = Field(..., min_length=1, max_length=255, alias="trainName", description="Train name")


class Train(Trip):
    """Train response schema."""

    train_name: str = Field(..., alias="trainName")


class TrainResponse(BaseModel):
    """Envelope for a single created train."""

    success: bool = True
    message: str
    data: Train


class TrainListResponse(BaseModel):
    """Envelope for train search results."""

    success: bool = True
    count: int
    data: list[Train]
