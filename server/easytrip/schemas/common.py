"""Common Pydantic schemas and helpers."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    """Current time as naive UTC, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime read back from the store."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def default_to_zero(value):
    """Treat an omitted or null stock count as zero."""
    return 0 if value is None else value


class FieldError(BaseModel):
    """Validation error for a single field."""

    field: str = Field(..., description="Name of the invalid field")
    message: str = Field(..., description="Validation error message")


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable summary")
    errors: Optional[List[FieldError]] = Field(None, description="Field-level errors")
