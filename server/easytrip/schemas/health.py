"""Health-related Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"


class DatabaseStatus(str, Enum):
    """Database connectivity enumeration."""
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class DatabaseHealth(BaseModel):
    """Database section of the health snapshot."""

    status: DatabaseStatus = Field(..., description="Store connectivity")


class HealthResponse(BaseModel):
    """Health check response schema."""

    success: bool = True
    message: str = Field(..., description="Human-readable status line")
    status: HealthStatus = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
    environment: str = Field(..., description="Deployment environment")
    database: DatabaseHealth
    timestamp: datetime = Field(..., description="Current server time (ISO 8601)")
