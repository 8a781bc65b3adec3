"""Health-related Pydantic schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"


class HealthResponse(BaseModel):
    """Health ping response schema."""

    status: HealthStatus = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    timestamp: datetime = Field(..., description="Current server time (ISO 8601)")
    version: str = Field(..., description="API version")
    active_sessions: int = Field(..., ge=0, description="Client session contexts currently held")
