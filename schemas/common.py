"""
Common schemas used across the application.
"""

from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema for ORM-backed responses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class RequestSchema(BaseModel):
    """Base schema for request bodies; accepts both camelCase aliases and field names."""

    model_config = ConfigDict(populate_by_name=True)


def blank_to_none(value: Any) -> Any:
    """Treat empty form values as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class MessageResponse(BaseModel):
    message: str


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: Optional[str] = None
