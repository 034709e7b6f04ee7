from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator

from schemas.common import BaseSchema, RequestSchema, blank_to_none


class ScreeningCreate(RequestSchema):
    """Answers to the three STEADI questions."""

    unsteady: bool
    worries: bool
    fallen: bool
    fall_count: Optional[int] = Field(default=None, alias="fallCount", ge=0)
    fall_injured: Optional[str] = Field(default=None, alias="fallInjured")

    @field_validator("fall_count", "fall_injured", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return blank_to_none(value)


class ScreeningRead(BaseSchema):
    id: int
    user_id: int
    unsteady: bool
    worries: bool
    fallen: bool
    fall_count: Optional[int] = None
    fall_injured: Optional[str] = None
    created_at: Optional[datetime] = None


class ScreeningCreatedResponse(BaseSchema):
    message: str
    screening: ScreeningRead


class ScreeningListResponse(BaseSchema):
    screenings: List[ScreeningRead]
