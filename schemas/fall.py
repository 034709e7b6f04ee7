from datetime import date, datetime
from typing import Optional
from pydantic import Field, field_validator

from schemas.common import BaseSchema, RequestSchema, blank_to_none


class FallCreate(RequestSchema):
    fall_date: Optional[date] = None
    location: Optional[str] = Field(default=None, max_length=255)
    activity: Optional[str] = Field(default=None, max_length=255)
    cause: Optional[str] = Field(default=None, max_length=255)
    injuries: Optional[str] = None

    @field_validator("fall_date", "location", "activity", "cause", "injuries", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return blank_to_none(value)


class FallRead(BaseSchema):
    id: int
    user_id: int
    fall_date: date
    location: Optional[str] = None
    activity: Optional[str] = None
    cause: Optional[str] = None
    injuries: Optional[str] = None
    created_at: Optional[datetime] = None
