from datetime import date, datetime
from typing import List, Optional
from pydantic import Field

from schemas.common import BaseSchema, RequestSchema


class ExerciseSubmit(RequestSchema):
    week_start: date = Field(..., alias="weekStart")
    minutes: int = Field(..., ge=0, strict=True)


class ExerciseLogRead(BaseSchema):
    id: int
    user_id: int
    week_start: date
    minutes: int
    created_at: Optional[datetime] = None


class ExerciseResponse(BaseSchema):
    exercise: ExerciseLogRead


class ExerciseLogListResponse(BaseSchema):
    exercise_logs: List[ExerciseLogRead]
