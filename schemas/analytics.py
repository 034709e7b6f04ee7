from datetime import date, datetime
from typing import List, Optional
from pydantic import Field

from schemas.common import BaseSchema
from schemas.user import PatientSummary


class RiskFactors(BaseSchema):
    has_recent_falls: bool = Field(..., alias="hasRecentFalls")
    fall_count: int = Field(..., alias="fallCount", ge=0)
    low_exercise: int = Field(..., alias="lowExercise", ge=0)
    screening_risk: bool = Field(..., alias="screeningRisk")


class ExercisePoint(BaseSchema):
    week_start: date
    minutes: int


class FallPoint(BaseSchema):
    fall_date: date
    location: Optional[str] = None
    activity: Optional[str] = None
    cause: Optional[str] = None
    injuries: Optional[str] = None


class LatestScreening(BaseSchema):
    unsteady: bool
    worries: bool
    fallen: bool
    fall_count: Optional[int] = None
    fall_injured: Optional[str] = None
    created_at: Optional[datetime] = None


class AnalyticsResponse(BaseSchema):
    exercise_logs: List[ExercisePoint] = Field(..., alias="exerciseLogs")
    falls: List[FallPoint]
    screening: Optional[LatestScreening] = None
    risk_score: int = Field(..., alias="riskScore", ge=0, le=100)
    risk_factors: RiskFactors = Field(..., alias="riskFactors")


class PatientAnalyticsResponse(AnalyticsResponse):
    patient: PatientSummary


class DemoDataSummary(BaseSchema):
    message: str
    user: Optional[str] = None
    falls_generated: int = Field(..., alias="fallsGenerated")
    exercise_weeks_generated: int = Field(..., alias="exerciseWeeksGenerated")
    screenings_generated: int = Field(..., alias="screeningsGenerated")
    data_period: str = Field(..., alias="dataPeriod")
