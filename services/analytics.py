"""
Per-patient analytics: recent exercise, recent falls, latest screening and risk score.
"""

import calendar
import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from repositories.exercise import ExerciseLogRepository
from repositories.fall import FallRepository
from repositories.screening import ScreeningRepository
from schemas.analytics import (
    AnalyticsResponse,
    ExercisePoint,
    FallPoint,
    LatestScreening,
    PatientAnalyticsResponse,
    RiskFactors as RiskFactorsSchema,
)
from schemas.user import PatientSummary
from services.risk import (
    EXERCISE_WINDOW_WEEKS,
    FALLS_WINDOW_MONTHS,
    RiskFactors,
    calculate_risk_score,
    count_low_exercise_weeks,
    screening_flags_risk,
)

logger = logging.getLogger(__name__)


def months_before(day: date, months: int) -> date:
    """Same day-of-month `months` earlier, clamped to the end of shorter months."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


class AnalyticsService:
    """Builds the analytics payload shown to patients and their caretakers."""

    def __init__(self, db: AsyncSession):
        self.exercise_repo = ExerciseLogRepository(db)
        self.fall_repo = FallRepository(db)
        self.screening_repo = ScreeningRepository(db)

    async def for_patient(self, user_id: int, today: Optional[date] = None) -> AnalyticsResponse:
        today = today or date.today()
        exercise_since = today - timedelta(weeks=EXERCISE_WINDOW_WEEKS)
        falls_since = months_before(today, FALLS_WINDOW_MONTHS)

        exercise_logs = await self.exercise_repo.get_since(user_id, exercise_since)
        falls = await self.fall_repo.get_since(user_id, falls_since)
        screening = await self.screening_repo.get_latest(user_id)

        factors = RiskFactors(
            fall_count=len(falls),
            low_exercise_weeks=count_low_exercise_weeks(log.minutes for log in exercise_logs),
            screening_risk=(
                screening_flags_risk(screening.unsteady, screening.worries, screening.fallen)
                if screening else False
            ),
        )
        score = calculate_risk_score(factors)
        logger.debug(f"Risk score for user {user_id}: {score} ({factors})")

        return AnalyticsResponse(
            exercise_logs=[ExercisePoint.model_validate(log) for log in exercise_logs],
            falls=[FallPoint.model_validate(fall) for fall in falls],
            screening=LatestScreening.model_validate(screening) if screening else None,
            risk_score=score,
            risk_factors=RiskFactorsSchema(
                has_recent_falls=factors.has_recent_falls,
                fall_count=factors.fall_count,
                low_exercise=factors.low_exercise_weeks,
                screening_risk=factors.screening_risk,
            ),
        )

    async def for_linked_patient(self, patient: User, today: Optional[date] = None) -> PatientAnalyticsResponse:
        analytics = await self.for_patient(patient.id, today=today)
        return PatientAnalyticsResponse(
            patient=PatientSummary.model_validate(patient),
            **analytics.model_dump(),
        )
