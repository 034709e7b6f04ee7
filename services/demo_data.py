"""
Demo data generator for development.

Replaces a patient's falls, exercise logs and screenings with eight months of
plausible history so the analytics screens have something to show.
"""

import logging
import random
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.exercise import ExerciseLog
from models.fall import Fall
from models.screening import Screening
from models.user import User
from repositories.exercise import ExerciseLogRepository
from repositories.fall import FallRepository
from repositories.screening import ScreeningRepository
from services.analytics import months_before

logger = logging.getLogger(__name__)

DEMO_PERIOD_MONTHS = 8
DEMO_EXERCISE_WEEKS = 32

FALL_LOCATIONS = ['Living Room', 'Kitchen', 'Bathroom', 'Bedroom', 'Garden', 'Stairs', 'Driveway']
FALL_ACTIVITIES = ['Walking', 'Getting up from chair', 'Showering', 'Cooking', 'Gardening', 'Going to bathroom', 'Getting dressed']
FALL_CAUSES = ['Slipped on wet floor', 'Lost balance', 'Tripped on rug', 'Dizziness', 'Weakness in legs', 'Poor lighting', 'Cluttered space']
FALL_INJURIES = ['Minor bruising', 'Scraped knee', 'Sore hip', 'Twisted ankle', 'None', 'Minor cut', 'Sore shoulder']


class DemoDataService:
    """Wipes and regenerates one patient's history."""

    def __init__(self, db: AsyncSession, rng: Optional[random.Random] = None):
        self.db = db
        self.rng = rng or random.Random()

    def _random_day(self, start: date, end: date) -> date:
        return start + timedelta(days=self.rng.randint(0, (end - start).days))

    def _build_falls(self, user_id: int, start: date, today: date) -> List[Fall]:
        count = self.rng.randint(3, 5)
        days = sorted(self._random_day(start, today) for _ in range(count))
        return [
            Fall(
                user_id=user_id,
                fall_date=day,
                location=self.rng.choice(FALL_LOCATIONS),
                activity=self.rng.choice(FALL_ACTIVITIES),
                cause=self.rng.choice(FALL_CAUSES),
                injuries=self.rng.choice(FALL_INJURIES),
            )
            for day in days
        ]

    def _build_exercise(self, user_id: int, start: date) -> List[ExerciseLog]:
        logs = []
        for week in range(DEMO_EXERCISE_WEEKS):
            # Roughly one week in ten without any exercise
            if self.rng.random() < 0.1:
                minutes = 0
            else:
                minutes = self.rng.randint(30, 119)
            logs.append(ExerciseLog(user_id=user_id, week_start=start + timedelta(weeks=week), minutes=minutes))
        return logs

    def _build_screenings(self, user_id: int, start: date, today: date) -> List[Screening]:
        count = self.rng.randint(2, 3)
        days = sorted(self._random_day(start, today) for _ in range(count))
        return [
            Screening(
                user_id=user_id,
                unsteady=self.rng.random() < 0.4,
                worries=self.rng.random() < 0.6,
                fallen=self.rng.random() < 0.3,
                fall_count=self.rng.randint(1, 3),
                fall_injured='Minor injuries' if self.rng.random() < 0.5 else 'No injuries',
                created_at=datetime.combine(day, time(hour=10), tzinfo=timezone.utc),
            )
            for day in days
        ]

    async def regenerate(self, user: User, today: Optional[date] = None) -> dict:
        today = today or date.today()
        start = months_before(today, DEMO_PERIOD_MONTHS)
        user_id = user.id
        user_label = user.full_name or user.email

        try:
            await FallRepository(self.db).delete_for_user(user_id)
            await ExerciseLogRepository(self.db).delete_for_user(user_id)
            await ScreeningRepository(self.db).delete_for_user(user_id)

            falls = self._build_falls(user_id, start, today)
            exercise = self._build_exercise(user_id, start)
            screenings = self._build_screenings(user_id, start, today)

            self.db.add_all([*falls, *exercise, *screenings])
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Error generating demo data for user {user_id}: {e}")
            raise

        logger.info(
            f"Generated demo data for user {user_id}: {len(falls)} falls, "
            f"{len(exercise)} exercise weeks, {len(screenings)} screenings"
        )

        return {
            "message": "Fake data generated successfully",
            "user": user_label,
            "falls_generated": len(falls),
            "exercise_weeks_generated": len(exercise),
            "screenings_generated": len(screenings),
            "data_period": f"{DEMO_PERIOD_MONTHS} months",
        }
