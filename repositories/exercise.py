"""
Exercise log repository.
"""

import logging
from datetime import date
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.sql import func

from models.exercise import ExerciseLog
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ExerciseLogRepository(BaseRepository[ExerciseLog, None, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(ExerciseLog, db)

    async def get_for_week(self, user_id: int, week_start: date) -> Optional[ExerciseLog]:
        query = select(ExerciseLog).where(
            ExerciseLog.user_id == user_id,
            ExerciseLog.week_start == week_start,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def upsert(self, user_id: int, week_start: date, minutes: int) -> ExerciseLog:
        """Insert the week's minutes, or overwrite them if the week is already logged."""
        existing = await self.get_for_week(user_id, week_start)
        if existing:
            logger.info(f"Overwriting exercise for user {user_id} week {week_start}")
            return await self.update(existing, {"minutes": minutes, "created_at": func.now()})

        return await self.create({"user_id": user_id, "week_start": week_start, "minutes": minutes})

    async def get_by_user_id(self, user_id: int, week_start: Optional[date] = None) -> List[ExerciseLog]:
        """Logs for a user, newest week first, optionally for a single week."""
        query = select(ExerciseLog).where(ExerciseLog.user_id == user_id)
        if week_start is not None:
            query = query.where(ExerciseLog.week_start == week_start)
        query = query.order_by(ExerciseLog.week_start.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_since(self, user_id: int, since: date) -> List[ExerciseLog]:
        """Logs with week_start on or after `since`, oldest first."""
        query = (
            select(ExerciseLog)
            .where(ExerciseLog.user_id == user_id, ExerciseLog.week_start >= since)
            .order_by(ExerciseLog.week_start.asc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def delete_for_user(self, user_id: int) -> None:
        await self.db.execute(delete(ExerciseLog).where(ExerciseLog.user_id == user_id))
