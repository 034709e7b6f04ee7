from datetime import date
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from models.fall import Fall
from repositories.base import BaseRepository
from schemas.fall import FallCreate


class FallRepository(BaseRepository[Fall, FallCreate, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(Fall, db)

    async def create_for_user(self, user_id: int, data: FallCreate) -> Fall:
        return await self.create({"user_id": user_id, **data.model_dump()})

    async def get_by_user_id(self, user_id: int) -> List[Fall]:
        """All falls for a user, most recent fall date first."""
        query = (
            select(Fall)
            .where(Fall.user_id == user_id)
            .order_by(Fall.fall_date.desc(), Fall.id.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_since(self, user_id: int, since: date) -> List[Fall]:
        """Falls on or after `since`, most recent first."""
        query = (
            select(Fall)
            .where(Fall.user_id == user_id, Fall.fall_date >= since)
            .order_by(Fall.fall_date.desc(), Fall.id.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def delete_for_user(self, user_id: int) -> None:
        await self.db.execute(delete(Fall).where(Fall.user_id == user_id))
