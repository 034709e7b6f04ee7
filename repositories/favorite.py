from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError

from models.favorite import TaiChiFavorite
from repositories.base import BaseRepository


class FavoriteRepository(BaseRepository[TaiChiFavorite, None, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(TaiChiFavorite, db)

    async def get_location_ids(self, user_id: int) -> List[int]:
        query = (
            select(TaiChiFavorite.location_id)
            .where(TaiChiFavorite.user_id == user_id)
            .order_by(TaiChiFavorite.location_id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add(self, user_id: int, location_id: int) -> bool:
        """Add a favorite. Returns False if it was already there."""
        existing = await self.db.get(TaiChiFavorite, (user_id, location_id))
        if existing:
            return False
        self.db.add(TaiChiFavorite(user_id=user_id, location_id=location_id))
        try:
            await self.db.commit()
        except IntegrityError:
            # Added concurrently
            await self.db.rollback()
            return False
        return True

    async def remove(self, user_id: int, location_id: int) -> bool:
        query = delete(TaiChiFavorite).where(
            TaiChiFavorite.user_id == user_id,
            TaiChiFavorite.location_id == location_id,
        )
        result = await self.db.execute(query)
        await self.db.commit()
        return result.rowcount > 0
