from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from models.screening import Screening
from repositories.base import BaseRepository
from schemas.screening import ScreeningCreate


class ScreeningRepository(BaseRepository[Screening, ScreeningCreate, None]):

    def __init__(self, db: AsyncSession):
        super().__init__(Screening, db)

    async def create_for_user(self, user_id: int, data: ScreeningCreate) -> Screening:
        return await self.create({"user_id": user_id, **data.model_dump()})

    async def get_by_user_id(self, user_id: int) -> List[Screening]:
        """All screenings for a user, newest first."""
        query = (
            select(Screening)
            .where(Screening.user_id == user_id)
            .order_by(Screening.created_at.desc(), Screening.id.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_latest(self, user_id: int) -> Optional[Screening]:
        query = (
            select(Screening)
            .where(Screening.user_id == user_id)
            .order_by(Screening.created_at.desc(), Screening.id.desc())
            .limit(1)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def delete_for_user(self, user_id: int) -> None:
        await self.db.execute(delete(Screening).where(Screening.user_id == user_id))
