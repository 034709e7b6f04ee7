"""
User repository for user-specific database operations.
"""

import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from models.user import User, UserType
from repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User, None, None]):
    """User repository with user-specific operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        query = select(User).where(User.email == email)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        return await self.get(user_id)

    async def email_exists(self, email: str) -> bool:
        """Check if email already exists."""
        return await self.get_by_email(email) is not None

    async def get_caretaker_by_referral_code(self, referral_code: str) -> Optional[User]:
        query = select(User).where(
            User.referral_code == referral_code,
            User.user_type == UserType.CARETAKER,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def referral_code_exists(self, referral_code: str) -> bool:
        query = select(User.id).where(User.referral_code == referral_code)
        result = await self.db.execute(query)
        return result.first() is not None

    async def create_user(self, user: User) -> User:
        """Create a new user."""
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Created {user.user_type.value} user {user.id}")
        return user

    async def update_user(self, user: User) -> User:
        """Update an existing user."""
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def get_patients_for_caretaker(self, caretaker_id: int) -> List[User]:
        """Patients linked to a caretaker, newest accounts first."""
        query = (
            select(User)
            .where(User.caretaker_id == caretaker_id, User.user_type == UserType.PATIENT)
            .order_by(User.created_at.desc(), User.id.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_linked_patient(self, caretaker_id: int, patient_id: int) -> Optional[User]:
        """Get a patient only if it is linked to the given caretaker."""
        query = select(User).where(
            User.id == patient_id,
            User.caretaker_id == caretaker_id,
            User.user_type == UserType.PATIENT,
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
