import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import get_password_hash, verify_password
from models.user import User, UserType
from repositories.user import UserRepository
from schemas.auth import UserRegister
from services.referral import (
    ReferralCodeError,
    generate_unique_referral_code,
    normalize_referral_code,
)

logger = logging.getLogger(__name__)

MAX_REGISTRATION_ATTEMPTS = 3


class EmailAlreadyRegistered(Exception):
    pass


class UnknownReferralCode(Exception):
    pass


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def register_user(db: AsyncSession, data: UserRegister) -> User:
    """Create a patient or caretaker account.

    Caretakers get a fresh referral code. A patient who registers with a
    caretaker's referral code is linked to that caretaker straight away.
    """
    user_repo = UserRepository(db)
    email = normalize_email(data.email)

    if await user_repo.email_exists(email):
        raise EmailAlreadyRegistered(email)

    caretaker_id = None
    if data.user_type == UserType.PATIENT and data.referral_code:
        caretaker = await user_repo.get_caretaker_by_referral_code(normalize_referral_code(data.referral_code))
        if not caretaker:
            raise UnknownReferralCode(data.referral_code)
        caretaker_id = caretaker.id

    password_hash = get_password_hash(data.password)

    for attempt in range(1, MAX_REGISTRATION_ATTEMPTS + 1):
        user = User(
            email=email,
            password_hash=password_hash,
            full_name=data.full_name,
            user_type=data.user_type,
            caretaker_id=caretaker_id,
        )
        if data.user_type == UserType.CARETAKER:
            user.referral_code = await generate_unique_referral_code(user_repo)

        try:
            return await user_repo.create_user(user)
        except IntegrityError:
            await db.rollback()
            # Lost a race on the unique email, or on the referral code
            if await user_repo.email_exists(email):
                raise EmailAlreadyRegistered(email)
            if data.user_type != UserType.CARETAKER:
                raise
            logger.warning(f"Referral code collision registering {email} (attempt {attempt})")

    raise ReferralCodeError("Could not generate a unique referral code")


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
    user = await UserRepository(db).get_by_email(normalize_email(email))
    if not user or not verify_password(password, user.password_hash):
        return None
    return user
