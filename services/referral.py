"""
Referral codes that caretakers share so patients can link to them.
"""

import logging
import random
import re
import string
from typing import Optional

from repositories.user import UserRepository

logger = logging.getLogger(__name__)

REFERRAL_CODE_LENGTH = 6
REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits
REFERRAL_CODE_PATTERN = re.compile(r"^[A-Z0-9]{4,12}$")
MAX_GENERATION_ATTEMPTS = 10

_rng = random.SystemRandom()


class ReferralCodeError(ValueError):
    """Raised when a referral code cannot be generated or is not acceptable."""


def generate_random_string(length: int = REFERRAL_CODE_LENGTH) -> str:
    return ''.join(_rng.choice(REFERRAL_CODE_ALPHABET) for _ in range(length))


def normalize_referral_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def is_valid_referral_code(code: str) -> bool:
    return bool(REFERRAL_CODE_PATTERN.match(code))


async def generate_unique_referral_code(user_repo: UserRepository) -> str:
    """Draw random codes until one is not taken by any user."""
    for _ in range(MAX_GENERATION_ATTEMPTS):
        code = generate_random_string()
        if not await user_repo.referral_code_exists(code):
            return code
    logger.error("Could not generate an unused referral code")
    raise ReferralCodeError("Could not generate a unique referral code")
