"""
SQLAlchemy ORM models for FallGuard Backend.

Contains all database models organized by module.
"""

from .user import User, UserType
from .screening import Screening
from .fall import Fall
from .exercise import ExerciseLog
from .favorite import TaiChiFavorite

__all__ = [
    "User",
    "UserType",
    "Screening",
    "Fall",
    "ExerciseLog",
    "TaiChiFavorite",
]
