"""
User model for authentication, roles and patient/caretaker linking.
"""

from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class UserType(str, PyEnum):
    PATIENT = "patient"
    CARETAKER = "caretaker"


class User(Base):
    """A patient or a caretaker account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    user_type = Column(
        SQLEnum(UserType, name="user_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    # Patients point at their caretaker; caretakers own a referral code
    caretaker_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    referral_code = Column(String(12), unique=True, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    caretaker = relationship("User", remote_side=[id], back_populates="patients")
    patients = relationship("User", back_populates="caretaker")

    screenings = relationship("Screening", back_populates="user", cascade="all, delete-orphan")
    falls = relationship("Fall", back_populates="user", cascade="all, delete-orphan")
    exercise_logs = relationship("ExerciseLog", back_populates="user", cascade="all, delete-orphan")
    favorites = relationship("TaiChiFavorite", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', user_type='{self.user_type}')>"
