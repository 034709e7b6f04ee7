"""
ExerciseLog model for weekly exercise minutes.
"""

from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class ExerciseLog(Base):
    """Minutes of exercise for one week. One row per (user, week)."""

    __tablename__ = "exercise_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "week_start", name="uq_exercise_logs_user_week"),
        CheckConstraint("minutes >= 0", name="ck_exercise_logs_minutes_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    week_start = Column(Date, nullable=False)
    minutes = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="exercise_logs")

    def __repr__(self):
        return f"<ExerciseLog(user_id={self.user_id}, week_start={self.week_start}, minutes={self.minutes})>"
