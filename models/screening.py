"""
Screening model for the STEADI fall-risk questionnaire.
"""

from sqlalchemy import Column, Integer, Boolean, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class Screening(Base):
    """One completed questionnaire. Rows are never updated."""

    __tablename__ = "screenings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Do you feel unsteady / worry about falling / have you fallen in the past year
    unsteady = Column(Boolean, nullable=False, default=False)
    worries = Column(Boolean, nullable=False, default=False)
    fallen = Column(Boolean, nullable=False, default=False)

    fall_count = Column(Integer, nullable=True)
    fall_injured = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user = relationship("User", back_populates="screenings")

    def __repr__(self):
        return f"<Screening(id={self.id}, user_id={self.user_id})>"
