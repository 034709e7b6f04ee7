"""
Fall model for patient-reported fall events.
"""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.database import Base


class Fall(Base):
    """A single fall event. Append-only."""

    __tablename__ = "falls"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    fall_date = Column(Date, nullable=False, index=True)
    location = Column(String(255), nullable=True)  # room, outdoor, bathroom, etc.
    activity = Column(String(255), nullable=True)
    cause = Column(String(255), nullable=True)
    injuries = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="falls")

    def __repr__(self):
        return f"<Fall(id={self.id}, user_id={self.user_id}, fall_date={self.fall_date})>"
