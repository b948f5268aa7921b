"""Achievement tracking models."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from app.db.base import Base


class StudentAchievement(Base):
    """An achievement unlocked by a student.

    ``(student_id, achievement_id)`` is unique so that unlocking is a single
    conditional insert rather than a check followed by a write.
    """

    __tablename__ = "student_achievements"
    __table_args__ = (
        UniqueConstraint(
            "student_id", "achievement_id", name="uq_student_achievements_student_achievement"
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(String(128), nullable=False, index=True)
    achievement_id = Column(String(100), nullable=False)

    name = Column(String(255), nullable=False)
    description = Column(Text)
    icon = Column(String(32))
    type = Column(String(20), nullable=False)
    requirement = Column(Integer, nullable=False)
    xp_reward = Column(Integer, nullable=False, default=0)

    unlocked = Column(Boolean, nullable=False, default=True)
    unlocked_at = Column(DateTime(timezone=True), server_default=func.now())
