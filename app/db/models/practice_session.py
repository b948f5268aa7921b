"""Completed practice run model."""
import uuid

from sqlalchemy import Column, DateTime, Float, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.types import JSON
from sqlalchemy.sql import func

from app.db.base import Base


class PracticeSession(Base):
    """A finished flashcard, matching or typing run. Never updated after insert."""

    __tablename__ = "practice_sessions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(String(128), nullable=False, index=True)
    session_type = Column(String(20), nullable=False)

    total_words = Column(Integer, nullable=False, default=0)
    correct_answers = Column(Integer, nullable=False, default=0)
    incorrect_answers = Column(Integer, nullable=False, default=0)
    accuracy_rate = Column(Float, nullable=False, default=0.0)

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    duration_seconds = Column(Integer, nullable=False, default=0)

    xp_earned = Column(Integer, nullable=False, default=0)
    achievements_unlocked = Column(JSONB().with_variant(JSON(), "sqlite"), default=list)
    combo_best = Column(Integer, nullable=False, default=0)

    word_ids = Column(JSONB().with_variant(JSON(), "sqlite"), default=list)
    source_session_ids = Column(JSONB().with_variant(JSON(), "sqlite"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
