"""Per-student vocabulary progress model."""
import uuid
from typing import Any, Mapping

from sqlalchemy import Column, DateTime, Float, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from app.core.srs.sm2 import MIN_EASE_FACTOR
from app.db.base import Base
from app.utils.exceptions import ValidationError

_COUNTER_FIELDS = (
    "practice_count",
    "correct_count",
    "incorrect_count",
    "xp_earned",
    "streak_count",
    "best_streak",
)


def build_word_id(english: str, translation: str) -> str:
    """Return the deterministic key identifying a word pair."""

    return f"{english}-{translation}"


def validate_progress(values: Mapping[str, Any]) -> None:
    """Reject progress values that break the record's invariants.

    Only the keys present in ``values`` are checked, so partial updates can be
    validated as long as related fields travel together.
    """

    errors: dict[str, Any] = {}

    mastery = values.get("mastery_level")
    if mastery is not None and not 0 <= mastery <= 100:
        errors["mastery_level"] = mastery

    ease = values.get("ease_factor")
    if ease is not None and ease < MIN_EASE_FACTOR:
        errors["ease_factor"] = ease

    interval = values.get("interval_days")
    if interval is not None and interval < 1:
        errors["interval_days"] = interval

    for field in _COUNTER_FIELDS:
        value = values.get(field)
        if value is not None and value < 0:
            errors[field] = value

    for field in ("average_response_time_ms", "last_response_time_ms"):
        value = values.get(field)
        if value is not None and value < 0:
            errors[field] = value

    if {"practice_count", "correct_count", "incorrect_count"} <= values.keys():
        if values["practice_count"] != values["correct_count"] + values["incorrect_count"]:
            errors["practice_count"] = values["practice_count"]

    if {"streak_count", "best_streak"} <= values.keys():
        if values["best_streak"] < values["streak_count"]:
            errors["best_streak"] = values["best_streak"]

    if errors:
        raise ValidationError("Word progress violates its invariants", details=errors)


class WordProgress(Base):
    """Track how well one student knows one vocabulary word."""

    __tablename__ = "word_progress"
    __table_args__ = (
        UniqueConstraint("student_id", "word_id", name="uq_word_progress_student_word"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(String(128), nullable=False, index=True)
    word_id = Column(String(512), nullable=False)
    english = Column(String(255), nullable=False)
    translation = Column(String(255), nullable=False)
    session_id = Column(String(128), nullable=True)

    mastery_level = Column(Integer, nullable=False, default=0)
    practice_count = Column(Integer, nullable=False, default=0)
    correct_count = Column(Integer, nullable=False, default=0)
    incorrect_count = Column(Integer, nullable=False, default=0)

    # Spaced repetition
    last_practiced = Column(DateTime(timezone=True), nullable=True)
    next_review = Column(DateTime(timezone=True), nullable=True, index=True)
    interval_days = Column(Integer, nullable=False, default=1)
    ease_factor = Column(Float, nullable=False, default=2.5)

    # Gamification
    xp_earned = Column(Integer, nullable=False, default=0)
    streak_count = Column(Integer, nullable=False, default=0)
    best_streak = Column(Integer, nullable=False, default=0)

    average_response_time_ms = Column(Float, nullable=False, default=0.0)
    last_response_time_ms = Column(Float, nullable=False, default=0.0)

    # Bumped on every update; writes are conditional on the value read
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def check_invariants(self) -> None:
        """Validate the in-memory row before it is written."""

        validate_progress(
            {
                "mastery_level": self.mastery_level,
                "ease_factor": self.ease_factor,
                "interval_days": self.interval_days,
                "practice_count": self.practice_count,
                "correct_count": self.correct_count,
                "incorrect_count": self.incorrect_count,
                "xp_earned": self.xp_earned,
                "streak_count": self.streak_count,
                "best_streak": self.best_streak,
                "average_response_time_ms": self.average_response_time_ms,
                "last_response_time_ms": self.last_response_time_ms,
            }
        )
