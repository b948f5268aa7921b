"""Pydantic models for word progress operations."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.db.models.word_progress import build_word_id

PracticeType = Literal["flashcard", "matching", "typing"]


class PracticeWord(BaseModel):
    """The vocabulary pair being practised."""

    english: str = Field(..., min_length=1, max_length=255)
    translation: str = Field(..., min_length=1, max_length=255)
    session_id: str | None = Field(None, description="Lesson session the word came from")

    @property
    def word_id(self) -> str:
        return build_word_id(self.english, self.translation)


class PracticeResult(BaseModel):
    """Outcome of a single practice attempt."""

    correct: bool
    response_time_ms: float = Field(..., ge=0)
    practice_type: PracticeType = "flashcard"


class PracticeRequest(BaseModel):
    """Payload for recording one practice attempt."""

    word: PracticeWord
    result: PracticeResult


class WordProgressRead(BaseModel):
    """A student's progress on one word."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    student_id: str
    word_id: str
    english: str
    translation: str
    session_id: str | None = None
    mastery_level: int
    practice_count: int
    correct_count: int
    incorrect_count: int
    last_practiced: datetime | None = None
    next_review: datetime | None = None
    interval_days: int
    ease_factor: float
    xp_earned: int
    streak_count: int
    best_streak: int
    average_response_time_ms: float
    last_response_time_ms: float
    created_at: datetime | None = None
    updated_at: datetime | None = None
