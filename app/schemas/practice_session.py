"""Pydantic models for practice session endpoints."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.utils.timeutils import ensure_utc

SessionType = Literal["flashcards", "matching", "typing", "mixed"]


class PracticeSessionCreate(BaseModel):
    """A finished practice run as reported by the client."""

    student_id: str = Field(..., min_length=1)
    session_type: SessionType
    total_words: int = Field(..., ge=0)
    correct_answers: int = Field(..., ge=0)
    incorrect_answers: int = Field(..., ge=0)
    accuracy_rate: float = Field(..., ge=0, le=100)
    start_time: datetime
    end_time: datetime
    duration_seconds: int = Field(..., ge=0)
    xp_earned: int = Field(..., ge=0)
    achievements_unlocked: list[str] = Field(default_factory=list)
    combo_best: int = Field(0, ge=0)
    word_ids: list[str] = Field(default_factory=list)
    source_session_ids: list[str] | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalise_timezone(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def check_time_range(self) -> "PracticeSessionCreate":
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self


class PracticeSessionRead(BaseModel):
    """Stored practice session."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    student_id: str
    session_type: str
    total_words: int
    correct_answers: int
    incorrect_answers: int
    accuracy_rate: float
    start_time: datetime
    end_time: datetime
    duration_seconds: int
    xp_earned: int
    achievements_unlocked: list[str] = Field(default_factory=list)
    combo_best: int
    word_ids: list[str] = Field(default_factory=list)
    source_session_ids: list[str] | None = None
    created_at: datetime | None = None


class PracticeSessionCreated(BaseModel):
    """Identifier of a newly recorded session."""

    id: uuid.UUID


class PracticeAnswer(BaseModel):
    """One answer given during a practice run, in the order it was given."""

    word_id: str = Field(..., min_length=1)
    correct: bool


class PracticeCompletionRequest(BaseModel):
    """Everything needed to close a practice run in one call."""

    student_id: str = Field(..., min_length=1)
    session_type: SessionType
    start_time: datetime
    end_time: datetime | None = None
    total_words: int | None = Field(None, ge=0)
    answers: list[PracticeAnswer] = Field(default_factory=list)
    source_session_ids: list[str] | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalise_timezone(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    @model_validator(mode="after")
    def check_time_range(self) -> "PracticeCompletionRequest":
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self


class PracticeCompletionResponse(BaseModel):
    """Result of closing a practice run."""

    session_id: uuid.UUID
    accuracy_rate: float
    xp_earned: int
    achievements_unlocked: list[str] = Field(default_factory=list)
