"""Pydantic schemas for achievement endpoints."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AchievementType = Literal["milestone", "streak", "mastery", "speed", "accuracy"]


class AchievementStats(BaseModel):
    """Cumulative learner statistics evaluated by the achievement rules."""

    model_config = ConfigDict(extra="forbid")

    total_words: int = Field(..., ge=0, description="Words the student has practised")
    mastered_words: int = Field(..., ge=0, description="Words at or above the mastery threshold")
    streak: int = Field(..., ge=0, description="Best consecutive correct answers")
    accuracy: float = Field(..., ge=0, le=100, description="Session accuracy percentage")
    total_sessions: int = Field(..., ge=0)


class AchievementDefinitionRead(BaseModel):
    """Achievement rule exposed to clients."""

    id: str
    name: str
    description: str
    icon: str
    type: AchievementType
    requirement: int
    xp_reward: int


class StudentAchievementRead(BaseModel):
    """Achievement unlocked by a student."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    student_id: str
    achievement_id: str
    name: str
    description: str | None = None
    icon: str | None = None
    type: str
    requirement: int
    xp_reward: int
    unlocked: bool
    unlocked_at: datetime | None = None


class AchievementCheckResponse(BaseModel):
    """Response after checking for achievement unlocks."""

    unlocked: list[str] = Field(default_factory=list)
    total_unlocked: int


__all__ = [
    "AchievementCheckResponse",
    "AchievementDefinitionRead",
    "AchievementStats",
    "AchievementType",
    "StudentAchievementRead",
]
