"""Pydantic schemas package."""

from app.schemas.achievement import (
    AchievementCheckResponse,
    AchievementDefinitionRead,
    AchievementStats,
    StudentAchievementRead,
)
from app.schemas.leaderboard import LeaderboardEntryRead
from app.schemas.practice_session import (
    PracticeAnswer,
    PracticeCompletionRequest,
    PracticeCompletionResponse,
    PracticeSessionCreate,
    PracticeSessionCreated,
    PracticeSessionRead,
)
from app.schemas.progress import (
    PracticeRequest,
    PracticeResult,
    PracticeWord,
    WordProgressRead,
)

__all__ = [
    "AchievementCheckResponse",
    "AchievementDefinitionRead",
    "AchievementStats",
    "StudentAchievementRead",
    "LeaderboardEntryRead",
    "PracticeAnswer",
    "PracticeCompletionRequest",
    "PracticeCompletionResponse",
    "PracticeSessionCreate",
    "PracticeSessionCreated",
    "PracticeSessionRead",
    "PracticeRequest",
    "PracticeResult",
    "PracticeWord",
    "WordProgressRead",
]
