"""Achievement rules and unlock tracking for vocabulary practice."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from loguru import logger

from app.db.models.achievement import StudentAchievement
from app.db.store import DocumentStore
from app.schemas.achievement import AchievementStats, AchievementType

XP_REWARD_PER_REQUIREMENT = 10


@dataclass(frozen=True)
class AchievementRule:
    """A fixed achievement and the predicate that unlocks it."""

    id: str
    name: str
    description: str
    icon: str
    type: AchievementType
    requirement: int
    predicate: Callable[[AchievementStats], bool]

    @property
    def xp_reward(self) -> int:
        return self.requirement * XP_REWARD_PER_REQUIREMENT

    def is_met(self, stats: AchievementStats) -> bool:
        return self.predicate(stats)


ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    AchievementRule(
        id="first_word",
        name="First Word",
        description="Practise your first word",
        icon="🌱",
        type="milestone",
        requirement=1,
        predicate=lambda stats: stats.total_words >= 1,
    ),
    AchievementRule(
        id="ten_words",
        name="10 Words Learned",
        description="Practise 10 different words",
        icon="📚",
        type="milestone",
        requirement=10,
        predicate=lambda stats: stats.total_words >= 10,
    ),
    AchievementRule(
        id="fifty_words",
        name="50 Words Learned",
        description="Practise 50 different words",
        icon="🎯",
        type="milestone",
        requirement=50,
        predicate=lambda stats: stats.total_words >= 50,
    ),
    AchievementRule(
        id="hundred_words",
        name="100 Words Learned",
        description="Practise 100 different words",
        icon="🏆",
        type="milestone",
        requirement=100,
        predicate=lambda stats: stats.total_words >= 100,
    ),
    AchievementRule(
        id="week_streak",
        name="Week Streak",
        description="Answer 7 in a row correctly",
        icon="🔥",
        type="streak",
        requirement=7,
        predicate=lambda stats: stats.streak >= 7,
    ),
    AchievementRule(
        id="month_streak",
        name="Month Streak",
        description="Answer 30 in a row correctly",
        icon="⚡",
        type="streak",
        requirement=30,
        predicate=lambda stats: stats.streak >= 30,
    ),
    AchievementRule(
        id="perfect_session",
        name="Perfect Session",
        description="Finish a session with 100% accuracy",
        icon="💯",
        type="accuracy",
        requirement=100,
        predicate=lambda stats: stats.accuracy == 100,
    ),
    AchievementRule(
        id="mastery_10",
        name="10 Words Mastered",
        description="Master 10 words",
        icon="👑",
        type="mastery",
        requirement=10,
        predicate=lambda stats: stats.mastered_words >= 10,
    ),
)


class AchievementService:
    """Evaluate the rule table and unlock achievements at most once per student."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    @staticmethod
    def list_definitions() -> tuple[AchievementRule, ...]:
        """Return every achievement a student can unlock."""

        return ACHIEVEMENT_RULES

    def get_student_achievements(self, student_id: str) -> list[StudentAchievement]:
        """Return achievements the student has unlocked, oldest first."""

        return self.store.query(
            StudentAchievement,
            StudentAchievement.student_id == student_id,
            order_by=(StudentAchievement.unlocked_at.asc(), StudentAchievement.achievement_id.asc()),
        )

    def check_achievements(self, student_id: str, stats: AchievementStats) -> list[str]:
        """Unlock every satisfied achievement not yet held; return their names.

        Each unlock is a conditional insert keyed by ``(student_id,
        achievement_id)``, so repeated or concurrent checks with the same stats
        never unlock an achievement twice.
        """

        unlocked: list[str] = []
        with self.store.transaction():
            for rule in ACHIEVEMENT_RULES:
                if not rule.is_met(stats):
                    continue
                created = self.store.insert_if_absent(
                    StudentAchievement,
                    {
                        "student_id": student_id,
                        "achievement_id": rule.id,
                        "name": rule.name,
                        "description": rule.description,
                        "icon": rule.icon,
                        "type": rule.type,
                        "requirement": rule.requirement,
                        "xp_reward": rule.xp_reward,
                        "unlocked": True,
                    },
                    keys=("student_id", "achievement_id"),
                )
                if created:
                    unlocked.append(rule.name)

        if unlocked:
            logger.info("Unlocked achievements", student_id=student_id, achievements=unlocked)
        return unlocked


__all__ = [
    "ACHIEVEMENT_RULES",
    "AchievementRule",
    "AchievementService",
]
