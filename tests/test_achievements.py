"""Tests for the achievement rule table and unlock tracking."""
from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.db.models import StudentAchievement
from app.schemas.achievement import AchievementStats
from app.services.achievement import ACHIEVEMENT_RULES, AchievementService


def stats(**overrides) -> AchievementStats:
    values = {
        "total_words": 0,
        "mastered_words": 0,
        "streak": 0,
        "accuracy": 0,
        "total_sessions": 1,
    }
    values.update(overrides)
    return AchievementStats(**values)


@pytest.fixture()
def service(store) -> AchievementService:
    return AchievementService(store)


def test_definitions_cover_every_rule() -> None:
    definitions = AchievementService.list_definitions()

    assert len(definitions) == 8
    assert [rule.id for rule in definitions] == [
        "first_word",
        "ten_words",
        "fifty_words",
        "hundred_words",
        "week_streak",
        "month_streak",
        "perfect_session",
        "mastery_10",
    ]
    rewards = {rule.id: rule.xp_reward for rule in definitions}
    assert rewards["first_word"] == 10
    assert rewards["week_streak"] == 70
    assert rewards["perfect_session"] == 1000


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"total_words": 1}, {"first_word"}),
        ({"total_words": 10}, {"first_word", "ten_words"}),
        ({"total_words": 100}, {"first_word", "ten_words", "fifty_words", "hundred_words"}),
        ({"streak": 7}, {"week_streak"}),
        ({"streak": 30}, {"week_streak", "month_streak"}),
        ({"accuracy": 100}, {"perfect_session"}),
        ({"accuracy": 99.9}, set()),
        ({"mastered_words": 10}, {"mastery_10"}),
        ({"mastered_words": 9, "streak": 6, "total_words": 9}, {"first_word"}),
    ],
)
def test_rule_predicates(overrides: dict, expected: set[str]) -> None:
    current = stats(**overrides)

    met = {rule.id for rule in ACHIEVEMENT_RULES if rule.is_met(current)}

    assert met == expected


def test_check_unlocks_each_achievement_once(service: AchievementService, store) -> None:
    current = stats(total_words=12, streak=7, accuracy=100)

    first = service.check_achievements("S1", current)
    second = service.check_achievements("S1", current)

    assert first == ["First Word", "10 Words Learned", "Week Streak", "Perfect Session"]
    assert second == []
    assert store.count(StudentAchievement, StudentAchievement.student_id == "S1") == 4


def test_later_check_only_returns_new_unlocks(service: AchievementService) -> None:
    service.check_achievements("S1", stats(total_words=5))

    unlocked = service.check_achievements("S1", stats(total_words=10, mastered_words=10))

    assert unlocked == ["10 Words Learned", "10 Words Mastered"]


def test_unlocked_record_carries_rule_metadata(service: AchievementService) -> None:
    service.check_achievements("S1", stats(streak=7))

    (achievement,) = service.get_student_achievements("S1")

    assert achievement.achievement_id == "week_streak"
    assert achievement.name == "Week Streak"
    assert achievement.type == "streak"
    assert achievement.requirement == 7
    assert achievement.xp_reward == 70
    assert achievement.unlocked is True
    assert achievement.unlocked_at is not None


def test_achievements_are_tracked_per_student(service: AchievementService) -> None:
    service.check_achievements("S1", stats(total_words=1))

    assert service.check_achievements("S2", stats(total_words=1)) == ["First Word"]
    assert [item.achievement_id for item in service.get_student_achievements("S1")] == [
        "first_word"
    ]
    assert service.get_student_achievements("S3") == []


def test_nothing_unlocked_for_empty_stats(service: AchievementService) -> None:
    assert service.check_achievements("S1", stats()) == []
    assert service.get_student_achievements("S1") == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"total_words": -1},
        {"accuracy": 101},
        {"streak": -3},
        {"bonus": 5},
    ],
)
def test_stats_reject_invalid_values(overrides: dict) -> None:
    with pytest.raises(PydanticValidationError):
        stats(**overrides)


def test_first_session_with_one_word_unlocks_only_first_word(service: AchievementService) -> None:
    current = stats(total_words=1, mastered_words=0, streak=0, accuracy=67, total_sessions=1)

    assert service.check_achievements("S1", current) == ["First Word"]
    assert service.check_achievements("S1", current) == []
