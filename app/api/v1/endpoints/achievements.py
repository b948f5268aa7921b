"""Achievement API endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas.achievement import (
    AchievementCheckResponse,
    AchievementDefinitionRead,
    AchievementStats,
    StudentAchievementRead,
)
from app.services.achievement import AchievementService

router = APIRouter(prefix="/achievements", tags=["achievements"])


@router.get("", response_model=list[AchievementDefinitionRead])
def list_achievements() -> list[AchievementDefinitionRead]:
    """Return all available achievement definitions."""

    return [
        AchievementDefinitionRead(
            id=rule.id,
            name=rule.name,
            description=rule.description,
            icon=rule.icon,
            type=rule.type,
            requirement=rule.requirement,
            xp_reward=rule.xp_reward,
        )
        for rule in AchievementService.list_definitions()
    ]


@router.get("/{student_id}", response_model=list[StudentAchievementRead])
def get_student_achievements(
    *,
    student_id: str,
    service: AchievementService = Depends(deps.get_achievement_service),
) -> list[StudentAchievementRead]:
    """Return the achievements a student has unlocked."""

    return [
        StudentAchievementRead.model_validate(item)
        for item in service.get_student_achievements(student_id)
    ]


@router.post("/{student_id}/check", response_model=AchievementCheckResponse)
def check_achievements(
    *,
    student_id: str,
    stats: AchievementStats,
    service: AchievementService = Depends(deps.get_achievement_service),
) -> AchievementCheckResponse:
    """Evaluate the rule table against ``stats`` and unlock what is due."""

    unlocked = service.check_achievements(student_id, stats)
    return AchievementCheckResponse(unlocked=unlocked, total_unlocked=len(unlocked))
