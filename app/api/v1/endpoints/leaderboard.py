"""XP leaderboard endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.schemas.leaderboard import LeaderboardEntryRead
from app.services.leaderboard import LeaderboardService

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=list[LeaderboardEntryRead])
def get_leaderboard(
    *,
    limit: int | None = Query(None, ge=1, le=100, description="Number of students to rank"),
    service: LeaderboardService = Depends(deps.get_leaderboard_service),
) -> list[LeaderboardEntryRead]:
    """Return students ranked by cumulative XP."""

    return [
        LeaderboardEntryRead(
            rank=entry.rank,
            student_id=entry.student_id,
            name=entry.name,
            xp=entry.xp,
            level=entry.level,
        )
        for entry in service.get_leaderboard(limit)
    ]
