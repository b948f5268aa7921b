"""Pydantic schemas for the XP leaderboard."""
from __future__ import annotations

from pydantic import BaseModel


class LeaderboardEntryRead(BaseModel):
    """One ranked student."""

    rank: int
    student_id: str
    name: str
    xp: int
    level: int
