"""XP leaderboard queries."""
from __future__ import annotations

from dataclasses import dataclass

from app.config import settings
from app.db.models.student import Student
from app.db.store import DocumentStore

XP_PER_LEVEL = 1000


def level_for_xp(xp: int) -> int:
    """Return the coarse level tier for a cumulative XP total."""

    return xp // XP_PER_LEVEL + 1


@dataclass(slots=True)
class LeaderboardEntry:
    """One ranked student."""

    rank: int
    student_id: str
    name: str
    xp: int
    level: int


class LeaderboardService:
    """Rank students by cumulative XP."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def get_leaderboard(self, limit: int | None = None) -> list[LeaderboardEntry]:
        """Return the top ``limit`` students, highest XP first."""

        limit = settings.LEADERBOARD_LIMIT if limit is None else limit
        if limit <= 0:
            return []

        students = self.store.query(
            Student,
            order_by=(Student.total_xp.desc(), Student.id.asc()),
            limit=limit,
        )
        entries: list[LeaderboardEntry] = []
        for rank, student in enumerate(students, start=1):
            xp = student.total_xp or 0
            entries.append(
                LeaderboardEntry(
                    rank=rank,
                    student_id=student.id,
                    name=student.display_name,
                    xp=xp,
                    level=level_for_xp(xp),
                )
            )
        return entries


__all__ = ["LeaderboardEntry", "LeaderboardService", "level_for_xp"]
