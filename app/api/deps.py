"""Shared API dependencies."""
from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.db.store import DocumentStore
from app.services.achievement import AchievementService
from app.services.leaderboard import LeaderboardService
from app.services.practice_session import PracticeSessionService
from app.services.progress import ProgressService


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for request lifetime."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    """Wrap the request session in the engine's store adapter."""

    return DocumentStore(db)


def get_progress_service(store: DocumentStore = Depends(get_store)) -> ProgressService:
    return ProgressService(store)


def get_achievement_service(store: DocumentStore = Depends(get_store)) -> AchievementService:
    return AchievementService(store)


def get_leaderboard_service(store: DocumentStore = Depends(get_store)) -> LeaderboardService:
    return LeaderboardService(store)


def get_practice_session_service(
    store: DocumentStore = Depends(get_store),
) -> PracticeSessionService:
    """Assemble the session service with request-scoped collaborators."""

    return PracticeSessionService(
        store,
        progress_service=ProgressService(store),
        achievement_service=AchievementService(store),
    )
