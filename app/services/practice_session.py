"""Practice session recording and end-of-run orchestration."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from app.config import settings
from app.core.srs.sm2 import round_half_up
from app.db.models.practice_session import PracticeSession
from app.db.models.student import Student
from app.db.store import DocumentStore
from app.schemas.achievement import AchievementStats
from app.schemas.practice_session import PracticeSessionCreate, SessionType
from app.services.achievement import AchievementService
from app.services.progress import ProgressService
from app.utils.timeutils import ensure_utc, utcnow

# Run-level XP: correct answers earn a bonus for the current combo
SESSION_XP_CORRECT = 10
SESSION_XP_STREAK_BONUS = 2
SESSION_XP_INCORRECT = 2


@dataclass
class PracticeTally:
    """Running totals for one practice run, kept by the caller until it ends."""

    student_id: str
    session_type: SessionType
    start_time: datetime = field(default_factory=utcnow)
    total_words: int | None = None
    source_session_ids: list[str] | None = None

    correct: int = 0
    incorrect: int = 0
    streak: int = 0
    best_streak: int = 0
    xp_earned: int = 0
    word_ids: list[str] = field(default_factory=list)

    @property
    def answered(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy_rate(self) -> float:
        if not self.answered:
            return 0.0
        return self.correct / self.answered * 100

    def register_answer(self, word_id: str, correct: bool) -> int:
        """Fold one answer into the run and return the XP it earned."""

        if correct:
            self.correct += 1
            self.streak += 1
            xp = SESSION_XP_CORRECT + self.streak * SESSION_XP_STREAK_BONUS
        else:
            self.incorrect += 1
            self.streak = 0
            xp = SESSION_XP_INCORRECT
        self.best_streak = max(self.best_streak, self.streak)
        self.xp_earned += xp
        if word_id not in self.word_ids:
            self.word_ids.append(word_id)
        return xp

    def to_session(self, end_time: datetime | None = None) -> PracticeSessionCreate:
        """Build the immutable session record for this run."""

        start_time = ensure_utc(self.start_time)
        if end_time is None:
            end_time = max(utcnow(), start_time)
        end_time = ensure_utc(end_time)
        duration = int((end_time - start_time).total_seconds())
        return PracticeSessionCreate(
            student_id=self.student_id,
            session_type=self.session_type,
            total_words=self.total_words if self.total_words is not None else len(self.word_ids),
            correct_answers=self.correct,
            incorrect_answers=self.incorrect,
            accuracy_rate=self.accuracy_rate,
            start_time=start_time,
            end_time=end_time,
            duration_seconds=max(0, duration),
            xp_earned=self.xp_earned,
            achievements_unlocked=[],
            combo_best=self.best_streak,
            word_ids=list(self.word_ids),
            source_session_ids=self.source_session_ids,
        )


@dataclass(slots=True)
class PracticeCompletion:
    """Outcome of closing a practice run."""

    session_id: uuid.UUID
    accuracy_rate: float
    xp_earned: int
    achievements_unlocked: list[str]


class PracticeSessionService:
    """Persist finished practice runs and credit student XP."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        progress_service: ProgressService | None = None,
        achievement_service: AchievementService | None = None,
    ) -> None:
        self.store = store
        self.progress_service = progress_service or ProgressService(store)
        self.achievement_service = achievement_service or AchievementService(store)

    def record_session(self, session: PracticeSessionCreate) -> uuid.UUID:
        """Store ``session`` and add its XP to the student's total.

        The session insert and the XP increment commit together; the increment
        is a single ``total_xp = total_xp + n`` statement.
        """

        record = PracticeSession(**session.model_dump())
        with self.store.transaction():
            session_id = self.store.create(record)
            self._award_xp(session.student_id, session.xp_earned)

        logger.info(
            "Recorded practice session",
            student_id=session.student_id,
            session_id=str(session_id),
            xp_earned=session.xp_earned,
        )
        return session_id

    def _award_xp(self, student_id: str, xp: int) -> None:
        if xp == 0:
            return
        if not self.store.increment(Student, student_id, "total_xp", xp):
            logger.warning("Student not found, XP not credited", student_id=student_id, xp=xp)

    def get_practice_history(
        self, student_id: str, limit: int | None = None
    ) -> list[PracticeSession]:
        """Return the student's most recent sessions, newest first."""

        limit = settings.PRACTICE_HISTORY_LIMIT if limit is None else limit
        if limit <= 0:
            return []
        return self.store.query(
            PracticeSession,
            PracticeSession.student_id == student_id,
            order_by=(PracticeSession.created_at.desc(), PracticeSession.end_time.desc()),
            limit=limit,
        )

    def build_achievement_stats(
        self, tally: PracticeTally, session: PracticeSessionCreate
    ) -> AchievementStats:
        """Aggregate the stats the achievement rules are evaluated against."""

        student_id = tally.student_id
        return AchievementStats(
            total_words=self.progress_service.count_words(student_id),
            mastered_words=self.progress_service.count_words(
                student_id, min_mastery=settings.MASTERED_THRESHOLD
            ),
            streak=tally.best_streak,
            accuracy=round_half_up(session.accuracy_rate),
            total_sessions=self.store.count(
                PracticeSession, PracticeSession.student_id == student_id
            )
            + 1,
        )

    def complete_practice(
        self, tally: PracticeTally, *, end_time: datetime | None = None
    ) -> PracticeCompletion:
        """Close a run: unlock achievements, then record the session and its XP."""

        session = tally.to_session(end_time)
        with self.store.transaction():
            stats = self.build_achievement_stats(tally, session)
            unlocked = self.achievement_service.check_achievements(tally.student_id, stats)
            session = session.model_copy(update={"achievements_unlocked": unlocked})
            session_id = self.record_session(session)

        return PracticeCompletion(
            session_id=session_id,
            accuracy_rate=session.accuracy_rate,
            xp_earned=session.xp_earned,
            achievements_unlocked=unlocked,
        )


__all__ = [
    "PracticeCompletion",
    "PracticeSessionService",
    "PracticeTally",
]
