"""Business logic for per-word vocabulary progress."""
from __future__ import annotations

from datetime import datetime, timedelta

from loguru import logger

from app.config import settings
from app.core.srs.sm2 import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    next_review,
    quality_for,
    round_half_up,
)
from app.db.models.word_progress import WordProgress, validate_progress
from app.db.store import DocumentStore
from app.schemas.progress import PracticeResult, PracticeWord
from app.utils.timeutils import ensure_utc, utcnow

XP_CORRECT = 10
XP_INCORRECT = 2
INITIAL_MASTERY_CORRECT = 20


def practice_xp(correct: bool) -> int:
    """XP credited to a word for one attempt."""

    return XP_CORRECT if correct else XP_INCORRECT


class ProgressService:
    """Record practice attempts and query per-word progress."""

    def __init__(self, store: DocumentStore, *, max_interval_days: int | None = None) -> None:
        self.store = store
        self.max_interval_days = (
            max_interval_days if max_interval_days is not None else settings.SRS_MAX_INTERVAL_DAYS
        )

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def get_word_progress(self, student_id: str, word_id: str) -> WordProgress | None:
        """Return the progress row for a student and word if present."""

        return self.store.get_one(
            WordProgress,
            WordProgress.student_id == student_id,
            WordProgress.word_id == word_id,
        )

    def get_student_progress(self, student_id: str) -> list[WordProgress]:
        """Return every word the student has practised, best known first."""

        return self.store.query(
            WordProgress,
            WordProgress.student_id == student_id,
            order_by=(WordProgress.mastery_level.desc(), WordProgress.word_id.asc()),
        )

    def get_due_words(self, student_id: str, *, now: datetime | None = None) -> list[WordProgress]:
        """Return words whose review time has passed, oldest due first."""

        now = ensure_utc(now) if now is not None else utcnow()
        return self.store.query(
            WordProgress,
            WordProgress.student_id == student_id,
            WordProgress.next_review.is_not(None),
            WordProgress.next_review <= now,
            order_by=(WordProgress.next_review.asc(),),
        )

    def count_words(self, student_id: str, *, min_mastery: int | None = None) -> int:
        """Count practised words, optionally only those at ``min_mastery`` or above."""

        criteria = [WordProgress.student_id == student_id]
        if min_mastery is not None:
            criteria.append(WordProgress.mastery_level >= min_mastery)
        return self.store.count(WordProgress, *criteria)

    # ------------------------------------------------------------------
    # Practice recording
    # ------------------------------------------------------------------
    def record_practice(
        self,
        student_id: str,
        word: PracticeWord,
        result: PracticeResult,
        *,
        now: datetime | None = None,
    ) -> WordProgress:
        """Apply one practice attempt to the student's progress on ``word``."""

        now = ensure_utc(now) if now is not None else utcnow()
        progress = self.get_word_progress(student_id, word.word_id)
        if progress is None:
            return self._create_progress(student_id, word, result, now)
        return self._update_progress(progress, result, now)

    def _create_progress(
        self, student_id: str, word: PracticeWord, result: PracticeResult, now: datetime
    ) -> WordProgress:
        correct = result.correct
        progress = WordProgress(
            student_id=student_id,
            word_id=word.word_id,
            english=word.english,
            translation=word.translation,
            session_id=word.session_id,
            mastery_level=INITIAL_MASTERY_CORRECT if correct else 0,
            practice_count=1,
            correct_count=1 if correct else 0,
            incorrect_count=0 if correct else 1,
            last_practiced=now,
            next_review=now + timedelta(days=DEFAULT_INTERVAL_DAYS),
            interval_days=DEFAULT_INTERVAL_DAYS,
            ease_factor=DEFAULT_EASE_FACTOR,
            xp_earned=practice_xp(correct),
            streak_count=1 if correct else 0,
            best_streak=1 if correct else 0,
            average_response_time_ms=result.response_time_ms,
            last_response_time_ms=result.response_time_ms,
            version=1,
        )
        progress.check_invariants()
        self.store.create(progress)
        logger.info(
            "Created word progress",
            student_id=student_id,
            word_id=progress.word_id,
            correct=correct,
        )
        return progress

    def _update_progress(
        self, progress: WordProgress, result: PracticeResult, now: datetime
    ) -> WordProgress:
        correct = result.correct
        schedule = next_review(
            quality_for(correct),
            progress.interval_days,
            progress.ease_factor,
            max_interval_days=self.max_interval_days,
        )

        practice_count = progress.practice_count + 1
        correct_count = progress.correct_count + (1 if correct else 0)
        incorrect_count = progress.incorrect_count + (0 if correct else 1)
        # Plain rolling accuracy; reaches 100 after two correct answers
        mastery_level = min(100, round_half_up(correct_count / practice_count * 100))

        streak_count = progress.streak_count + 1 if correct else 0
        best_streak = max(progress.best_streak, streak_count)

        # Incremental mean weighted by the count before this attempt
        average_response_time = (
            progress.average_response_time_ms * progress.practice_count + result.response_time_ms
        ) / (progress.practice_count + 1)

        xp = practice_xp(correct)
        fields = {
            "mastery_level": mastery_level,
            "last_practiced": now,
            "next_review": now + timedelta(days=schedule.interval_days),
            "interval_days": schedule.interval_days,
            "ease_factor": schedule.ease_factor,
            "streak_count": streak_count,
            "best_streak": best_streak,
            "average_response_time_ms": average_response_time,
            "last_response_time_ms": result.response_time_ms,
        }
        increments = {
            "practice_count": 1,
            "correct_count" if correct else "incorrect_count": 1,
            "xp_earned": xp,
        }

        validate_progress(
            {
                **fields,
                "practice_count": practice_count,
                "correct_count": correct_count,
                "incorrect_count": incorrect_count,
                "xp_earned": progress.xp_earned + xp,
            }
        )
        self.store.update(
            WordProgress,
            progress.id,
            fields,
            increment=increments,
            expected_version=progress.version,
        )
        logger.debug(
            "Updated word progress",
            student_id=progress.student_id,
            word_id=progress.word_id,
            correct=correct,
            interval_days=schedule.interval_days,
            mastery_level=mastery_level,
        )
        return self.store.get_one(WordProgress, WordProgress.id == progress.id)


__all__ = ["ProgressService", "practice_xp"]
