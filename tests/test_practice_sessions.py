"""Tests for practice session recording and run completion."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.db.models import PracticeSession, Student, StudentAchievement
from app.schemas.practice_session import PracticeSessionCreate
from app.schemas.progress import PracticeResult, PracticeWord
from app.services.practice_session import PracticeSessionService, PracticeTally
from app.services.progress import ProgressService
from app.utils.exceptions import StoreUnavailable


def make_session(student_id: str, start: datetime, **overrides) -> PracticeSessionCreate:
    values = {
        "student_id": student_id,
        "session_type": "flashcards",
        "total_words": 10,
        "correct_answers": 8,
        "incorrect_answers": 2,
        "accuracy_rate": 80.0,
        "start_time": start,
        "end_time": start + timedelta(minutes=5),
        "duration_seconds": 300,
        "xp_earned": 96,
        "combo_best": 5,
        "word_ids": ["cat-gato", "dog-perro"],
    }
    values.update(overrides)
    return PracticeSessionCreate(**values)


@pytest.fixture()
def service(store) -> PracticeSessionService:
    return PracticeSessionService(store)


def total_xp(store, student_id: str) -> int:
    return store.get_one(Student, Student.id == student_id).total_xp


def test_record_session_stores_row_and_credits_xp(
    service: PracticeSessionService, store, students, now: datetime
) -> None:
    session_id = service.record_session(make_session("S1", now, xp_earned=120))

    stored = store.get_one(PracticeSession, PracticeSession.id == session_id)
    assert stored.student_id == "S1"
    assert stored.session_type == "flashcards"
    assert stored.xp_earned == 120
    assert stored.word_ids == ["cat-gato", "dog-perro"]
    assert stored.achievements_unlocked == []
    assert stored.created_at is not None
    assert total_xp(store, "S1") == 120


def test_student_xp_is_sum_of_recorded_sessions(
    service: PracticeSessionService, store, students, now: datetime
) -> None:
    for offset, xp in enumerate([40, 0, 15, 300]):
        service.record_session(
            make_session("S2", now + timedelta(hours=offset), xp_earned=xp)
        )

    assert total_xp(store, "S2") == 1000 + 40 + 15 + 300
    assert total_xp(store, "S1") == 0


def test_record_session_for_unknown_student_keeps_session(
    service: PracticeSessionService, store, students, now: datetime
) -> None:
    session_id = service.record_session(make_session("ghost", now, xp_earned=50))

    assert store.get_one(PracticeSession, PracticeSession.id == session_id) is not None
    assert store.get_one(Student, Student.id == "ghost") is None


def test_session_rejects_end_before_start(now: datetime) -> None:
    with pytest.raises(ValueError):
        make_session("S1", now, end_time=now - timedelta(seconds=1))


def test_practice_history_newest_first_with_limit(
    service: PracticeSessionService, students, now: datetime
) -> None:
    for offset in range(4):
        service.record_session(make_session("S1", now + timedelta(hours=offset)))
    service.record_session(make_session("S2", now + timedelta(hours=10)))

    history = service.get_practice_history("S1", limit=3)

    assert len(history) == 3
    assert [item.student_id for item in history] == ["S1", "S1", "S1"]
    end_times = [item.end_time for item in history]
    assert end_times == sorted(end_times, reverse=True)
    assert service.get_practice_history("S1", limit=0) == []
    assert len(service.get_practice_history("S1")) == 4


def test_tally_awards_combo_xp() -> None:
    tally = PracticeTally(student_id="S1", session_type="flashcards")

    assert tally.register_answer("cat-gato", True) == 12
    assert tally.register_answer("dog-perro", True) == 14
    assert tally.register_answer("cat-gato", False) == 2

    assert tally.xp_earned == 28
    assert tally.correct == 2
    assert tally.incorrect == 1
    assert tally.best_streak == 2
    assert tally.streak == 0
    assert tally.word_ids == ["cat-gato", "dog-perro"]
    assert tally.accuracy_rate == pytest.approx(200 / 3)


def test_tally_builds_session_record(now: datetime) -> None:
    tally = PracticeTally(student_id="S1", session_type="matching", start_time=now)
    tally.register_answer("cat-gato", True)
    tally.register_answer("dog-perro", True)

    session = tally.to_session(now + timedelta(seconds=95))

    assert session.total_words == 2
    assert session.correct_answers == 2
    assert session.incorrect_answers == 0
    assert session.accuracy_rate == 100
    assert session.duration_seconds == 95
    assert session.combo_best == 2
    assert session.xp_earned == 26


def test_empty_tally_has_zero_accuracy(now: datetime) -> None:
    tally = PracticeTally(student_id="S1", session_type="typing", start_time=now)

    session = tally.to_session(now)

    assert session.accuracy_rate == 0
    assert session.xp_earned == 0
    assert session.total_words == 0


def test_complete_practice_unlocks_and_records(
    service: PracticeSessionService, store, students, now: datetime
) -> None:
    ProgressService(store).record_practice(
        "S1",
        PracticeWord(english="cat", translation="gato"),
        PracticeResult(correct=True, response_time_ms=700),
        now=now,
    )
    tally = PracticeTally(student_id="S1", session_type="flashcards", start_time=now)
    for _ in range(7):
        tally.register_answer("cat-gato", True)

    completion = service.complete_practice(tally, end_time=now + timedelta(minutes=2))

    assert set(completion.achievements_unlocked) == {
        "First Word",
        "Week Streak",
        "Perfect Session",
    }
    assert completion.accuracy_rate == 100
    assert completion.xp_earned == 7 * 10 + 2 * (1 + 2 + 3 + 4 + 5 + 6 + 7)

    stored = store.get_one(PracticeSession, PracticeSession.id == completion.session_id)
    assert set(stored.achievements_unlocked) == set(completion.achievements_unlocked)
    assert total_xp(store, "S1") == completion.xp_earned
    # achievement rewards are informational only
    assert store.count(StudentAchievement, StudentAchievement.student_id == "S1") == 3

    again = PracticeTally(student_id="S1", session_type="flashcards", start_time=now)
    for _ in range(7):
        again.register_answer("cat-gato", True)
    second = service.complete_practice(again, end_time=now + timedelta(minutes=4))
    assert second.achievements_unlocked == []


def test_complete_practice_rolls_back_on_failure(
    service: PracticeSessionService, store, students, monkeypatch, now: datetime
) -> None:
    tally = PracticeTally(student_id="S1", session_type="flashcards", start_time=now)
    tally.register_answer("cat-gato", True)

    def unavailable(*args, **kwargs):
        raise StoreUnavailable("Store operation 'increment' on students failed")

    monkeypatch.setattr(store, "increment", unavailable)

    with pytest.raises(StoreUnavailable):
        service.complete_practice(tally, end_time=now + timedelta(minutes=1))

    monkeypatch.undo()
    assert store.count(PracticeSession) == 0
    assert store.count(StudentAchievement) == 0
    assert total_xp(store, "S1") == 0


def test_session_times_are_normalised_to_utc(now: datetime) -> None:
    session = make_session(
        "S1",
        now.replace(tzinfo=None),
        end_time=(now + timedelta(minutes=5)).astimezone(timezone(timedelta(hours=-5))),
    )

    assert session.start_time == now
    assert session.start_time.tzinfo == timezone.utc
    assert session.end_time == now + timedelta(minutes=5)
    assert session.end_time.utcoffset() == timedelta(0)


def test_tally_default_end_time_never_precedes_start() -> None:
    start = datetime.now(timezone.utc) + timedelta(hours=1)
    tally = PracticeTally(student_id="S1", session_type="typing", start_time=start)

    session = tally.to_session()

    assert session.end_time == start
    assert session.duration_seconds == 0
