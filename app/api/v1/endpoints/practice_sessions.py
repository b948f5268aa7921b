"""Endpoints for finished practice runs."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.schemas import (
    PracticeCompletionRequest,
    PracticeCompletionResponse,
    PracticeSessionCreate,
    PracticeSessionCreated,
    PracticeSessionRead,
)
from app.services.practice_session import PracticeSessionService, PracticeTally


router = APIRouter(prefix="/practice-sessions", tags=["practice-sessions"])


@router.post("", response_model=PracticeSessionCreated, status_code=status.HTTP_201_CREATED)
def record_session(
    *,
    payload: PracticeSessionCreate,
    service: PracticeSessionService = Depends(deps.get_practice_session_service),
) -> PracticeSessionCreated:
    """Store a finished session and credit its XP to the student."""

    return PracticeSessionCreated(id=service.record_session(payload))


@router.post(
    "/complete", response_model=PracticeCompletionResponse, status_code=status.HTTP_201_CREATED
)
def complete_practice(
    *,
    payload: PracticeCompletionRequest,
    service: PracticeSessionService = Depends(deps.get_practice_session_service),
) -> PracticeCompletionResponse:
    """Replay a run's answers, unlock achievements and record the session."""

    tally = PracticeTally(
        student_id=payload.student_id,
        session_type=payload.session_type,
        start_time=payload.start_time,
        total_words=payload.total_words,
        source_session_ids=payload.source_session_ids,
    )
    for answer in payload.answers:
        tally.register_answer(answer.word_id, answer.correct)

    completion = service.complete_practice(tally, end_time=payload.end_time)
    return PracticeCompletionResponse(
        session_id=completion.session_id,
        accuracy_rate=completion.accuracy_rate,
        xp_earned=completion.xp_earned,
        achievements_unlocked=completion.achievements_unlocked,
    )


@router.get("/{student_id}", response_model=list[PracticeSessionRead])
def get_practice_history(
    *,
    student_id: str,
    limit: int | None = Query(
        None, ge=1, le=100, description="Maximum number of sessions to return"
    ),
    service: PracticeSessionService = Depends(deps.get_practice_session_service),
) -> list[PracticeSessionRead]:
    """Return the student's most recent sessions."""

    return [
        PracticeSessionRead.model_validate(item)
        for item in service.get_practice_history(student_id, limit=limit)
    ]
