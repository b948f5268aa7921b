"""Endpoints for per-word vocabulary progress."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas import PracticeRequest, WordProgressRead
from app.services.progress import ProgressService
from app.utils.exceptions import NotFoundError


router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("/{student_id}/practice", response_model=WordProgressRead)
def record_practice(
    *,
    student_id: str,
    payload: PracticeRequest,
    service: ProgressService = Depends(deps.get_progress_service),
) -> WordProgressRead:
    """Apply one practice attempt and return the updated progress."""

    progress = service.record_practice(student_id, payload.word, payload.result)
    return WordProgressRead.model_validate(progress)


@router.get("/{student_id}", response_model=list[WordProgressRead])
def get_student_progress(
    *,
    student_id: str,
    service: ProgressService = Depends(deps.get_progress_service),
) -> list[WordProgressRead]:
    """Return all practised words, highest mastery first."""

    return [
        WordProgressRead.model_validate(item) for item in service.get_student_progress(student_id)
    ]


@router.get("/{student_id}/due", response_model=list[WordProgressRead])
def get_due_words(
    *,
    student_id: str,
    service: ProgressService = Depends(deps.get_progress_service),
) -> list[WordProgressRead]:
    """Return words due for review now, oldest due first."""

    return [WordProgressRead.model_validate(item) for item in service.get_due_words(student_id)]


@router.get("/{student_id}/words/{word_id:path}", response_model=WordProgressRead)
def get_word_progress(
    *,
    student_id: str,
    word_id: str,
    service: ProgressService = Depends(deps.get_progress_service),
) -> WordProgressRead:
    """Return the student's progress on a single word."""

    progress = service.get_word_progress(student_id, word_id)
    if progress is None:
        raise NotFoundError(f"No progress for word '{word_id}'")
    return WordProgressRead.model_validate(progress)
