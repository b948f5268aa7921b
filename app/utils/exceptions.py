"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from loguru import logger


class VocabularyEngineError(Exception):
    """Base exception for the vocabulary engine."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class StoreUnavailable(VocabularyEngineError):
    """The persistence layer could not be reached or a statement failed."""


class ValidationError(VocabularyEngineError):
    """A record violates its invariants and must not be written."""


class ConcurrencyConflict(VocabularyEngineError):
    """A conditional write lost a race against a concurrent update."""


class NotFoundError(VocabularyEngineError):
    """A requested record does not exist."""


def handle_store_unavailable(error: StoreUnavailable) -> HTTPException:
    """Handle persistence outages."""
    logger.error(f"Store unavailable: {error.message}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Progress store is temporarily unavailable. Please try again later.",
    )


def handle_validation_error(error: ValidationError) -> HTTPException:
    """Handle invariant violations."""
    logger.warning(f"Validation error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "message": error.message,
            "details": error.details,
        },
    )


def handle_concurrency_conflict(error: ConcurrencyConflict) -> HTTPException:
    """Handle lost races on conditional writes."""
    logger.warning(f"Concurrency conflict: {error.message}")
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=error.message,
    )


def handle_not_found(error: NotFoundError) -> HTTPException:
    """Handle missing records."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error.message,
    )


def to_http_exception(error: VocabularyEngineError) -> HTTPException:
    """Map an engine error onto the matching HTTP response."""
    if isinstance(error, StoreUnavailable):
        return handle_store_unavailable(error)
    if isinstance(error, ValidationError):
        return handle_validation_error(error)
    if isinstance(error, ConcurrencyConflict):
        return handle_concurrency_conflict(error)
    if isinstance(error, NotFoundError):
        return handle_not_found(error)
    logger.error(f"Unhandled engine error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error.message,
    )
