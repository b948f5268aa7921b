"""Utility helpers package."""

from app.utils.exceptions import (
    ConcurrencyConflict,
    NotFoundError,
    StoreUnavailable,
    ValidationError,
    VocabularyEngineError,
)

__all__ = [
    "ConcurrencyConflict",
    "NotFoundError",
    "StoreUnavailable",
    "ValidationError",
    "VocabularyEngineError",
]
