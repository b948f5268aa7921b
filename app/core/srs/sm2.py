"""SM-2 review scheduler used for vocabulary practice.

This is a reduced SM-2: the practice UI only reports right or
wrong, which map to quality 5 and 2. There are no learning steps; a failed
review always comes back tomorrow and the first successful review after that
jumps straight to six days.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

MIN_EASE_FACTOR = 1.3
DEFAULT_EASE_FACTOR = 2.5
DEFAULT_INTERVAL_DAYS = 1

# Interval used on the first successful review after a one-day interval
BOOTSTRAP_INTERVAL_DAYS = 6

QUALITY_CORRECT = 5
QUALITY_INCORRECT = 2
PASSING_QUALITY = 3


def round_half_up(value: float) -> int:
    """Round halves away from zero for positive values (2.5 -> 3, not 2)."""

    return math.floor(value + 0.5)


@dataclass(frozen=True, slots=True)
class ReviewSchedule:
    """Outcome of scheduling one review."""

    interval_days: int
    ease_factor: float


def quality_for(correct: bool) -> int:
    """Translate a right/wrong answer into an SM-2 quality score."""

    return QUALITY_CORRECT if correct else QUALITY_INCORRECT


def update_ease_factor(ease_factor: float, quality: int) -> float:
    """Update ease factor based on response quality.

    SM-2 formula: EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)),
    floored at 1.3.
    """

    new_ef = ease_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    return max(MIN_EASE_FACTOR, new_ef)


def next_review(
    quality: int,
    previous_interval_days: int = DEFAULT_INTERVAL_DAYS,
    ease_factor: float = DEFAULT_EASE_FACTOR,
    *,
    max_interval_days: int | None = None,
) -> ReviewSchedule:
    """Return the next interval and ease factor for a review of ``quality``.

    Args:
        quality: Recall quality from 0 (blackout) to 5 (perfect).
        previous_interval_days: Interval that led to this review.
        ease_factor: Current ease factor of the word.
        max_interval_days: Optional ceiling on the returned interval. ``None``
            keeps intervals unbounded.
    """

    if quality < 0 or quality > 5:
        raise ValueError("Quality must be between 0 and 5 inclusive")

    new_ease_factor = update_ease_factor(ease_factor, quality)

    if quality < PASSING_QUALITY:
        interval = DEFAULT_INTERVAL_DAYS
    elif previous_interval_days == DEFAULT_INTERVAL_DAYS:
        interval = BOOTSTRAP_INTERVAL_DAYS
    else:
        interval = round_half_up(previous_interval_days * new_ease_factor)

    if max_interval_days is not None:
        interval = min(interval, max_interval_days)

    return ReviewSchedule(interval_days=interval, ease_factor=new_ease_factor)


__all__ = [
    "BOOTSTRAP_INTERVAL_DAYS",
    "DEFAULT_EASE_FACTOR",
    "DEFAULT_INTERVAL_DAYS",
    "MIN_EASE_FACTOR",
    "QUALITY_CORRECT",
    "QUALITY_INCORRECT",
    "ReviewSchedule",
    "next_review",
    "quality_for",
    "round_half_up",
    "update_ease_factor",
]
