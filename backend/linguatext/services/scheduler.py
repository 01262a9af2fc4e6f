"""
SM-2 review scheduler for vocabulary items.

The learner grades each recall from 0 (blackout) to 5 (perfect). Grades of
3 and above count as remembered and grow the review interval; anything
lower sends the item back to "review tomorrow".
"""
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional
import math

from linguatext.errors import InvalidInput

MIN_EASE = 1.3
DEFAULT_EASE = 2.5
PASSING_QUALITY = 3
MIN_QUALITY = 0
MAX_QUALITY = 5

# Intervals for the first successful reviews, indexed by prior repetition
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6


@dataclass(frozen=True)
class ScheduleResult:
    """Scheduling fields after one review."""
    ease: float
    interval: int
    repetition: int


@dataclass(frozen=True)
class ReviewState:
    """Spaced-repetition state carried by a vocabulary entry."""
    ease_factor: float = DEFAULT_EASE
    interval_days: int = 0
    repetition: int = 0
    last_reviewed_at: Optional[datetime] = None
    next_review_at: Optional[datetime] = None
    total_reviews: int = 0
    total_correct: int = 0
    correct_streak: int = 0
    last_result: Optional[bool] = None


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def validate_quality(quality) -> int:
    """Return quality unchanged if it is an integer grade 0-5, else raise InvalidInput."""
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidInput(f"quality must be an integer between {MIN_QUALITY} and {MAX_QUALITY}, got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidInput(f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}")
    return quality


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def schedule(prev_ease: float, prev_interval_days: int, repetition: int, quality: int) -> ScheduleResult:
    """
    Compute the next ease, interval and repetition count.

    Args:
        prev_ease: Ease factor before this review
        prev_interval_days: Interval that led to this review
        repetition: Consecutive successful reviews before this one
        quality: Recall grade 0-5

    Returns:
        ScheduleResult with the new scheduling fields

    Raises:
        InvalidInput: If quality is not an integer in 0-5
    """
    validate_quality(quality)

    if quality < PASSING_QUALITY:
        return ScheduleResult(ease=prev_ease, interval=FIRST_INTERVAL_DAYS, repetition=0)

    ease = max(MIN_EASE, prev_ease + 0.1 - (MAX_QUALITY - quality) * 0.08)

    if repetition <= 1:
        interval = FIRST_INTERVAL_DAYS
    elif repetition == 2:
        interval = SECOND_INTERVAL_DAYS
    else:
        # A zero prior interval would otherwise schedule the item for right now
        interval = max(FIRST_INTERVAL_DAYS, round_half_up(prev_interval_days * ease))

    return ScheduleResult(ease=ease, interval=interval, repetition=repetition + 1)


def record_review(state: ReviewState, quality: int, now: Optional[datetime] = None) -> ReviewState:
    """
    Apply one graded review to a state and return the updated state.

    Besides the SM-2 fields this bumps the review counters, the streak and
    the next review date. The input state is left untouched.
    """
    if now is None:
        now = utc_now()

    result = schedule(state.ease_factor, state.interval_days, state.repetition, quality)
    passed = quality >= PASSING_QUALITY

    return replace(
        state,
        ease_factor=result.ease,
        interval_days=result.interval,
        repetition=result.repetition,
        last_reviewed_at=now,
        next_review_at=now + timedelta(days=result.interval),
        total_reviews=state.total_reviews + 1,
        total_correct=state.total_correct + (1 if passed else 0),
        correct_streak=state.correct_streak + 1 if passed else 0,
        last_result=passed,
    )
