#!/usr/bin/env python3
"""
scheduler.py
--------------------
Spaced-repetition scheduling for notes.

schedule_review is a pure function: it takes a note's current ReviewData
and a ReviewQuality grade and returns the updated ReviewData. Persisting
the result and updating review statistics is left to the caller.

Per-quality rules (the ease factor is recomputed before the interval):
    again: ease' = max(MIN_EASE, ease * AGAIN);  interval' = INITIAL_INTERVAL
    hard:  ease' = max(MIN_EASE, ease * HARD);   interval' = max(1, floor(interval * HARD))
    good:  ease' = ease;                         interval' = max(GRADUATING_INTERVAL, floor(interval * GOOD * ease'))
    easy:  ease' = min(MAX_EASE, ease * EASY);   interval' = floor(interval * EASY * ease')

A note becomes mastered when it is reviewed successfully while its review
count (before incrementing) is already at MASTERY_REVIEW_COUNT, i.e. on
its 21st review.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from mnemos.core.exceptions import ValidationError
from mnemos.database.models.enums import ReviewQuality, ReviewStatus

INITIAL_EASE = 2.5
MIN_EASE = 1.3
MAX_EASE = 3.0

AGAIN_MULTIPLIER = 0.5
HARD_MULTIPLIER = 0.8
GOOD_MULTIPLIER = 1.0
EASY_MULTIPLIER = 1.3

INITIAL_INTERVAL = 1
GRADUATING_INTERVAL = 4
MASTERY_REVIEW_COUNT = 20

# Contribution of each grade to the rolling review accuracy
REVIEW_ACCURACY: Dict[ReviewQuality, float] = {
    ReviewQuality.AGAIN: 0.0,
    ReviewQuality.HARD: 0.5,
    ReviewQuality.GOOD: 0.8,
    ReviewQuality.EASY: 1.0,
}

# Wisdom points recorded on the review activity entry
REVIEW_POINTS: Dict[ReviewQuality, int] = {
    ReviewQuality.AGAIN: 2,
    ReviewQuality.HARD: 5,
    ReviewQuality.GOOD: 10,
    ReviewQuality.EASY: 15,
}

_REVIEW_FIELDS = (
    "ease_factor",
    "interval",
    "next_review",
    "review_count",
    "last_reviewed",
    "correct_streak",
    "total_reviews",
)


@dataclass(frozen=True)
class ReviewData:
    """
    Scheduling state of a single note.

    Attributes:
        status: Learning stage
        ease_factor: Interval growth multiplier, within [MIN_EASE, MAX_EASE]
        interval: Days until the next review (>= 1)
        next_review: When the note is next due
        review_count: Number of reviews so far
        last_reviewed: Time of the last review, or None
        correct_streak: Consecutive reviews not graded 'again'
        total_reviews: Number of reviews so far
    """

    status: ReviewStatus
    ease_factor: float
    interval: int
    next_review: datetime
    review_count: int = 0
    last_reviewed: Optional[datetime] = None
    correct_streak: int = 0
    total_reviews: int = 0

    @classmethod
    def initial(cls, now: datetime) -> "ReviewData":
        """Review data for a newly created note, first due one interval from now."""
        return cls(
            status=ReviewStatus.NEW,
            ease_factor=INITIAL_EASE,
            interval=INITIAL_INTERVAL,
            next_review=now + timedelta(days=INITIAL_INTERVAL),
        )

    @classmethod
    def from_note(cls, note: Any) -> "ReviewData":
        """Read the review columns of a Note."""
        return cls(
            status=note.review_status,
            **{name: getattr(note, name) for name in _REVIEW_FIELDS},
        )

    def apply_to(self, note: Any) -> None:
        """Write this review data onto the review columns of a Note."""
        note.review_status = self.status
        for name in _REVIEW_FIELDS:
            setattr(note, name, getattr(self, name))


def schedule_review(
    review: ReviewData, quality: ReviewQuality, now: datetime
) -> ReviewData:
    """
    Compute the scheduling state after a review.

    Args:
        review: Current review data
        quality: Recall grade
        now: Review time; next_review is now + interval' days

    Returns:
        New ReviewData

    Raises:
        ValidationError: If quality is not a ReviewQuality
    """
    ease = review.ease_factor
    interval = review.interval

    if quality is ReviewQuality.AGAIN:
        new_ease = max(MIN_EASE, ease * AGAIN_MULTIPLIER)
        new_interval = INITIAL_INTERVAL
    elif quality is ReviewQuality.HARD:
        new_ease = max(MIN_EASE, ease * HARD_MULTIPLIER)
        new_interval = max(1, math.floor(interval * HARD_MULTIPLIER))
    elif quality is ReviewQuality.GOOD:
        new_ease = ease
        new_interval = max(
            GRADUATING_INTERVAL, math.floor(interval * GOOD_MULTIPLIER * new_ease)
        )
    elif quality is ReviewQuality.EASY:
        new_ease = min(MAX_EASE, ease * EASY_MULTIPLIER)
        new_interval = math.floor(interval * EASY_MULTIPLIER * new_ease)
    else:
        raise ValidationError(f"Unknown review quality: {quality!r}")

    if quality is ReviewQuality.AGAIN:
        status = ReviewStatus.LEARNING
    elif review.review_count >= MASTERY_REVIEW_COUNT:
        status = ReviewStatus.MASTERED
    else:
        status = ReviewStatus.REVIEWING

    return replace(
        review,
        status=status,
        ease_factor=new_ease,
        interval=new_interval,
        next_review=now + timedelta(days=new_interval),
        review_count=review.review_count + 1,
        last_reviewed=now,
        correct_streak=0 if quality is ReviewQuality.AGAIN else review.correct_streak + 1,
        total_reviews=review.total_reviews + 1,
    )
