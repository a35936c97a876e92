"""
test_scheduler.py
-----------------
Unit tests for the spaced-repetition scheduler.

The scheduler is a pure function, so these tests work on ReviewData
values directly without a database.
"""
import pytest
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from mnemos.core.exceptions import ValidationError
from mnemos.database.models import ReviewQuality, ReviewStatus
from mnemos.review.scheduler import (
    INITIAL_EASE,
    MASTERY_REVIEW_COUNT,
    MAX_EASE,
    MIN_EASE,
    ReviewData,
    schedule_review,
)

NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fresh():
    """Review data of a newly created note."""
    return ReviewData.initial(NOW)


class TestInitialReviewData:
    """Tests for ReviewData.initial()."""

    def test_defaults(self, fresh):
        assert fresh.status is ReviewStatus.NEW
        assert fresh.ease_factor == INITIAL_EASE
        assert fresh.interval == 1
        assert fresh.next_review == NOW + timedelta(days=1)
        assert fresh.review_count == 0
        assert fresh.last_reviewed is None
        assert fresh.correct_streak == 0
        assert fresh.total_reviews == 0


class TestQualityRules:
    """Per-quality ease and interval rules."""

    def test_good_on_new_note_graduates(self, fresh):
        """good: interval = max(4, floor(1 * 1.0 * 2.5)) = 4, ease unchanged."""
        result = schedule_review(fresh, ReviewQuality.GOOD, NOW)
        assert result.interval == 4
        assert result.ease_factor == 2.5
        assert result.status is ReviewStatus.REVIEWING
        assert result.next_review == NOW + timedelta(days=4)

    def test_again_after_good(self, fresh):
        """again: ease = max(1.3, 2.5 * 0.5), interval 1, learning, streak reset."""
        later = NOW + timedelta(days=4)
        first = schedule_review(fresh, ReviewQuality.GOOD, NOW)
        result = schedule_review(first, ReviewQuality.AGAIN, later)
        assert result.ease_factor == pytest.approx(1.3)
        assert result.interval == 1
        assert result.status is ReviewStatus.LEARNING
        assert result.correct_streak == 0
        assert result.next_review == later + timedelta(days=1)

    def test_hard_shrinks_interval_and_ease(self, fresh):
        state = replace(fresh, interval=10)
        result = schedule_review(state, ReviewQuality.HARD, NOW)
        assert result.ease_factor == pytest.approx(2.0)
        assert result.interval == 8

    def test_hard_interval_floor_is_one(self, fresh):
        result = schedule_review(fresh, ReviewQuality.HARD, NOW)
        assert result.interval == 1

    def test_easy_uses_new_ease(self, fresh):
        """easy: ease = min(3.0, 2.5 * 1.3) = 3.0; interval = floor(10 * 1.3 * 3.0)."""
        state = replace(fresh, interval=10)
        result = schedule_review(state, ReviewQuality.EASY, NOW)
        assert result.ease_factor == MAX_EASE
        assert result.interval == 39

    def test_easy_on_new_note(self, fresh):
        result = schedule_review(fresh, ReviewQuality.EASY, NOW)
        assert result.interval == 3
        assert result.status is ReviewStatus.REVIEWING

    def test_unknown_quality_raises(self, fresh):
        with pytest.raises(ValidationError):
            schedule_review(fresh, "perfect", NOW)


class TestCounters:
    """Review counters and timestamps."""

    def test_counters_increment(self, fresh):
        result = schedule_review(fresh, ReviewQuality.GOOD, NOW)
        assert result.review_count == 1
        assert result.total_reviews == 1
        assert result.correct_streak == 1
        assert result.last_reviewed == NOW

    @pytest.mark.parametrize("quality", list(ReviewQuality))
    def test_again_always_resets(self, fresh, quality):
        """Whatever came before, again resets interval and streak."""
        state = schedule_review(fresh, quality, NOW)
        state = replace(state, interval=30, correct_streak=7)
        result = schedule_review(state, ReviewQuality.AGAIN, NOW)
        assert result.interval == 1
        assert result.correct_streak == 0

    def test_input_is_not_modified(self, fresh):
        schedule_review(fresh, ReviewQuality.EASY, NOW)
        assert fresh.review_count == 0
        assert fresh.ease_factor == INITIAL_EASE


class TestStatusTransitions:
    """Status transitions, including the mastery threshold."""

    def test_mastery_uses_count_before_review(self, fresh):
        """The 20th review stays reviewing; the 21st masters the note."""
        state = replace(fresh, review_count=MASTERY_REVIEW_COUNT - 1)
        twentieth = schedule_review(state, ReviewQuality.GOOD, NOW)
        assert twentieth.review_count == MASTERY_REVIEW_COUNT
        assert twentieth.status is ReviewStatus.REVIEWING

        twenty_first = schedule_review(twentieth, ReviewQuality.GOOD, NOW)
        assert twenty_first.status is ReviewStatus.MASTERED

    def test_again_beats_mastery(self, fresh):
        state = replace(fresh, review_count=50, status=ReviewStatus.MASTERED)
        result = schedule_review(state, ReviewQuality.AGAIN, NOW)
        assert result.status is ReviewStatus.LEARNING


class TestEaseBounds:
    """Ease factor stays within [MIN_EASE, MAX_EASE]."""

    def test_bounds_hold_over_long_sequences(self, fresh):
        qualities = list(ReviewQuality)
        state = fresh
        for i in range(200):
            quality = qualities[(i * 7 + i // 3) % len(qualities)]
            state = schedule_review(state, quality, NOW + timedelta(days=i))
            assert MIN_EASE <= state.ease_factor <= MAX_EASE
            assert state.interval >= 1

    def test_repeated_again_floors_at_min(self, fresh):
        state = fresh
        for _ in range(5):
            state = schedule_review(state, ReviewQuality.AGAIN, NOW)
        assert state.ease_factor == MIN_EASE

    def test_repeated_easy_caps_at_max(self, fresh):
        state = fresh
        for _ in range(5):
            state = schedule_review(state, ReviewQuality.EASY, NOW)
        assert state.ease_factor == MAX_EASE


class TestNoteRoundTrip:
    """ReviewData.from_note() and apply_to()."""

    def test_apply_then_read_back(self, fresh):
        note = SimpleNamespace()
        result = schedule_review(fresh, ReviewQuality.GOOD, NOW)
        result.apply_to(note)

        assert note.review_status is ReviewStatus.REVIEWING
        assert note.interval == 4
        assert ReviewData.from_note(note) == result
