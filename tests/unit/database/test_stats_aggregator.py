"""
test_stats_aggregator.py
------------------------
Tests for the activity log, streak and domain rules, and StatsAggregator.
"""
import pytest
from datetime import datetime, timedelta, timezone

from mnemos.database.models import ActivityType, KnowledgeDomain
from mnemos.database.stats_aggregator import (
    ACTIVITY_LOG_SIZE,
    COLLECT_POINTS,
    ActivityLog,
    StatsAggregator,
    most_productive_domain,
    next_review_streak,
)

NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


class TestActivityLog:
    """Fixed-capacity, newest-first log."""

    def test_newest_first(self):
        log = ActivityLog()
        log.record(ActivityType.NOTE_CREATED, "first", NOW)
        log.record(ActivityType.LINK_CREATED, "second", NOW)
        assert [e["description"] for e in log] == ["second", "first"]

    def test_capacity_drops_oldest(self):
        log = ActivityLog()
        for i in range(ACTIVITY_LOG_SIZE + 3):
            log.record(ActivityType.NOTE_CREATED, f"note {i}", NOW)
        entries = log.to_list()
        assert len(entries) == ACTIVITY_LOG_SIZE
        assert entries[0]["description"] == "note 12"
        assert entries[-1]["description"] == "note 3"

    def test_points_optional(self):
        log = ActivityLog()
        entry = log.record(ActivityType.LINK_CREATED, "linked", NOW)
        assert "points" not in entry
        assert entry["timestamp"] == NOW.isoformat()

    def test_latest_and_count(self):
        log = ActivityLog()
        log.record(ActivityType.NOTE_REVIEWED, "old", NOW)
        log.record(ActivityType.NOTE_CREATED, "made", NOW)
        log.record(ActivityType.NOTE_REVIEWED, "new", NOW)
        assert log.count(ActivityType.NOTE_REVIEWED) == 2
        assert log.latest(ActivityType.NOTE_REVIEWED)["description"] == "new"
        assert log.latest(ActivityType.QUEST_COMPLETED) is None


class TestRules:
    """Pure helper rules."""

    def test_most_productive_domain(self):
        counts = {KnowledgeDomain.ART: 2, KnowledgeDomain.SCIENCE: 3}
        assert most_productive_domain(counts) is KnowledgeDomain.SCIENCE

    def test_most_productive_domain_tie_uses_declaration_order(self):
        counts = {KnowledgeDomain.ART: 2, KnowledgeDomain.SCIENCE: 2}
        assert most_productive_domain(counts) is KnowledgeDomain.SCIENCE

    def test_most_productive_domain_empty(self):
        assert most_productive_domain({}) is KnowledgeDomain.PERSONAL

    @pytest.mark.parametrize(
        "streak, last, expected",
        [
            (0, None, 1),
            (3, NOW - timedelta(hours=2), 3),
            (0, NOW - timedelta(hours=2), 1),
            (3, NOW - timedelta(days=1), 4),
            (3, NOW - timedelta(days=3), 1),
        ],
    )
    def test_next_review_streak(self, streak, last, expected):
        assert next_review_streak(streak, last, NOW) == expected


class TestStatsAggregator:
    """Counter updates against the Stats singleton."""

    @pytest.fixture
    def aggregator(self, db):
        return StatsAggregator(db)

    def test_note_created(self, aggregator, note_factory):
        note_factory("n1", domain="art")
        stats = aggregator.note_created("Colour theory", NOW)
        assert stats.total_notes == 1
        assert stats.most_productive_domain is KnowledgeDomain.ART
        entry = stats.recent_activity[0]
        assert entry["type"] == "note_created"
        assert entry["description"] == "Created note: Colour theory"
        assert entry["points"] == 10

    def test_note_deleted_floors_at_zero(self, aggregator):
        aggregator.link_created()
        stats = aggregator.note_deleted(removed_links=4)
        assert stats.total_notes == 0
        assert stats.total_links == 0

    def test_note_deleted_subtracts_links(self, aggregator, stats_manager):
        stats_manager.update({"total_notes": 3, "total_links": 5})
        stats = aggregator.note_deleted(removed_links=2)
        assert stats.total_notes == 2
        assert stats.total_links == 3

    def test_note_collected(self, aggregator):
        stats = aggregator.note_collected()
        assert stats.collected_notes == 1
        assert stats.wisdom_points == COLLECT_POINTS

    def test_link_counters(self, aggregator):
        aggregator.link_created()
        aggregator.link_created()
        assert aggregator.link_deleted().total_links == 1

    def test_running_accuracy_and_streak(self, aggregator):
        aggregator.note_reviewed("A", 1.0, 10, NOW)
        stats = aggregator.note_reviewed("B", 0.5, 10, NOW + timedelta(days=1))
        assert stats.average_review_accuracy == pytest.approx(0.75)
        assert stats.review_streak == 2
        assert [e["type"] for e in stats.recent_activity] == ["note_reviewed"] * 2

    def test_quest_completed(self, aggregator):
        stats = aggregator.quest_completed("First Steps", 50, NOW)
        assert stats.completed_quests == 1
        assert stats.wisdom_points == 50
        assert stats.recent_activity[0]["points"] == 50
