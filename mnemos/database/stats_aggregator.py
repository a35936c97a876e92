#!/usr/bin/env python3
"""
stats_aggregator.py
--------------------
Rolling counters and the recent-activity log.

StatsAggregator is invoked by every mutating command. Each method is a
read-modify-write of the Stats singleton; callers serialize commands
(KnowledgeBase holds a single-writer lock) and run each one inside one
session_scope, so updates never interleave.

Rules:
    note created    total_notes + 1, 'note_created' activity worth 10 points
    note deleted    total_notes - 1 and total_links - <cascaded links>, floored at 0
    note collected  collected_notes + 1, wisdom_points + 5
    link created    total_links + 1
    link deleted    total_links - 1, floored at 0
    note reviewed   rolling accuracy, 'note_reviewed' activity, review streak
    quest completed completed_quests + 1, wisdom_points + reward
"""
from __future__ import annotations

from collections import deque
from datetime import datetime
from typing import Any, Deque, Dict, Iterable, Iterator, List, Optional

from mnemos.core.identifiers import new_id
from mnemos.core.logging_manager import MnemosLogger, safe_logger
from mnemos.core.validators import DataValidator
from mnemos.database.models import ActivityType, KnowledgeDomain, Stats, utcnow

ACTIVITY_LOG_SIZE = 10
NOTE_CREATED_POINTS = 10
COLLECT_POINTS = 5


class ActivityLog:
    """
    Fixed-capacity activity log, newest entry first.

    Recording into a full log drops the oldest entry.
    """

    def __init__(
        self, entries: Iterable[Dict[str, Any]] = (), capacity: int = ACTIVITY_LOG_SIZE
    ) -> None:
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=capacity)
        self._entries.extend(list(entries)[:capacity])

    def record(
        self,
        activity_type: ActivityType,
        description: str,
        timestamp: datetime,
        points: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Prepend a new entry and return it."""
        entry: Dict[str, Any] = {
            "id": new_id("activity"),
            "type": activity_type.value,
            "timestamp": timestamp.isoformat(),
            "description": description,
        }
        if points is not None:
            entry["points"] = points
        self._entries.appendleft(entry)
        return entry

    def count(self, activity_type: ActivityType) -> int:
        return sum(1 for entry in self._entries if entry["type"] == activity_type.value)

    def latest(self, activity_type: ActivityType) -> Optional[Dict[str, Any]]:
        """Most recent entry of the given type, if still retained."""
        for entry in self._entries:
            if entry["type"] == activity_type.value:
                return entry
        return None

    def to_list(self) -> List[Dict[str, Any]]:
        return [dict(entry) for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._entries)


def most_productive_domain(counts: Dict[KnowledgeDomain, int]) -> KnowledgeDomain:
    """
    Domain with the most notes.

    Ties go to the domain declared first in KnowledgeDomain; with no notes
    the result is PERSONAL.
    """
    best = KnowledgeDomain.PERSONAL
    best_count = 0
    for domain in KnowledgeDomain:
        count = counts.get(domain, 0)
        if count > best_count:
            best, best_count = domain, count
    return best


def next_review_streak(
    streak: int, last_review: Optional[datetime], now: datetime
) -> int:
    """
    Streak of consecutive UTC days with at least one review.

    Args:
        streak: Current streak
        last_review: Time of the previous review, if known
        now: Time of the review being recorded
    """
    if last_review is None:
        return 1
    gap = (now.date() - last_review.date()).days
    if gap <= 0:
        return max(streak, 1)
    if gap == 1:
        return streak + 1
    return 1


class StatsAggregator:
    """
    Stateless helper updating the Stats singleton.

    Attributes:
        db: MnemosDB with an active session_scope
        logger: Optional logger
    """

    def __init__(self, db: Any, logger: Optional[MnemosLogger] = None) -> None:
        self.db = db
        self.logger = logger

    def _stats(self) -> Stats:
        return self.db.stats.get_or_create()

    def _save_log(self, stats: Stats, log: ActivityLog) -> None:
        stats.recent_activity = log.to_list()

    def _refresh_domain(self, stats: Stats) -> None:
        stats.most_productive_domain = most_productive_domain(self.db.notes.domain_counts())

    def note_created(self, title: str, now: Optional[datetime] = None) -> Stats:
        now = now or utcnow()
        stats = self._stats()
        stats.total_notes += 1
        log = ActivityLog(stats.recent_activity)
        log.record(
            ActivityType.NOTE_CREATED, f"Created note: {title}", now, NOTE_CREATED_POINTS
        )
        self._save_log(stats, log)
        self._refresh_domain(stats)
        return stats

    def note_deleted(self, removed_links: int = 0) -> Stats:
        stats = self._stats()
        stats.total_notes = max(0, stats.total_notes - 1)
        stats.total_links = max(0, stats.total_links - removed_links)
        self._refresh_domain(stats)
        return stats

    def note_collected(self) -> Stats:
        stats = self._stats()
        stats.collected_notes += 1
        stats.wisdom_points += COLLECT_POINTS
        return stats

    def link_created(self) -> Stats:
        stats = self._stats()
        stats.total_links += 1
        return stats

    def link_deleted(self) -> Stats:
        stats = self._stats()
        stats.total_links = max(0, stats.total_links - 1)
        return stats

    def note_reviewed(
        self,
        title: str,
        accuracy: float,
        points: int,
        now: Optional[datetime] = None,
    ) -> Stats:
        """
        Fold a review into the rolling accuracy and the activity log.

        The mean is taken over the reviewed entries still retained in the
        log, so it weights recent reviews.
        """
        now = now or utcnow()
        stats = self._stats()
        log = ActivityLog(stats.recent_activity)

        reviewed = log.count(ActivityType.NOTE_REVIEWED)
        stats.average_review_accuracy = (
            stats.average_review_accuracy * reviewed + accuracy
        ) / (reviewed + 1)

        previous = log.latest(ActivityType.NOTE_REVIEWED)
        last_review = (
            DataValidator.normalize_datetime(previous["timestamp"]) if previous else None
        )
        stats.review_streak = next_review_streak(stats.review_streak, last_review, now)

        log.record(ActivityType.NOTE_REVIEWED, f"Reviewed note: {title}", now, points)
        self._save_log(stats, log)

        safe_logger(self.logger).log_debug(
            "Review recorded",
            {"accuracy": accuracy, "average": stats.average_review_accuracy},
        )
        return stats

    def quest_completed(
        self, title: str, reward_points: int, now: Optional[datetime] = None
    ) -> Stats:
        now = now or utcnow()
        stats = self._stats()
        stats.completed_quests += 1
        stats.wisdom_points += reward_points
        log = ActivityLog(stats.recent_activity)
        log.record(
            ActivityType.QUEST_COMPLETED, f"Completed quest: {title}", now, reward_points
        )
        self._save_log(stats, log)
        return stats
