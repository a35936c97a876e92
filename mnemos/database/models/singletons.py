"""
Singleton Models
-----------------

Aggregates that exist exactly once per knowledge base.

Models:
    - Stats: Rolling counters and the recent-activity log
    - Settings: User preferences

Both are keyed by SINGLETON_ID, created with defaults on first
initialization and never deleted afterwards (except by a snapshot import,
which replaces them).
"""
from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import JSON, Boolean, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, enum_type
from .enums import KnowledgeDomain, Theme

SINGLETON_ID = "main"


class Stats(Base):
    """
    Knowledge-base statistics.

    Attributes:
        total_notes, collected_notes, total_links: Counters
        review_streak: Consecutive days with at least one review
        wisdom_points: Accumulated reward points
        completed_quests: Count of completed quests
        average_review_accuracy: Running mean over reviewed activity entries
        most_productive_domain: Domain with the most notes
        recent_activity: Most recent activity entries, newest first (max 10)
    """

    __tablename__ = "stats"

    id: Mapped[str] = mapped_column(String(16), primary_key=True, default=SINGLETON_ID)
    total_notes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    collected_notes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_links: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    review_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wisdom_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_quests: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    average_review_accuracy: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    most_productive_domain: Mapped[KnowledgeDomain] = mapped_column(
        enum_type(KnowledgeDomain, "stats_domain"),
        nullable=False,
        default=KnowledgeDomain.PERSONAL,
    )
    recent_activity: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )


class Settings(Base):
    """
    User preferences.

    Attributes:
        auto_save: Auto-save flag
        default_domain: Domain given to notes created without one
        review_reminders: Reminder flag
        daily_review_goal: Reviews per day
        theme: Presentation theme
        sound_effects: Sound flag
        show_backlinks: Backlink visibility flag
        auto_link_similar: Auto-link-similar flag
    """

    __tablename__ = "settings"

    id: Mapped[str] = mapped_column(String(16), primary_key=True, default=SINGLETON_ID)
    auto_save: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    default_domain: Mapped[KnowledgeDomain] = mapped_column(
        enum_type(KnowledgeDomain, "settings_domain"),
        nullable=False,
        default=KnowledgeDomain.PERSONAL,
    )
    review_reminders: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    daily_review_goal: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    theme: Mapped[Theme] = mapped_column(
        enum_type(Theme, "theme"), nullable=False, default=Theme.RETRO_SNES
    )
    sound_effects: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_backlinks: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    auto_link_similar: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
