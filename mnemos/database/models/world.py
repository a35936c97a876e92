"""
World Models
-------------

Quests and rooms of the knowledge house.

Models:
    - Quest: A goal over a set of notes with a wisdom-point reward
    - Room: A themed space where notes are placed

Nested structures (rewards, color schemes, furniture, note positions)
are stored as JSON and are opaque to the core.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UTCDateTime, enum_type, utcnow
from .enums import KnowledgeDomain, QuestDifficulty


class Quest(Base):
    """
    Goal over a set of required notes.

    Attributes:
        id: String identifier
        title, description, objective: Display text
        domain: KnowledgeDomain the quest belongs to
        required_notes: Note ids that count toward progress
        reward: {'wisdomPoints': int, 'unlocksRoom'?, 'unlocksFeature'?, 'specialEffect'?}
        difficulty: QuestDifficulty
        is_completed: Completion flag
        progress: 0-100
        created_at, completed_at: Timestamps
    """

    __tablename__ = "quests"
    __table_args__ = (
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_quest_progress"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    objective: Mapped[str] = mapped_column(Text, nullable=False, default="")
    domain: Mapped[KnowledgeDomain] = mapped_column(
        enum_type(KnowledgeDomain, "quest_domain"), nullable=False
    )
    required_notes: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    reward: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    difficulty: Mapped[QuestDifficulty] = mapped_column(
        enum_type(QuestDifficulty, "quest_difficulty"), nullable=False
    )
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    completed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)


class Room(Base):
    """
    Themed space holding note placements.

    Attributes:
        id: String identifier (e.g. 'main_hall')
        name, description: Display text
        domain: KnowledgeDomain
        position: {'x', 'y'}
        size: {'width', 'height'}
        color_scheme: Colors and atmosphere
        is_unlocked: Whether the room is accessible
        unlock_requirement: Optional requirement text
        note_positions: Placement records for notes
        furniture: Furniture records
    """

    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    domain: Mapped[KnowledgeDomain] = mapped_column(
        enum_type(KnowledgeDomain, "room_domain"), nullable=False
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    position: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    size: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    color_scheme: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    is_unlocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    unlock_requirement: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    note_positions: Mapped[List[Any]] = mapped_column(JSON, nullable=False, default=list)
    furniture: Mapped[List[Any]] = mapped_column(JSON, nullable=False, default=list)
