"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Mnemos knowledge base.

Modules:
- base: Base class, UTCDateTime column type, SchemaInfo
- enums: Enumeration types
- core: Note and NoteTag
- links: NoteLink
- entities: Tag
- world: Quest and Room
- singletons: Stats and Settings

Usage:
    from mnemos.database.models import Note, NoteLink, Tag
"""
from .base import SCHEMA_VERSION, Base, SchemaInfo, UTCDateTime, utcnow
from .enums import (
    ActivityType,
    KnowledgeDomain,
    LinkType,
    NoteType,
    QuestDifficulty,
    ReviewQuality,
    ReviewStatus,
    Theme,
)
from .core import Note, NoteTag
from .links import NoteLink
from .entities import Tag
from .world import Quest, Room
from .singletons import SINGLETON_ID, Settings, Stats

__all__ = [
    "SCHEMA_VERSION",
    "Base",
    "SchemaInfo",
    "UTCDateTime",
    "utcnow",
    "ActivityType",
    "KnowledgeDomain",
    "LinkType",
    "NoteType",
    "QuestDifficulty",
    "ReviewQuality",
    "ReviewStatus",
    "Theme",
    "Note",
    "NoteTag",
    "NoteLink",
    "Tag",
    "Quest",
    "Room",
    "SINGLETON_ID",
    "Settings",
    "Stats",
]
