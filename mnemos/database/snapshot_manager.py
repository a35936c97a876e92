#!/usr/bin/env python3
"""
snapshot_manager.py
-------------------
Full-graph export and import of the knowledge base.

A snapshot is a single versioned JSON document:

    {
      "version": "1.0",
      "timestamp": "2024-06-10T12:00:00+00:00",
      "notes": [...], "links": [...], "tags": [...],
      "quests": [...], "rooms": [...],
      "stats": {...}, "settings": {...}
    }

Records use camelCase keys; a note nests its scheduling state under
'reviewData' and its derived fields under 'metadata'.

Import clears every collection and re-inserts in dependency order (notes,
links, tags, quests, rooms, then the two singletons) through the managers'
create(), so an id repeated in the document raises DuplicateIdError.
The caller runs import inside one session_scope: a failed import rolls
back and leaves the previous contents in place.

Usage:
    snapshots = SnapshotManager(logger)
    with db.session_scope():
        document = snapshots.export(db)
    with db.session_scope():
        snapshots.import_snapshot(db, document)
"""
from __future__ import annotations

import json
import shutil
import tempfile
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from mnemos.core.exceptions import DatabaseError, ExportError, MalformedDocumentError
from mnemos.core.logging_manager import MnemosLogger, safe_logger
from mnemos.database.decorators import log_database_operation
from mnemos.database.models import (
    Note,
    NoteLink,
    Quest,
    Room,
    Settings,
    Stats,
    Tag,
    utcnow,
)

SNAPSHOT_VERSION = "1.0"
SUPPORTED_VERSIONS = ("1.0",)
COLLECTION_KEYS = ("notes", "links", "tags", "quests", "rooms")
SINGLETON_KEYS = ("stats", "settings")

# (document key, column name) pairs for flat records
LINK_FIELDS: List[Tuple[str, str]] = [
    ("id", "id"),
    ("sourceId", "source_id"),
    ("targetId", "target_id"),
    ("type", "type"),
    ("strength", "strength"),
    ("createdAt", "created_at"),
    ("context", "context"),
]
TAG_FIELDS: List[Tuple[str, str]] = [
    ("id", "id"),
    ("name", "name"),
    ("color", "color"),
    ("description", "description"),
    ("noteCount", "note_count"),
    ("createdAt", "created_at"),
]
QUEST_FIELDS: List[Tuple[str, str]] = [
    ("id", "id"),
    ("title", "title"),
    ("description", "description"),
    ("objective", "objective"),
    ("domain", "domain"),
    ("requiredNotes", "required_notes"),
    ("reward", "reward"),
    ("difficulty", "difficulty"),
    ("isCompleted", "is_completed"),
    ("progress", "progress"),
    ("createdAt", "created_at"),
    ("completedAt", "completed_at"),
]
ROOM_FIELDS: List[Tuple[str, str]] = [
    ("id", "id"),
    ("name", "name"),
    ("domain", "domain"),
    ("description", "description"),
    ("position", "position"),
    ("size", "size"),
    ("colorScheme", "color_scheme"),
    ("isUnlocked", "is_unlocked"),
    ("unlockRequirement", "unlock_requirement"),
    ("notePositions", "note_positions"),
    ("furniture", "furniture"),
]
STATS_FIELDS: List[Tuple[str, str]] = [
    ("totalNotes", "total_notes"),
    ("collectedNotes", "collected_notes"),
    ("totalLinks", "total_links"),
    ("reviewStreak", "review_streak"),
    ("wisdomPoints", "wisdom_points"),
    ("completedQuests", "completed_quests"),
    ("averageReviewAccuracy", "average_review_accuracy"),
    ("mostProductiveDomain", "most_productive_domain"),
    ("recentActivity", "recent_activity"),
]
SETTINGS_FIELDS: List[Tuple[str, str]] = [
    ("autoSave", "auto_save"),
    ("defaultDomain", "default_domain"),
    ("reviewReminders", "review_reminders"),
    ("dailyReviewGoal", "daily_review_goal"),
    ("theme", "theme"),
    ("soundEffects", "sound_effects"),
    ("showBacklinks", "show_backlinks"),
    ("autoLinkSimilar", "auto_link_similar"),
]
NOTE_FIELDS: List[Tuple[str, str]] = [
    ("id", "id"),
    ("title", "title"),
    ("content", "content"),
    ("type", "type"),
    ("domain", "domain"),
    ("tags", "tags"),
    ("createdAt", "created_at"),
    ("updatedAt", "updated_at"),
    ("position", "position"),
    ("isCollected", "is_collected"),
]
REVIEW_FIELDS: List[Tuple[str, str]] = [
    ("status", "review_status"),
    ("easeFactor", "ease_factor"),
    ("interval", "interval"),
    ("nextReview", "next_review"),
    ("reviewCount", "review_count"),
    ("lastReviewed", "last_reviewed"),
    ("correctStreak", "correct_streak"),
    ("totalReviews", "total_reviews"),
]
NOTE_METADATA_FIELDS: List[Tuple[str, str]] = [
    ("wordCount", "word_count"),
    ("readingTime", "reading_time"),
    ("links", "links"),
    ("backlinks", "backlinks"),
    ("attachments", "attachments"),
    ("importance", "importance"),
]

# Optional keys left out of the document when unset
_OMIT_WHEN_NONE = {"context", "completedAt", "unlockRequirement"}


# -------------------------------------------------------------------------
# Serialization
# -------------------------------------------------------------------------


def _to_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_json(v) for k, v in value.items()}
    return value


def _dump(entity: Any, fields: List[Tuple[str, str]]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key, attr in fields:
        value = getattr(entity, attr)
        if value is None and key in _OMIT_WHEN_NONE:
            continue
        data[key] = _to_json(value)
    return data


def _load(data: Dict[str, Any], fields: List[Tuple[str, str]]) -> Dict[str, Any]:
    return {attr: data[key] for key, attr in fields if key in data}


def serialize_note(note: Note) -> Dict[str, Any]:
    """Note as a snapshot record."""
    data = _dump(note, NOTE_FIELDS)
    data["reviewData"] = _dump(note, REVIEW_FIELDS)
    data["metadata"] = _dump(note, NOTE_METADATA_FIELDS)
    return data


def deserialize_note(data: Dict[str, Any]) -> Dict[str, Any]:
    """Snapshot record as NoteManager metadata (derived fields are recomputed)."""
    metadata = _load(data, NOTE_FIELDS)
    review = data.get("reviewData") or {}
    note_meta = data.get("metadata") or {}
    if not isinstance(review, dict) or not isinstance(note_meta, dict):
        raise MalformedDocumentError(
            f"Note {data.get('id')!r}: 'reviewData' and 'metadata' must be mappings"
        )
    metadata.update(_load(review, REVIEW_FIELDS))
    metadata.update(_load(note_meta, NOTE_METADATA_FIELDS))
    for derived in ("word_count", "reading_time"):
        metadata.pop(derived, None)
    return metadata


def serialize_link(link: NoteLink) -> Dict[str, Any]:
    return _dump(link, LINK_FIELDS)


def serialize_tag(tag: Tag) -> Dict[str, Any]:
    return _dump(tag, TAG_FIELDS)


def serialize_quest(quest: Quest) -> Dict[str, Any]:
    return _dump(quest, QUEST_FIELDS)


def serialize_room(room: Room) -> Dict[str, Any]:
    return _dump(room, ROOM_FIELDS)


def serialize_stats(stats: Stats) -> Dict[str, Any]:
    return _dump(stats, STATS_FIELDS)


def serialize_settings(settings: Settings) -> Dict[str, Any]:
    return _dump(settings, SETTINGS_FIELDS)


# -------------------------------------------------------------------------
# Shape checks
# -------------------------------------------------------------------------


def parse_document(document: Union[str, bytes, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Accept a parsed document or JSON text and check its basic shape.

    Raises:
        MalformedDocumentError: If the text is not JSON, the document is
            not a mapping, the version is missing or unsupported, a
            collection is not a list of mappings, or a singleton is not
            a mapping
    """
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise MalformedDocumentError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MalformedDocumentError("Snapshot must be a JSON object")

    version = document.get("version")
    if version is None:
        raise MalformedDocumentError("Snapshot is missing 'version'")
    if version not in SUPPORTED_VERSIONS:
        raise MalformedDocumentError(f"Unsupported snapshot version: {version!r}")

    for key in COLLECTION_KEYS:
        if key not in document:
            raise MalformedDocumentError(f"Snapshot is missing '{key}'")
        records = document[key]
        if not isinstance(records, list):
            raise MalformedDocumentError(f"'{key}' must be a list")
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise MalformedDocumentError(f"'{key}[{index}]' must be an object")

    for key in SINGLETON_KEYS:
        value = document.get(key)
        if value is not None and not isinstance(value, dict):
            raise MalformedDocumentError(f"'{key}' must be an object")

    return document


class SnapshotManager:
    """
    Exports and imports snapshot documents.

    All methods expect a MnemosDB with an active session_scope.
    """

    def __init__(self, logger: Optional[MnemosLogger] = None) -> None:
        self.logger = logger

    @log_database_operation("export_snapshot")
    def export(self, db: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Build the snapshot document for the whole knowledge base."""
        return {
            "version": SNAPSHOT_VERSION,
            "timestamp": (now or utcnow()).isoformat(),
            "notes": [serialize_note(n) for n in db.notes.get_all()],
            "links": [serialize_link(link) for link in db.links.get_all()],
            "tags": [serialize_tag(t) for t in db.tags.get_all()],
            "quests": [serialize_quest(q) for q in db.quests.get_all()],
            "rooms": [serialize_room(r) for r in db.rooms.get_all()],
            "stats": serialize_stats(db.stats.get_or_create()),
            "settings": serialize_settings(db.settings.get_or_create()),
        }

    def export_to_json(
        self, db: Any, export_file: Union[str, Path], now: Optional[datetime] = None
    ) -> Path:
        """
        Write the snapshot to a JSON file.

        The document is written to a temporary file in the destination
        directory and moved into place, so a failed export never leaves a
        partial file behind.

        Raises:
            ExportError: If the file cannot be written
        """
        export_file = Path(export_file).expanduser()
        document = self.export(db, now)
        temp_file: Optional[Path] = None

        try:
            export_file.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=export_file.parent,
                prefix=f".{export_file.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_file = Path(f.name)
                json.dump(document, f, ensure_ascii=False, indent=2)
                f.write("\n")
            shutil.move(str(temp_file), str(export_file))
        except OSError as e:
            if temp_file is not None and temp_file.exists():
                temp_file.unlink()
            raise ExportError(f"Failed to write snapshot to {export_file}: {e}") from e

        safe_logger(self.logger).log_info(
            "Snapshot exported",
            {"file": str(export_file), "notes": len(document["notes"])},
        )
        return export_file

    @log_database_operation("import_snapshot")
    def import_snapshot(
        self, db: Any, document: Union[str, bytes, Dict[str, Any]]
    ) -> Dict[str, int]:
        """
        Replace the contents of the knowledge base with a snapshot.

        Returns:
            Number of records inserted per collection

        Raises:
            MalformedDocumentError: If the document fails shape checks
            DuplicateIdError: If the document repeats an id
            ValidationError: If a record is missing a required field
        """
        document = parse_document(document)

        self.clear(db)

        loaders: List[Tuple[str, Callable[[Dict[str, Any]], Dict[str, Any]], Any]] = [
            ("notes", deserialize_note, db.notes),
            ("links", lambda d: _load(d, LINK_FIELDS), db.links),
            ("tags", lambda d: _load(d, TAG_FIELDS), db.tags),
            ("quests", lambda d: _load(d, QUEST_FIELDS), db.quests),
            ("rooms", lambda d: _load(d, ROOM_FIELDS), db.rooms),
        ]
        counts: Dict[str, int] = {}
        for key, loader, manager in loaders:
            for record in document[key]:
                manager.create(loader(record))
            counts[key] = len(document[key])

        db.stats.put(_load(document.get("stats") or {}, STATS_FIELDS))
        db.settings.put(_load(document.get("settings") or {}, SETTINGS_FIELDS))

        safe_logger(self.logger).log_info("Snapshot imported", counts)
        return counts

    def clear(self, db: Any) -> None:
        """Remove every record of every kind."""
        db.links.clear()
        db.notes.clear()
        db.tags.clear()
        db.quests.clear()
        db.rooms.clear()
        db.stats.clear()
        db.settings.clear()

    def import_from_file(self, db: Any, import_file: Union[str, Path]) -> Dict[str, int]:
        """
        Read a snapshot file and import it.

        Raises:
            DatabaseError: If the file cannot be read
        """
        import_file = Path(import_file).expanduser()
        try:
            with open(import_file, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise DatabaseError(f"Cannot read snapshot {import_file}: {e}") from e
        return self.import_snapshot(db, text)
