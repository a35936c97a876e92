#!/usr/bin/env python3
"""
knowledge_base.py
--------------------
Command surface of the Mnemos knowledge base.

KnowledgeBase is the service object that user-facing layers (the CLI, a
UI, tests) drive. It owns no data of its own: every command runs against
the Entity Store inside a single session_scope transaction, then keeps the
in-memory KnowledgeMirror in step with what was committed.

Key Features:
    - Note, link, tag, review, quest and room commands
    - Single-writer lock: mutating commands never interleave, so the link
      graph and the stats singleton are updated atomically
    - KnowledgeMirror replaced wholesale after every mutating command
    - Snapshot export/import, in memory or to/from a JSON file

Missing ids are silent no-ops for update, delete, collect and review
commands (they return None or False); createLink with a missing endpoint
raises NotFoundError.

Usage:
    db = MnemosDB("~/.mnemos/mnemos.db")
    kb = KnowledgeBase(db, logger)
    kb.initialize()

    note = kb.create_note({"title": "Entropy", "domain": "science"})
    kb.review_note(note.id, "good")
    kb.search("entropy")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import random
import re
import threading
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

# --- Local imports ---
from mnemos.core.exceptions import StorageUnavailableError, ValidationError
from mnemos.core.identifiers import new_id
from mnemos.core.logging_manager import MnemosLogger, safe_logger
from mnemos.core.validators import DataValidator
from mnemos.database import (
    DatabaseOperation,
    LinkGraph,
    MnemosDB,
    SnapshotManager,
    StatsAggregator,
)
from mnemos.database.models import (
    KnowledgeDomain,
    LinkType,
    Note,
    NoteLink,
    NoteType,
    Quest,
    QuestDifficulty,
    ReviewQuality,
    Room,
    Settings,
    Stats,
    Tag,
    utcnow,
)
from mnemos.database.snapshot_manager import (
    NOTE_FIELDS,
    NOTE_METADATA_FIELDS,
    REVIEW_FIELDS,
)
from mnemos.review.scheduler import (
    REVIEW_ACCURACY,
    REVIEW_POINTS,
    ReviewData,
    schedule_review,
)
from mnemos.search.search_engine import SearchEngine, SearchQuery, SearchResult

MAIN_HALL_ID = "main_hall"
NOTE_AREA_WIDTH = 600
NOTE_AREA_HEIGHT = 350

# Note fields no command may set directly
PROTECTED_NOTE_FIELDS = ("id", "word_count", "reading_time", "links", "backlinks")

# Every note field a partial may name, after nested sections are flattened
NOTE_FIELD_NAMES = frozenset(
    attr for _, attr in NOTE_FIELDS + REVIEW_FIELDS + NOTE_METADATA_FIELDS
)
# Keys inside a nested reviewData section that differ from the column name
_REVIEW_KEYS = {"status": "review_status"}

QUEST_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "exploration": {
        "title": "Knowledge Explorer",
        "description": "Collect notes from different domains to build your understanding",
        "objective": "Collect 10 notes from at least 3 different domains",
        "difficulty": QuestDifficulty.EASY,
        "reward": {"wisdomPoints": 100, "unlocksFeature": "domain_navigation"},
    },
    "connection": {
        "title": "Link Weaver",
        "description": "Create meaningful connections between your notes",
        "objective": "Create 5 links between related notes",
        "difficulty": QuestDifficulty.MEDIUM,
        "reward": {"wisdomPoints": 150, "unlocksFeature": "link_visualization"},
    },
    "mastery": {
        "title": "Master Scholar",
        "description": "Achieve mastery through consistent review",
        "objective": "Review 20 notes with 90% accuracy",
        "difficulty": QuestDifficulty.HARD,
        "reward": {"wisdomPoints": 200, "unlocksRoom": "mastery_hall"},
    },
}

# Mirror contents before the store has been read
DEFAULT_STATS: Dict[str, Any] = {
    "totalNotes": 0,
    "collectedNotes": 0,
    "totalLinks": 0,
    "reviewStreak": 0,
    "wisdomPoints": 0,
    "completedQuests": 0,
    "averageReviewAccuracy": 0.0,
    "mostProductiveDomain": KnowledgeDomain.PERSONAL.value,
    "recentActivity": [],
}
DEFAULT_SETTINGS: Dict[str, Any] = {
    "autoSave": True,
    "defaultDomain": KnowledgeDomain.PERSONAL.value,
    "reviewReminders": True,
    "dailyReviewGoal": 10,
    "theme": "retro_snes",
    "soundEffects": True,
    "showBacklinks": True,
    "autoLinkSimilar": False,
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(key: str) -> str:
    """'autoLinkSimilar' -> 'auto_link_similar'; snake_case keys pass through."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def normalize_keys(partial: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Accept camelCase or snake_case keys.

    Raises:
        ValidationError: If partial is not a mapping
    """
    if partial is None:
        return {}
    if not isinstance(partial, dict):
        raise ValidationError("Expected a mapping of field names to values")
    return {snake_case(str(key)): value for key, value in partial.items()}


def default_main_hall() -> Dict[str, Any]:
    """Room record seeded on first initialization."""
    return {
        "id": MAIN_HALL_ID,
        "name": "Main Hall",
        "domain": KnowledgeDomain.PERSONAL,
        "description": "The central hub of your mystical house",
        "position": {"x": 0, "y": 0},
        "size": {"width": 640, "height": 400},
        "color_scheme": {
            "primary": "#4A90E2",
            "secondary": "#7ED321",
            "accent": "#F5A623",
            "background": "#E6F0FF",
            "atmosphere": "mystical",
        },
        "is_unlocked": True,
        "note_positions": [],
        "furniture": [
            {
                "id": "main_desk",
                "type": "desk",
                "position": {"x": 220, "y": 80},
                "size": {"width": 120, "height": 24},
                "contains": [],
                "isInteractable": True,
                "interactionType": "open",
            }
        ],
    }


def random_position(room: str = MAIN_HALL_ID) -> Dict[str, Any]:
    """Random placement for a new note inside a room."""
    return {
        "x": random.random() * NOTE_AREA_WIDTH,
        "y": random.random() * NOTE_AREA_HEIGHT,
        "room": room,
    }


@dataclass
class KnowledgeMirror:
    """
    Caller-side copy of the store, in snapshot shape.

    Never patched in place: KnowledgeBase replaces it from the store after
    each mutating command.
    """

    notes: List[Dict[str, Any]] = field(default_factory=list)
    links: List[Dict[str, Any]] = field(default_factory=list)
    tags: List[Dict[str, Any]] = field(default_factory=list)
    quests: List[Dict[str, Any]] = field(default_factory=list)
    rooms: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=lambda: deepcopy(DEFAULT_STATS))
    settings: Dict[str, Any] = field(default_factory=lambda: deepcopy(DEFAULT_SETTINGS))

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "KnowledgeMirror":
        return cls(
            notes=document["notes"],
            links=document["links"],
            tags=document["tags"],
            quests=document["quests"],
            rooms=document["rooms"],
            stats=document["stats"],
            settings=document["settings"],
        )

    def note(self, note_id: str) -> Optional[Dict[str, Any]]:
        for record in self.notes:
            if record["id"] == note_id:
                return record
        return None


class KnowledgeBase:
    """
    Service object driving the Entity Store.

    Attributes:
        db: MnemosDB handle
        logger: Optional MnemosLogger
        clock: Callable returning the current aware UTC time
        keep_mirror: Whether to refresh the mirror after each command
        mirror: Latest KnowledgeMirror
    """

    def __init__(
        self,
        db: MnemosDB,
        logger: Optional[MnemosLogger] = None,
        clock: Optional[Callable[[], datetime]] = None,
        keep_mirror: bool = True,
    ) -> None:
        self.db = db
        self.logger = logger
        self.clock = clock or utcnow
        self.keep_mirror = keep_mirror
        self.mirror = KnowledgeMirror()

        self.link_graph = LinkGraph(db, logger)
        self.stats_aggregator = StatsAggregator(db, logger)
        self.snapshots = SnapshotManager(logger)

        self._lock = threading.RLock()
        self._initialized = False

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> "KnowledgeBase":
        """
        Create the singletons and the default room if missing, then load the mirror.

        On failure the mirror is reset to an empty default state.

        Raises:
            StorageUnavailableError: If the store cannot be read or seeded
        """
        with self._lock:
            try:
                with DatabaseOperation(self.logger, "initialize", log_start=True):
                    with self.db.session_scope():
                        self.db.stats.get_or_create()
                        self.db.settings.get_or_create()
                        if not self.db.rooms.exists(MAIN_HALL_ID):
                            self.db.rooms.create(default_main_hall())
                    self._initialized = True
                    self._refresh_mirror()
            except StorageUnavailableError:
                self._reset()
                raise
            except Exception as e:
                self._reset()
                raise StorageUnavailableError(
                    f"Knowledge base initialization failed: {e}"
                ) from e
        return self

    def _reset(self) -> None:
        self._initialized = False
        self.mirror = KnowledgeMirror()

    def _now(self) -> datetime:
        return self.clock()

    def _refresh_mirror(self) -> None:
        if not self.keep_mirror:
            return
        with self.db.session_scope():
            document = self.snapshots.export(self.db, self._now())
        self.mirror = KnowledgeMirror.from_document(document)

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise StorageUnavailableError(
                "Knowledge base is not initialized; call initialize() first"
            )

    @contextmanager
    def _write(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> Iterator[None]:
        """Serialize a mutating command, run it in one transaction, refresh the mirror."""
        with self._lock:
            self._require_initialized()
            with DatabaseOperation(self.logger, operation, details=details):
                with self.db.session_scope():
                    yield
            self._refresh_mirror()

    @contextmanager
    def _read(self) -> Iterator[None]:
        with self._lock:
            self._require_initialized()
            with self.db.session_scope():
                yield

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    @staticmethod
    def _note_changes(partial: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Flatten a note partial into NoteManager metadata.

        Nested 'reviewData' and 'metadata' sections (the snapshot shape) are
        merged into the top level.

        Raises:
            ValidationError: On unknown or protected fields
        """
        changes = normalize_keys(partial)
        review = normalize_keys(changes.pop("review_data", None))
        changes.update({_REVIEW_KEYS.get(key, key): value for key, value in review.items()})
        changes.update(normalize_keys(changes.pop("metadata", None)))

        unknown = sorted(set(changes) - NOTE_FIELD_NAMES)
        if unknown:
            raise ValidationError(f"Unknown note fields: {', '.join(unknown)}")
        protected = sorted(set(changes) & set(PROTECTED_NOTE_FIELDS))
        if protected:
            raise ValidationError(f"Cannot set note fields directly: {', '.join(protected)}")
        return changes

    def create_note(self, partial: Optional[Dict[str, Any]] = None) -> Note:
        """
        Create a note, filling in every field the caller leaves out.

        Defaults: title 'Untitled Note', type concept, the default domain
        from settings, a random position in the main hall, importance 3 and
        fresh review data first due one day from now.

        Raises:
            ValidationError: On invalid values or protected fields
        """
        changes = self._note_changes(partial)
        now = self._now()

        with self._write("create_note"):
            settings = self.db.settings.get_or_create()
            metadata: Dict[str, Any] = {
                "id": new_id("note"),
                "title": "Untitled Note",
                "content": "",
                "type": NoteType.CONCEPT,
                "domain": settings.default_domain,
                "tags": [],
                "position": random_position(),
                "is_collected": False,
                "attachments": [],
                "importance": 3,
            }
            metadata.update(changes)
            metadata["created_at"] = now
            metadata["updated_at"] = now

            note = self.db.notes.create(metadata)
            ReviewData.initial(now).apply_to(note)
            self.stats_aggregator.note_created(note.title, now)

        safe_logger(self.logger).log_info("Note created", {"id": note.id})
        return note

    def update_note(self, note_id: str, partial: Dict[str, Any]) -> Optional[Note]:
        """
        Merge a partial update into a note and stamp updated_at.

        Returns:
            The updated note, or None when no note has this id
        """
        changes = self._note_changes(partial)
        now = self._now()

        with self._write("update_note", {"note_id": note_id}):
            if not self.db.notes.exists(note_id):
                safe_logger(self.logger).log_debug("Update of missing note", {"id": note_id})
                return None
            changes["id"] = note_id
            changes["updated_at"] = now
            note = self.db.notes.put(changes)
        return note

    def delete_note(self, note_id: str) -> bool:
        """
        Delete a note with every link touching it.

        The note's id is removed from the links/backlinks of the notes it
        was connected to, and the link counter drops by the number of
        removed links.

        Returns:
            False when no note has this id
        """
        now = self._now()
        with self._write("delete_note", {"note_id": note_id}):
            if not self.db.notes.exists(note_id):
                return False
            removed = self.db.notes.delete(note_id)
            self.link_graph.scrub_note(note_id, removed, now)
            self.stats_aggregator.note_deleted(len(removed))
        return True

    def collect_note(self, note_id: str) -> Optional[Note]:
        """
        Mark a note collected, awarding wisdom points the first time.

        Collecting an already collected note changes nothing.
        """
        now = self._now()
        with self._write("collect_note", {"note_id": note_id}):
            note = self.db.notes.get(note_id)
            if note is None or note.is_collected:
                return note
            note.is_collected = True
            note.updated_at = now
            self.stats_aggregator.note_collected()
        return note

    def get_note(self, note_id: str) -> Optional[Note]:
        with self._read():
            return self.db.notes.get(note_id)

    def list_notes(
        self,
        domain: Optional[str] = None,
        note_type: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[Note]:
        """All notes, optionally restricted by domain, type and tag."""
        with self._read():
            if tag:
                notes = self.db.notes.get_by_index("tags", tag)
            elif domain:
                notes = self.db.notes.get_by_index("domain", domain)
            elif note_type:
                notes = self.db.notes.get_by_index("type", note_type)
            else:
                notes = self.db.notes.get_all()

        if domain:
            wanted_domain = DataValidator.normalize_enum(domain, KnowledgeDomain)
            notes = [n for n in notes if n.domain == wanted_domain]
        if note_type:
            wanted_type = DataValidator.normalize_enum(note_type, NoteType)
            notes = [n for n in notes if n.type == wanted_type]
        return sorted(notes, key=lambda n: n.created_at)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search(
        self,
        query: str,
        domain: Optional[str] = None,
        note_type: Optional[str] = None,
    ) -> List[Note]:
        """Notes containing every term of the query (empty query: no results)."""
        parsed = SearchQuery.parse(query, domain, note_type)
        with self._read():
            return SearchEngine(self.db.notes.session).search(parsed)

    def search_with_context(
        self,
        query: str,
        domain: Optional[str] = None,
        note_type: Optional[str] = None,
    ) -> List[SearchResult]:
        parsed = SearchQuery.parse(query, domain, note_type)
        with self._read():
            return SearchEngine(self.db.notes.session).search_with_context(parsed)

    # -------------------------------------------------------------------------
    # Links
    # -------------------------------------------------------------------------

    def create_link(
        self,
        source_id: str,
        target_id: str,
        link_type: Union[str, LinkType] = LinkType.RELATED,
        context: Optional[str] = None,
    ) -> NoteLink:
        """
        Link two notes and record the link on both of them.

        Raises:
            ValidationError: For a self-link or unknown link type
            NotFoundError: If either note does not exist
        """
        now = self._now()
        with self._write("create_link", {"source": source_id, "target": target_id}):
            link = self.link_graph.create_link(source_id, target_id, link_type, context, now)
            self.stats_aggregator.link_created()
        return link

    def delete_link(self, link_id: str) -> Optional[NoteLink]:
        """Delete a link; None when it did not exist."""
        now = self._now()
        with self._write("delete_link", {"link_id": link_id}):
            link = self.link_graph.delete_link(link_id, now)
            if link is not None:
                self.stats_aggregator.link_deleted()
        return link

    def links_for_note(self, note_id: str) -> List[NoteLink]:
        """Links leaving or entering the note."""
        with self._read():
            return self.db.links.get_for_note(note_id)

    def verify_links(self) -> List[str]:
        """
        Check that every link is recorded on both of its endpoint notes.

        Returns:
            One line per inconsistency; empty when the graph is sound
        """
        with self._read():
            return self.link_graph.verify()

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def create_tag(self, name: str, color: str, description: str = "") -> Tag:
        now = self._now()
        with self._write("create_tag", {"name": name}):
            tag = self.db.tags.create(
                {
                    "id": new_id("tag"),
                    "name": name,
                    "color": color,
                    "description": description,
                    "note_count": 0,
                    "created_at": now,
                }
            )
        return tag

    def update_tag(self, tag_id: str, partial: Dict[str, Any]) -> Optional[Tag]:
        """Merge a partial update into a tag; None when it does not exist."""
        changes = normalize_keys(partial)
        with self._write("update_tag", {"tag_id": tag_id}):
            tag = self.db.tags.update(tag_id, changes)
        return tag

    def list_tags(self) -> List[Tag]:
        with self._read():
            return self.db.tags.get_all()

    # -------------------------------------------------------------------------
    # Review
    # -------------------------------------------------------------------------

    def review_note(
        self, note_id: str, quality: Union[str, ReviewQuality]
    ) -> Optional[Note]:
        """
        Grade a recall attempt and reschedule the note.

        The review's accuracy is folded into the rolling mean in stats and
        a reviewed-note activity entry is recorded.

        Returns:
            The rescheduled note, or None when no note has this id

        Raises:
            ValidationError: For an unknown quality
        """
        quality = DataValidator.normalize_enum(quality, ReviewQuality)
        now = self._now()

        with self._write("review_note", {"note_id": note_id, "quality": quality.value}):
            note = self.db.notes.get(note_id)
            if note is None:
                return None
            review = schedule_review(ReviewData.from_note(note), quality, now)
            review.apply_to(note)
            note.updated_at = now
            self.stats_aggregator.note_reviewed(
                note.title, REVIEW_ACCURACY[quality], REVIEW_POINTS[quality], now
            )
        return note

    def due_for_review(self, as_of: Optional[datetime] = None) -> List[Note]:
        """Notes due at as_of (default now) that are not mastered."""
        as_of = as_of or self._now()
        with self._read():
            return self.db.notes.due_for_review(as_of)

    # -------------------------------------------------------------------------
    # Stats & Settings
    # -------------------------------------------------------------------------

    def get_stats(self) -> Stats:
        with self._read():
            return self.db.stats.get_or_create()

    def update_stats(self, partial: Dict[str, Any]) -> Stats:
        """
        Merge a partial update into stats.

        Raises:
            ValidationError: On unknown keys or invalid values
        """
        changes = normalize_keys(partial)
        with self._write("update_stats", {"fields": sorted(changes)}):
            stats = self.db.stats.update(changes)
        return stats

    def get_settings(self) -> Settings:
        with self._read():
            return self.db.settings.get_or_create()

    def update_settings(self, partial: Dict[str, Any]) -> Settings:
        """
        Merge a partial update into settings.

        Raises:
            ValidationError: On unknown keys or invalid values
        """
        changes = normalize_keys(partial)
        with self._write("update_settings", {"fields": sorted(changes)}):
            settings = self.db.settings.update(changes)
        return settings

    # -------------------------------------------------------------------------
    # Quests
    # -------------------------------------------------------------------------

    def create_quest(self, partial: Dict[str, Any]) -> Quest:
        """
        Create a quest; title, domain and difficulty are required.

        Raises:
            ValidationError: If a required field is missing or invalid
        """
        metadata = normalize_keys(partial)
        metadata.setdefault("id", new_id("quest"))
        metadata.setdefault("created_at", self._now())
        with self._write("create_quest"):
            quest = self.db.quests.create(metadata)
        return quest

    def create_quest_from_template(
        self,
        template: str,
        domain: Union[str, KnowledgeDomain],
        required_notes: Iterable[str] = (),
    ) -> Quest:
        """
        Create a quest from one of QUEST_TEMPLATES.

        Raises:
            ValidationError: For an unknown template key
        """
        if template not in QUEST_TEMPLATES:
            raise ValidationError(
                f"Unknown quest template: {template!r} "
                f"(expected one of {', '.join(QUEST_TEMPLATES)})"
            )
        metadata = deepcopy(QUEST_TEMPLATES[template])
        metadata["domain"] = domain
        metadata["required_notes"] = list(required_notes)
        return self.create_quest(metadata)

    def update_quest(self, quest_id: str, partial: Dict[str, Any]) -> Optional[Quest]:
        changes = normalize_keys(partial)
        with self._write("update_quest", {"quest_id": quest_id}):
            quest = self.db.quests.update(quest_id, changes)
        return quest

    def refresh_quest_progress(self, quest_id: str) -> Optional[Quest]:
        """Set progress to the percentage of required notes that are collected."""
        with self._write("refresh_quest_progress", {"quest_id": quest_id}):
            quest = self.db.quests.get(quest_id)
            if quest is None or quest.is_completed:
                return quest
            required = quest.required_notes
            if required:
                notes = [self.db.notes.get(note_id) for note_id in required]
                collected = sum(1 for note in notes if note is not None and note.is_collected)
                quest.progress = (collected * 100) // len(required)
            else:
                quest.progress = 0
        return quest

    def complete_quest(self, quest_id: str) -> Optional[Quest]:
        """
        Complete a quest and pay out its reward.

        Completing an already completed quest changes nothing.
        """
        now = self._now()
        with self._write("complete_quest", {"quest_id": quest_id}):
            quest = self.db.quests.get(quest_id)
            if quest is None or quest.is_completed:
                return quest
            quest.is_completed = True
            quest.progress = 100
            quest.completed_at = now
            reward_points = int((quest.reward or {}).get("wisdomPoints", 0))
            self.stats_aggregator.quest_completed(quest.title, reward_points, now)
        return quest

    def list_quests(self, include_completed: bool = True) -> List[Quest]:
        with self._read():
            quests = self.db.quests.get_all()
        if include_completed:
            return quests
        return [quest for quest in quests if not quest.is_completed]

    # -------------------------------------------------------------------------
    # Rooms
    # -------------------------------------------------------------------------

    def create_room(self, partial: Dict[str, Any]) -> Room:
        metadata = normalize_keys(partial)
        metadata.setdefault("id", new_id("room"))
        with self._write("create_room"):
            room = self.db.rooms.create(metadata)
        return room

    def update_room(self, room_id: str, partial: Dict[str, Any]) -> Optional[Room]:
        changes = normalize_keys(partial)
        with self._write("update_room", {"room_id": room_id}):
            room = self.db.rooms.update(room_id, changes)
        return room

    def list_rooms(self) -> List[Room]:
        with self._read():
            return self.db.rooms.get_all()

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def export(self) -> Dict[str, Any]:
        """The whole knowledge base as a snapshot document."""
        with self._read():
            return self.snapshots.export(self.db, self._now())

    def export_to_file(self, path: Union[str, Path]) -> Path:
        """
        Write a snapshot to a JSON file.

        Raises:
            ExportError: If the file cannot be written
        """
        with self._read():
            return self.snapshots.export_to_json(self.db, path, self._now())

    def import_snapshot(self, document: Union[str, bytes, Dict[str, Any]]) -> Dict[str, int]:
        """
        Replace everything with the contents of a snapshot document.

        The import is a single transaction: on any error the previous
        contents are kept.

        Raises:
            MalformedDocumentError: If the document fails shape checks
            DuplicateIdError: If the document repeats an id
        """
        with self._write("import_snapshot"):
            counts = self.snapshots.import_snapshot(self.db, document)
        return counts

    def import_from_file(self, path: Union[str, Path]) -> Dict[str, int]:
        """
        Import a snapshot file.

        Raises:
            DatabaseError: If the file cannot be read
        """
        with self._write("import_snapshot", {"file": str(path)}):
            counts = self.snapshots.import_from_file(self.db, path)
        return counts
