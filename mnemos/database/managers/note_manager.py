#!/usr/bin/env python3
"""
note_manager.py
--------------------
Storage operations for Note records.

Key Features:
    - Keyed create/get/put/delete with duplicate-id detection
    - Secondary indexes: domain, type, tags (multi-valued) and a range
      index on next_review
    - Due-for-review queue
    - Deleting a note removes every link whose source OR target is the note

Derived metadata (word_count, reading_time) is recomputed whenever content
is written and cannot be set directly.

Usage:
    with db.session_scope():
        db.notes.create({"id": "n1", "title": "Entropy", "type": "concept",
                         "domain": "science"})
        science = db.notes.get_by_index("domain", "science")
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from mnemos.core.exceptions import ValidationError
from mnemos.core.logging_manager import MnemosLogger, safe_logger
from mnemos.core.validators import DataValidator
from mnemos.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from mnemos.database.models import (
    KnowledgeDomain,
    Note,
    NoteLink,
    NoteTag,
    NoteType,
    ReviewStatus,
    utcnow,
)
from .base_manager import BaseManager
from .link_manager import LinkManager

NOTE_INDEXES = ("domain", "type", "tags", "next_review")

# Fields that are always derived from other fields
DERIVED_FIELDS = ("word_count", "reading_time")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _ease(value: Any) -> float:
    ease = DataValidator.normalize_float(value, "ease_factor")
    if not 1.3 <= ease <= 3.0:
        raise ValidationError(f"ease_factor must be within [1.3, 3.0], got {ease}")
    return ease


def _position(value: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(value, dict):
        raise ValidationError("position must be a mapping")
    return dict(value)


def _attachments(value: Any) -> List[Any]:
    if not isinstance(value, (list, tuple)):
        raise ValidationError("attachments must be a list")
    return list(value)


# (field, normalizer) or (field, normalizer, allow_none)
_FIELD_CONFIGS: List[tuple] = [
    ("title", _text),
    ("type", lambda v: DataValidator.normalize_enum(v, NoteType)),
    ("domain", lambda v: DataValidator.normalize_enum(v, KnowledgeDomain)),
    ("created_at", DataValidator.normalize_datetime),
    ("updated_at", DataValidator.normalize_datetime),
    ("position", _position, True),
    ("is_collected", DataValidator.normalize_bool),
    ("review_status", lambda v: DataValidator.normalize_enum(v, ReviewStatus)),
    ("ease_factor", _ease),
    ("interval", lambda v: DataValidator.normalize_int(v, minimum=1, field="interval")),
    ("next_review", DataValidator.normalize_datetime),
    ("review_count", lambda v: DataValidator.normalize_int(v, minimum=0, field="review_count")),
    ("last_reviewed", DataValidator.normalize_datetime, True),
    ("correct_streak", lambda v: DataValidator.normalize_int(v, minimum=0, field="correct_streak")),
    ("total_reviews", lambda v: DataValidator.normalize_int(v, minimum=0, field="total_reviews")),
    ("links", lambda v: DataValidator.normalize_string_list(v, "links")),
    ("backlinks", lambda v: DataValidator.normalize_string_list(v, "backlinks")),
    ("attachments", _attachments),
    ("importance", lambda v: DataValidator.normalize_int(v, 1, 5, "importance")),
]


class NoteManager(BaseManager):
    """
    Manages Note records and their secondary indexes.

    Metadata dictionaries use the column names of the Note model; 'tags'
    and 'content' are handled specially (tag rows, derived metadata).
    """

    def __init__(self, session: Session, logger: Optional[MnemosLogger] = None):
        super().__init__(session, logger)

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    def exists(self, note_id: str) -> bool:
        return self._exists(Note, note_id)

    @handle_db_errors
    def get(self, note_id: str) -> Optional[Note]:
        """Return the note, or None when it does not exist."""
        return self._get_by_id(Note, note_id)

    @handle_db_errors
    def get_all(self) -> List[Note]:
        """Return every note, oldest first."""
        return self._get_all(Note, order_by="created_at")

    @handle_db_errors
    def count(self) -> int:
        return self._count(Note)

    @handle_db_errors
    @log_database_operation("create_note")
    @validate_metadata(["id"])
    def create(self, metadata: Dict[str, Any]) -> Note:
        """
        Insert a new note.

        Args:
            metadata: Note fields; 'id', 'type' and 'domain' are required.
                Missing timestamps default to now; a missing next_review
                defaults to created_at + interval days.

        Returns:
            The new Note

        Raises:
            DuplicateIdError: If a note with this id already exists
            ValidationError: If a field is missing or invalid
        """
        DataValidator.validate_required_fields(metadata, ["type", "domain"])
        note_id = DataValidator.normalize_string(metadata["id"])
        self._ensure_new_id(Note, note_id, "note")

        note = Note(id=note_id, links=[], backlinks=[], attachments=[], tag_rows=[])
        self._apply(note, metadata)

        if note.created_at is None:
            note.created_at = utcnow()
        if note.updated_at is None:
            note.updated_at = note.created_at
        if note.interval is None:
            note.interval = 1
        if note.next_review is None:
            note.next_review = note.created_at + timedelta(days=note.interval)

        self.session.add(note)
        self._execute_with_retry(self.session.flush)

        safe_logger(self.logger).log_debug("Created note", {"id": note.id})
        return note

    @handle_db_errors
    def put(self, metadata: Dict[str, Any]) -> Note:
        """
        Overwrite a note by id, creating it if absent.

        Only the fields present in metadata are written.
        """
        DataValidator.validate_required_fields(metadata, ["id"])
        note = self.get(DataValidator.normalize_string(metadata["id"]))
        if note is None:
            return self.create(metadata)

        self._apply(note, metadata)
        self._execute_with_retry(self.session.flush)
        return note

    @handle_db_errors
    @log_database_operation("delete_note")
    def delete(self, note_id: str) -> List[NoteLink]:
        """
        Delete a note and every link touching it.

        Both the source and the target index are scanned, so links pointing
        at the note are removed as well as links leaving it. Links are
        removed even when the note itself is already gone.

        Returns:
            The removed links (empty when there were none)
        """
        links = LinkManager(self.session, self.logger).delete_for_note(note_id)

        note = self.get(note_id)
        if note is not None:
            self.session.delete(note)

        self._execute_with_retry(self.session.flush)
        return links

    @handle_db_errors
    def clear(self) -> int:
        """Delete every note and tag row, returning the number of notes."""
        self._delete_all(NoteTag)
        return self._delete_all(Note)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @handle_db_errors
    def get_by_index(self, field: str, value: Any) -> List[Note]:
        """
        Return notes matching an indexed field.

        Args:
            field: One of 'domain', 'type', 'tags', 'next_review'
            value: Enum value for domain/type, a tag name for tags, or a
                (start, end) tuple for next_review; either bound may be
                None and both bounds are inclusive

        Raises:
            ValidationError: For an unsupported field or malformed value
        """
        query = self.session.query(Note)

        if field == "domain":
            query = query.filter(Note.domain == DataValidator.normalize_enum(value, KnowledgeDomain))
        elif field == "type":
            query = query.filter(Note.type == DataValidator.normalize_enum(value, NoteType))
        elif field == "tags":
            tag = DataValidator.normalize_string(value)
            query = query.join(Note.tag_rows).filter(NoteTag.tag == tag).distinct()
        elif field == "next_review":
            start, end = self._parse_range(value)
            if start is not None:
                query = query.filter(Note.next_review >= start)
            if end is not None:
                query = query.filter(Note.next_review <= end)
            query = query.order_by(Note.next_review)
        else:
            raise ValidationError(
                f"Unsupported note index: {field!r} (expected one of {NOTE_INDEXES})"
            )

        return query.all()

    @handle_db_errors
    def due_for_review(self, as_of: datetime) -> List[Note]:
        """Notes with next_review <= as_of that are not mastered, soonest first."""
        as_of = DataValidator.normalize_datetime(as_of)
        return (
            self.session.query(Note)
            .filter(Note.next_review <= as_of)
            .filter(Note.review_status != ReviewStatus.MASTERED)
            .order_by(Note.next_review)
            .all()
        )

    @handle_db_errors
    def domain_counts(self) -> Dict[KnowledgeDomain, int]:
        """Number of notes per domain (domains without notes are omitted)."""
        counts: Dict[KnowledgeDomain, int] = {}
        for note in self.session.query(Note.domain):
            counts[note.domain] = counts.get(note.domain, 0) + 1
        return counts

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_range(value: Any) -> Tuple[Optional[datetime], Optional[datetime]]:
        if not isinstance(value, (tuple, list)) or len(value) != 2:
            raise ValidationError("next_review index expects a (start, end) pair")
        return (
            DataValidator.normalize_datetime(value[0]),
            DataValidator.normalize_datetime(value[1]),
        )

    def _apply(self, note: Note, metadata: Dict[str, Any]) -> None:
        """Write metadata onto a note, recomputing derived fields."""
        self._update_scalar_fields(note, metadata, _FIELD_CONFIGS)

        if "content" in metadata:
            content = _text(metadata["content"])
            note.content = content
            note.word_count = DataValidator.word_count(content)
            note.reading_time = DataValidator.reading_time(content)
        elif note.content is None:
            note.content = ""
            note.word_count = 0
            note.reading_time = 0

        if "tags" in metadata:
            note.tags = DataValidator.normalize_string_list(metadata["tags"], "tags")
