#!/usr/bin/env python3
"""
link_manager.py
--------------------
Storage operations for NoteLink records.

This manager only stores links. Keeping the links/backlinks lists on the
endpoint notes consistent is the job of LinkGraph.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from mnemos.core.logging_manager import MnemosLogger
from mnemos.core.validators import DataValidator
from mnemos.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from mnemos.database.models import LinkType, NoteLink, utcnow
from .base_manager import BaseManager


def _context(value: Any) -> Optional[str]:
    return None if value is None else str(value)


_FIELD_CONFIGS: List[tuple] = [
    ("source_id", DataValidator.normalize_string),
    ("target_id", DataValidator.normalize_string),
    ("type", lambda v: DataValidator.normalize_enum(v, LinkType)),
    ("strength", lambda v: DataValidator.normalize_int(v, 1, 10, "strength")),
    ("created_at", DataValidator.normalize_datetime),
    ("context", _context, True),
]


class LinkManager(BaseManager):
    """Manages NoteLink records, indexed by source and by target."""

    def __init__(self, session: Session, logger: Optional[MnemosLogger] = None):
        super().__init__(session, logger)

    @handle_db_errors
    def exists(self, link_id: str) -> bool:
        return self._exists(NoteLink, link_id)

    @handle_db_errors
    def get(self, link_id: str) -> Optional[NoteLink]:
        return self._get_by_id(NoteLink, link_id)

    @handle_db_errors
    def get_all(self) -> List[NoteLink]:
        return self._get_all(NoteLink, order_by="created_at")

    @handle_db_errors
    def count(self) -> int:
        return self._count(NoteLink)

    @handle_db_errors
    @log_database_operation("create_link")
    @validate_metadata(["id", "source_id", "target_id", "type"])
    def create(self, metadata: Dict[str, Any]) -> NoteLink:
        """
        Insert a new link. Strength defaults to 5.

        Raises:
            DuplicateIdError: If a link with this id already exists
            ValidationError: If a field is missing or invalid
        """
        link_id = DataValidator.normalize_string(metadata["id"])
        self._ensure_new_id(NoteLink, link_id, "link")

        link = NoteLink(id=link_id, strength=5)
        self._update_scalar_fields(link, metadata, _FIELD_CONFIGS)
        if link.created_at is None:
            link.created_at = utcnow()

        self.session.add(link)
        self._execute_with_retry(self.session.flush)
        return link

    @handle_db_errors
    def put(self, metadata: Dict[str, Any]) -> NoteLink:
        """Overwrite a link by id, creating it if absent."""
        DataValidator.validate_required_fields(metadata, ["id"])
        link = self.get(DataValidator.normalize_string(metadata["id"]))
        if link is None:
            return self.create(metadata)
        self._update_scalar_fields(link, metadata, _FIELD_CONFIGS)
        self._execute_with_retry(self.session.flush)
        return link

    @handle_db_errors
    def delete(self, link_id: str) -> Optional[NoteLink]:
        """Delete a link, returning it, or None when it did not exist."""
        link = self.get(link_id)
        if link is None:
            return None
        self.session.delete(link)
        self._execute_with_retry(self.session.flush)
        return link

    @handle_db_errors
    def clear(self) -> int:
        return self._delete_all(NoteLink)

    # -------------------------------------------------------------------------
    # Index lookups
    # -------------------------------------------------------------------------

    @handle_db_errors
    def get_by_source(self, note_id: str) -> List[NoteLink]:
        return self._get_all(NoteLink, order_by="created_at", source_id=note_id)

    @handle_db_errors
    def get_by_target(self, note_id: str) -> List[NoteLink]:
        return self._get_all(NoteLink, order_by="created_at", target_id=note_id)

    @handle_db_errors
    def get_for_note(self, note_id: str) -> List[NoteLink]:
        """Links leaving or entering the note."""
        return (
            self.session.query(NoteLink)
            .filter(or_(NoteLink.source_id == note_id, NoteLink.target_id == note_id))
            .order_by(NoteLink.created_at)
            .all()
        )

    @handle_db_errors
    def delete_for_note(self, note_id: str) -> List[NoteLink]:
        """Delete every link leaving or entering the note, returning them."""
        links = self.get_for_note(note_id)
        for link in links:
            self.session.delete(link)
        if links:
            self._execute_with_retry(self.session.flush)
        return links
