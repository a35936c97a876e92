#!/usr/bin/env python3
"""
link_graph.py
--------------------
Keeps the links/backlinks lists on notes consistent with the link table.

For every live link (source=A, target=B), A.links contains B and
B.backlinks contains A. LinkGraph performs the multi-record updates that
preserve this: it must be used inside a single MnemosDB.session_scope so
that the link row, both endpoints and the link counter commit together.

Self-links are rejected, and a link whose endpoint does not exist is never
stored. When a note is deleted, its id is scrubbed from the links and
backlinks of the surviving notes on the other end of the removed links.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Optional

from mnemos.core.exceptions import NotFoundError, ValidationError
from mnemos.core.identifiers import new_id
from mnemos.core.logging_manager import MnemosLogger, safe_logger
from mnemos.core.validators import DataValidator
from mnemos.database.models import LinkType, Note, NoteLink, utcnow


def _with(ids: List[str], item: str) -> List[str]:
    """Append item unless present (returns a new list)."""
    return list(ids) if item in ids else list(ids) + [item]


def _without(ids: List[str], item: str) -> List[str]:
    return [i for i in ids if i != item]


class LinkGraph:
    """
    Link/backlink bookkeeping on top of the Entity Store.

    Attributes:
        db: MnemosDB with an active session_scope
        logger: Optional logger
    """

    def __init__(self, db: Any, logger: Optional[MnemosLogger] = None) -> None:
        self.db = db
        self.logger = logger

    def create_link(
        self,
        source_id: str,
        target_id: str,
        link_type: Any,
        context: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> NoteLink:
        """
        Create a link and record it on both endpoints.

        Args:
            source_id: Linking note
            target_id: Linked note
            link_type: LinkType or its string value
            context: Optional free-text context
            now: Timestamp for the link and the endpoint updates

        Returns:
            The new NoteLink (strength 5)

        Raises:
            ValidationError: For a self-link or an unknown link type
            NotFoundError: If either endpoint does not exist
        """
        link_type = DataValidator.normalize_enum(link_type, LinkType)
        if source_id == target_id:
            raise ValidationError(f"A note cannot link to itself: {source_id}")

        source = self._require_note(source_id)
        target = self._require_note(target_id)
        now = now or utcnow()

        link = self.db.links.create(
            {
                "id": new_id("link"),
                "source_id": source_id,
                "target_id": target_id,
                "type": link_type,
                "strength": 5,
                "created_at": now,
                "context": context,
            }
        )

        source.links = _with(source.links, target_id)
        source.updated_at = now
        target.backlinks = _with(target.backlinks, source_id)
        target.updated_at = now
        self.db.notes.session.flush()

        safe_logger(self.logger).log_debug(
            "Linked notes", {"link_id": link.id, "source": source_id, "target": target_id}
        )
        return link

    def delete_link(self, link_id: str, now: Optional[datetime] = None) -> Optional[NoteLink]:
        """
        Delete a link and remove the reciprocal entries from its endpoints.

        An endpoint entry is kept while another link still connects the
        same source to the same target.

        Returns:
            The removed link, or None when it did not exist
        """
        link = self.db.links.delete(link_id)
        if link is None:
            return None

        now = now or utcnow()
        still_linked = any(
            other.target_id == link.target_id
            for other in self.db.links.get_by_source(link.source_id)
        )
        if not still_linked:
            source = self.db.notes.get(link.source_id)
            if source is not None:
                source.links = _without(source.links, link.target_id)
                source.updated_at = now
            target = self.db.notes.get(link.target_id)
            if target is not None:
                target.backlinks = _without(target.backlinks, link.source_id)
                target.updated_at = now
            self.db.notes.session.flush()

        return link

    def scrub_note(
        self, note_id: str, removed_links: Iterable[NoteLink], now: Optional[datetime] = None
    ) -> List[str]:
        """
        Remove a deleted note's id from the surviving notes it was linked with.

        Args:
            note_id: Id of the deleted note
            removed_links: Links removed together with the note

        Returns:
            Ids of the notes that were updated
        """
        now = now or utcnow()
        touched: List[str] = []
        for link in removed_links:
            other_id = link.target_id if link.source_id == note_id else link.source_id
            if other_id == note_id or other_id in touched:
                continue
            other = self.db.notes.get(other_id)
            if other is None:
                continue
            other.links = _without(other.links, note_id)
            other.backlinks = _without(other.backlinks, note_id)
            other.updated_at = now
            touched.append(other_id)

        if touched:
            self.db.notes.session.flush()
        return touched

    def verify(self) -> List[str]:
        """
        Check every link against its endpoints' lists.

        Returns:
            Human-readable descriptions of inconsistencies (empty when sound)
        """
        problems: List[str] = []
        notes = {note.id: note for note in self.db.notes.get_all()}
        for link in self.db.links.get_all():
            source = notes.get(link.source_id)
            target = notes.get(link.target_id)
            if source is None or target is None:
                problems.append(f"{link.id}: dangling endpoint")
                continue
            if link.target_id not in source.links:
                problems.append(f"{link.id}: {link.target_id} missing from {source.id}.links")
            if link.source_id not in target.backlinks:
                problems.append(f"{link.id}: {link.source_id} missing from {target.id}.backlinks")
        return problems

    def _require_note(self, note_id: str) -> Note:
        note = self.db.notes.get(note_id)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}")
        return note
