#!/usr/bin/env python3
"""
search_engine.py
----------------
Substring search over notes.

A note matches when every query term occurs, case-insensitively, as a
substring of its title, content and tags joined by spaces. There is no
stemming and no ranking; results come back in store order.

Usage:
    query = SearchQuery.parse("quantum waves")
    engine = SearchEngine(session)
    notes = engine.search(query)

    for result in engine.search_with_context(query):
        print(result.note.title, result.snippet)
"""
# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from mnemos.core.validators import DataValidator
from mnemos.database.models import KnowledgeDomain, Note, NoteType

SNIPPET_RADIUS = 40


def tokenize(query_string: Optional[str]) -> List[str]:
    """Split a query on whitespace into lower-cased, non-empty terms."""
    return [term.lower() for term in (query_string or "").split() if term]


def searchable_text(note: Note) -> str:
    """Lower-cased title, content and tags joined by spaces."""
    return " ".join([note.title or "", note.content or "", " ".join(note.tags)]).lower()


@dataclass
class SearchQuery:
    """A tokenized search with optional domain/type restrictions."""

    text: str = ""
    terms: List[str] = field(default_factory=list)
    domain: Optional[KnowledgeDomain] = None
    note_type: Optional[NoteType] = None

    @classmethod
    def parse(
        cls,
        query_string: Optional[str],
        domain: Optional[str] = None,
        note_type: Optional[str] = None,
    ) -> "SearchQuery":
        return cls(
            text=query_string or "",
            terms=tokenize(query_string),
            domain=DataValidator.normalize_enum(domain, KnowledgeDomain) if domain else None,
            note_type=DataValidator.normalize_enum(note_type, NoteType) if note_type else None,
        )

    @property
    def is_empty(self) -> bool:
        return not self.terms


@dataclass
class SearchResult:
    """A matching note with the terms found and a snippet around the first match."""

    note: Note
    matched_terms: List[str]
    snippet: str


def make_snippet(content: str, term: str, radius: int = SNIPPET_RADIUS) -> str:
    """Excerpt of content around the first occurrence of term."""
    if not content:
        return ""
    match = re.search(re.escape(term), content, re.IGNORECASE)
    if match is None:
        return content[: radius * 2].strip()
    start = max(0, match.start() - radius)
    end = min(len(content), match.end() + radius)
    snippet = content[start:end].strip()
    if start > 0:
        snippet = "..." + snippet
    if end < len(content):
        snippet = snippet + "..."
    return snippet


class SearchEngine:
    """Linear-scan search over the note collection."""

    def __init__(self, session: Session):
        self.session = session

    def _candidates(self, query: SearchQuery) -> Iterable[Note]:
        notes = self.session.query(Note)
        if query.domain is not None:
            notes = notes.filter(Note.domain == query.domain)
        if query.note_type is not None:
            notes = notes.filter(Note.type == query.note_type)
        return notes.order_by(Note.created_at).all()

    def search(self, query: SearchQuery) -> List[Note]:
        """Every note containing all query terms; empty query gives no results."""
        if query.is_empty:
            return []
        return [
            note
            for note in self._candidates(query)
            if all(term in searchable_text(note) for term in query.terms)
        ]

    def search_with_context(self, query: SearchQuery) -> List[SearchResult]:
        """Like search(), with a content snippet for each match."""
        return [
            SearchResult(
                note=note,
                matched_terms=list(query.terms),
                snippet=make_snippet(note.content or "", query.terms[0]),
            )
            for note in self.search(query)
        ]
