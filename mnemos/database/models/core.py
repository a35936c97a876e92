"""
Core Models
------------

Central models of the Mnemos knowledge base.

Models:
    - Note: An atomic unit of knowledge with embedded review data
    - NoteTag: One row per (note, tag) pair, backing the multi-valued tag index

A note's review data is stored as flat columns so that next_review can be
range-indexed; the scheduler works on the ReviewData value object built
from those columns.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UTCDateTime, enum_type, utcnow
from .enums import KnowledgeDomain, NoteType, ReviewStatus


class Note(Base):
    """
    An atomic unit of knowledge.

    Attributes:
        id: Immutable string identifier
        title: Note title
        content: Opaque rich-text content
        type: NoteType
        domain: KnowledgeDomain
        created_at / updated_at: Aware UTC timestamps
        position: Spatial placement, opaque to the core
        is_collected: Whether the note has been collected

    Review columns:
        review_status, ease_factor, interval, next_review, review_count,
        last_reviewed, correct_streak, total_reviews

    Derived metadata:
        word_count, reading_time: Recomputed whenever content changes
        links: Ids this note links to
        backlinks: Ids of notes linking to this note
        attachments: Opaque attachment list
        importance: 1-5

    Relationships:
        tag_rows: One-to-many with NoteTag (ordered)
    """

    __tablename__ = "notes"
    __table_args__ = (
        CheckConstraint("importance >= 1 AND importance <= 5", name="ck_note_importance"),
        CheckConstraint("ease_factor >= 1.3 AND ease_factor <= 3.0", name="ck_note_ease"),
        CheckConstraint("interval >= 1", name="ck_note_interval"),
        Index("ix_notes_review_queue", "next_review", "review_status"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[NoteType] = mapped_column(
        enum_type(NoteType, "note_type"), nullable=False, index=True
    )
    domain: Mapped[KnowledgeDomain] = mapped_column(
        enum_type(KnowledgeDomain, "knowledge_domain"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    position: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    is_collected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # ---- Review data ----
    review_status: Mapped[ReviewStatus] = mapped_column(
        enum_type(ReviewStatus, "review_status"), nullable=False, default=ReviewStatus.NEW
    )
    ease_factor: Mapped[float] = mapped_column(Float, nullable=False, default=2.5)
    interval: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    next_review: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_reviewed: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    correct_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # ---- Derived metadata ----
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reading_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    links: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    backlinks: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    attachments: Mapped[List[Any]] = mapped_column(JSON, nullable=False, default=list)
    importance: Mapped[int] = mapped_column(Integer, nullable=False, default=3)

    tag_rows: Mapped[List["NoteTag"]] = relationship(
        "NoteTag",
        back_populates="note",
        cascade="all, delete-orphan",
        order_by="NoteTag.position",
        lazy="selectin",
    )

    @property
    def tags(self) -> List[str]:
        """Tag names in their original order."""
        return [row.tag for row in self.tag_rows]

    @tags.setter
    def tags(self, values: List[str]) -> None:
        self.tag_rows = [NoteTag(tag=tag, position=i) for i, tag in enumerate(values)]

    def __repr__(self) -> str:
        return f"<Note(id={self.id!r}, title={self.title!r})>"


class NoteTag(Base):
    """
    Tag attached to a note.

    Attributes:
        id: Surrogate key
        note_id: Owning note
        tag: Tag name (indexed for tag lookups)
        position: Order of the tag on the note
    """

    __tablename__ = "note_tags"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    note_id: Mapped[str] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tag: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    note: Mapped["Note"] = relationship("Note", back_populates="tag_rows")
