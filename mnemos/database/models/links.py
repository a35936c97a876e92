"""
Link Model
-----------

Typed, directed connections between notes.

Models:
    - NoteLink: A link from a source note to a target note

Links carry no foreign keys: a link whose endpoint disappears is removed
by NoteManager.delete, which scans both the source and the target index.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UTCDateTime, enum_type, utcnow
from .enums import LinkType


class NoteLink(Base):
    """
    Directed link between two notes.

    Attributes:
        id: String identifier
        source_id: Id of the linking note (indexed)
        target_id: Id of the linked note (indexed)
        type: LinkType
        strength: 1-10, default 5
        created_at: Creation timestamp
        context: Optional free-text context
    """

    __tablename__ = "note_links"
    __table_args__ = (
        CheckConstraint("strength >= 1 AND strength <= 10", name="ck_link_strength"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    source_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    target_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    type: Mapped[LinkType] = mapped_column(
        enum_type(LinkType, "link_type"), nullable=False, index=True
    )
    strength: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    context: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<NoteLink({self.source_id} -{self.type.value}-> {self.target_id})>"
