"""
Entity Models
--------------

Models:
    - Tag: A named, colored label

The tag's note_count is an informational counter and is not kept in sync
with the tags actually attached to notes.
"""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UTCDateTime, utcnow


class Tag(Base):
    """
    Named label with a display color.

    Attributes:
        id: String identifier
        name: Tag name
        color: Display color (e.g. '#4A90E2')
        description: Optional description
        note_count: Cached, informational note count
        created_at: Creation timestamp
    """

    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    color: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    note_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id!r}, name={self.name!r})>"
