"""
Base Classes and Column Types
------------------------------

Foundational ORM classes for the Mnemos database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - UTCDateTime: DateTime column that always round-trips aware UTC values
    - SchemaInfo: Schema version tracking
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import Optional

# --- Third party ---
from sqlalchemy import DateTime, Enum as SQLEnum, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

SCHEMA_VERSION = 1


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware DateTime for SQLite.

    SQLite drops tzinfo, so values are stored as naive UTC and
    re-attached to UTC on load.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Provides the metadata object used by MnemosDB to create the schema.
    """

    pass


class SchemaInfo(Base):
    """
    Tracks the schema version of a database file.

    Attributes:
        version: Schema version number (primary key)
        applied_at: When this version was applied
        description: Human-readable description
    """

    __tablename__ = "schema_info"

    version: Mapped[int] = mapped_column(Integer, primary_key=True)
    applied_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


def enum_type(enum_class, name: str) -> SQLEnum:
    """Enum column type storing member values rather than member names."""
    return SQLEnum(
        enum_class,
        name=name,
        values_callable=lambda x: [e.value for e in x],
        validate_strings=True,
    )
