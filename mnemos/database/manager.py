#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the Mnemos knowledge base.

Provides the MnemosDB class, the Entity Store handle. It owns the SQLite
engine and session factory and hands out per-session entity managers:

    with db.session_scope():
        db.notes.create({...})
        db.links.get_for_note("n1")
        db.stats.update({"wisdom_points": 5})

Notes
==============
- The schema is created from the ORM models on first open and versioned
  through the schema_info table
- All datetime fields are stored as UTC and returned timezone-aware
- Every session_scope is one transaction: it commits on success and
  rolls back on any exception
- Initialization failures raise StorageUnavailableError
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from mnemos.core.exceptions import DatabaseError, StorageUnavailableError
from mnemos.core.logging_manager import MnemosLogger, safe_logger
from .models import SCHEMA_VERSION, Base, SchemaInfo
from .managers import (
    LinkManager,
    NoteManager,
    QuestManager,
    RoomManager,
    SettingsManager,
    SimpleManager,
    SingletonManager,
    StatsManager,
    TagManager,
)

MEMORY_DB = ":memory:"


class MnemosDB:
    """
    Entity Store for the Mnemos knowledge base.

    Attributes:
        db_path: SQLite database file, or ':memory:'
        engine: SQLAlchemy engine
        SessionLocal: Session factory
        logger: Optional MnemosLogger

    Usage:
        db = MnemosDB("~/.mnemos/mnemos.db", log_dir="~/.mnemos/logs")
        with db.session_scope():
            note = db.notes.get("n1")
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[MnemosLogger] = None,
    ) -> None:
        """
        Open (and if needed create) the database.

        Args:
            db_path: SQLite file path, or ':memory:' for a private in-memory store
            log_dir: Directory for log files; ignored when logger is given
            logger: Existing logger to share with the caller

        Raises:
            StorageUnavailableError: If the engine or schema cannot be set up
        """
        if str(db_path) == MEMORY_DB:
            self.db_path: Optional[Path] = None
        else:
            self.db_path = Path(db_path).expanduser().resolve()

        if logger is not None:
            self.logger: Optional[MnemosLogger] = logger
        elif log_dir:
            self.logger = MnemosLogger(
                Path(log_dir).expanduser().resolve() / "system",
                component_name="database",
            )
        else:
            self.logger = None

        self._note_manager: Optional[NoteManager] = None
        self._link_manager: Optional[LinkManager] = None
        self._tag_manager: Optional[SimpleManager] = None
        self._quest_manager: Optional[SimpleManager] = None
        self._room_manager: Optional[SimpleManager] = None
        self._stats_manager: Optional[SingletonManager] = None
        self._settings_manager: Optional[SingletonManager] = None

        self._setup_engine()

    def _setup_engine(self) -> None:
        """Initialize engine, session factory and schema."""
        log = safe_logger(self.logger)
        try:
            log.log_operation("database_init_start", {"db_path": str(self.db_path or MEMORY_DB)})

            if self.db_path is None:
                self.engine: Engine = create_engine(
                    "sqlite://",
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
            else:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self.engine = create_engine(
                    f"sqlite:///{self.db_path}",
                    echo=False,
                    pool_pre_ping=True,
                )

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
            )

            self.initialize_schema()
            log.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            log.log_error(e, {"operation": "database_init"})
            raise StorageUnavailableError(f"Database initialization failed: {e}") from e

    def initialize_schema(self) -> None:
        """Create any missing tables and record the schema version."""
        Base.metadata.create_all(bind=self.engine)
        with self.SessionLocal() as session:
            if session.get(SchemaInfo, SCHEMA_VERSION) is None:
                session.add(
                    SchemaInfo(version=SCHEMA_VERSION, description="Initial schema")
                )
                session.commit()

    def schema_version(self) -> int:
        """Highest schema version recorded in the database."""
        with self.SessionLocal() as session:
            versions = [row.version for row in session.query(SchemaInfo)]
        return max(versions, default=0)

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope with entity managers attached.

        Managers are available through the properties (db.notes, db.tags,
        ...) only while the scope is open.
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        log = safe_logger(self.logger)

        self._note_manager = NoteManager(session, self.logger)
        self._link_manager = LinkManager(session, self.logger)
        self._tag_manager = TagManager(session, self.logger)
        self._quest_manager = QuestManager(session, self.logger)
        self._room_manager = RoomManager(session, self.logger)
        self._stats_manager = StatsManager(session, self.logger)
        self._settings_manager = SettingsManager(session, self.logger)

        log.log_debug("session_start", {"session_id": session_id})
        try:
            yield session
            session.commit()
            log.log_debug("session_commit", {"session_id": session_id})
        except Exception as e:
            session.rollback()
            log.log_error(e, {"operation": "session_rollback", "session_id": session_id})
            raise
        finally:
            self._note_manager = None
            self._link_manager = None
            self._tag_manager = None
            self._quest_manager = None
            self._room_manager = None
            self._stats_manager = None
            self._settings_manager = None
            session.close()
            log.log_debug("session_close", {"session_id": session_id})

    def get_session(self) -> Session:
        """Create and return a new SQLAlchemy session."""
        return self.SessionLocal()

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @staticmethod
    def _require(manager, name: str):
        if manager is None:
            raise DatabaseError(
                f"{name} requires an active session. "
                "Use within session_scope: with db.session_scope(): ..."
            )
        return manager

    @property
    def notes(self) -> NoteManager:
        """NoteManager for the active session."""
        return self._require(self._note_manager, "NoteManager")

    @property
    def links(self) -> LinkManager:
        """LinkManager for the active session."""
        return self._require(self._link_manager, "LinkManager")

    @property
    def tags(self) -> SimpleManager:
        """Tag manager for the active session."""
        return self._require(self._tag_manager, "TagManager")

    @property
    def quests(self) -> SimpleManager:
        """Quest manager for the active session."""
        return self._require(self._quest_manager, "QuestManager")

    @property
    def rooms(self) -> SimpleManager:
        """Room manager for the active session."""
        return self._require(self._room_manager, "RoomManager")

    @property
    def stats(self) -> SingletonManager:
        """Stats singleton manager for the active session."""
        return self._require(self._stats_manager, "StatsManager")

    @property
    def settings(self) -> SingletonManager:
        """Settings singleton manager for the active session."""
        return self._require(self._settings_manager, "SettingsManager")

    # ----- Lifecycle -----
    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()

    def __enter__(self) -> "MnemosDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
