"""
conftest.py
-----------
Shared pytest fixtures for Mnemos tests.

Provides fixtures for:
- Database setup and teardown
- Entity managers bound to an open session scope
- A KnowledgeBase driven by a controllable clock
- Test data factories
"""
import pytest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from tempfile import TemporaryDirectory

from mnemos.database import MnemosDB
from mnemos.knowledge_base import KnowledgeBase

FIXED_NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ----- Database Fixtures -----

@pytest.fixture
def test_db_path(tmp_dir):
    """Path to a test database file."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db(test_db_path):
    """Fresh MnemosDB on a temporary SQLite file."""
    db = MnemosDB(db_path=test_db_path)
    yield db
    db.close()


@pytest.fixture
def db(test_db):
    """MnemosDB with an open session scope, so managers are available."""
    with test_db.session_scope():
        yield test_db


@pytest.fixture
def db_session(db):
    """The SQLAlchemy session of the open scope."""
    return db.notes.session


@pytest.fixture
def note_manager(db):
    return db.notes


@pytest.fixture
def link_manager(db):
    return db.links


@pytest.fixture
def tag_manager(db):
    return db.tags


@pytest.fixture
def quest_manager(db):
    return db.quests


@pytest.fixture
def room_manager(db):
    return db.rooms


@pytest.fixture
def stats_manager(db):
    return db.stats


@pytest.fixture
def settings_manager(db):
    return db.settings


# ----- Knowledge Base Fixtures -----

@pytest.fixture
def clock():
    """Clock fixed at FIXED_NOW until advanced."""
    return FakeClock()


@pytest.fixture
def kb(test_db, clock):
    """Initialized KnowledgeBase over a fresh database."""
    return KnowledgeBase(test_db, clock=clock).initialize()


# ----- Test Data Factories -----

def make_note_metadata(note_id: str = "n1", **overrides):
    """Minimal valid NoteManager metadata."""
    metadata = {
        "id": note_id,
        "title": f"Note {note_id}",
        "content": "",
        "type": "concept",
        "domain": "science",
        "created_at": FIXED_NOW,
    }
    metadata.update(overrides)
    return metadata


@pytest.fixture
def note_factory(note_manager):
    """Create notes through the NoteManager."""

    def create(note_id: str = "n1", **overrides):
        return note_manager.create(make_note_metadata(note_id, **overrides))

    return create
