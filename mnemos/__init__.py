"""
Mnemos Knowledge Base
======================

A local-first personal knowledge base with spaced-repetition review.

Mnemos stores atomic notes, typed links between them, tags, quests and
rooms in a SQLite database, keeps every note's links and backlinks in
step with the link table, and schedules when each note should next be
reviewed.

Main Components:
    - core: Logging, validation, configuration, paths
    - database: SQLAlchemy ORM with entity managers, link graph,
      statistics and snapshot export/import
    - review: Spaced-repetition scheduler
    - search: Substring search over notes
    - knowledge_base: The command surface driven by user interfaces
    - cli: The `mnemos` command-line interface

Example Usage:
    >>> from mnemos import KnowledgeBase, MnemosDB
    >>> kb = KnowledgeBase(MnemosDB(":memory:")).initialize()
    >>> note = kb.create_note({"title": "Entropy", "domain": "science"})
    >>> kb.review_note(note.id, "good").interval
    4

Version: 0.1.0
License: MIT
"""

__version__ = "0.1.0"
__author__ = "Mnemos Project"

# Expose primary interfaces for convenience
from mnemos.database.manager import MnemosDB
from mnemos.knowledge_base import KnowledgeBase
from mnemos.core.paths import DB_PATH, HOME, LOG_DIR

__all__ = [
    "MnemosDB",
    "KnowledgeBase",
    "DB_PATH",
    "HOME",
    "LOG_DIR",
]
