#!/usr/bin/env python3
"""
managers package
--------------------
Per-entity storage managers for the Mnemos database.

Available Managers:
    BaseManager: Abstract base class with common helpers
    NoteManager: Notes, their secondary indexes and link cascade
    LinkManager: Note links indexed by source and target
    SimpleManager: Config-driven manager for Tag, Quest, Room
    SingletonManager: Config-driven manager for Stats, Settings

Usage:
    from mnemos.database.managers import NoteManager, TagManager

    note_mgr = NoteManager(session, logger)
    tag_mgr = TagManager(session, logger)  # Returns SimpleManager
"""
from .base_manager import BaseManager
from .note_manager import NoteManager
from .link_manager import LinkManager
from .simple_manager import QuestManager, RoomManager, SimpleManager, TagManager
from .singleton_manager import SettingsManager, SingletonManager, StatsManager

__all__ = [
    "BaseManager",
    "NoteManager",
    "LinkManager",
    "SimpleManager",
    "TagManager",
    "QuestManager",
    "RoomManager",
    "SingletonManager",
    "StatsManager",
    "SettingsManager",
]
