"""
Enumeration Types
------------------

Closed enumerations for the Mnemos database models.

Enums:
    - NoteType: Kind of knowledge a note captures
    - KnowledgeDomain: Subject area a note belongs to
    - LinkType: Semantics of a directed link between notes
    - ReviewStatus: Learning stage of a note
    - ReviewQuality: Recall grade given at review time
    - ActivityType: Kind of entry in the recent-activity log
    - Theme: Presentation theme stored in settings
    - QuestDifficulty: Difficulty of a quest

Every branch on these enums is exhaustive; unknown string values are
rejected by DataValidator.normalize_enum.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class NoteType(str, Enum):
    """Kind of knowledge captured by a note."""

    CONCEPT = "concept"
    FACT = "fact"
    QUESTION = "question"
    INSIGHT = "insight"
    TASK = "task"
    REFERENCE = "reference"
    JOURNAL = "journal"

    @classmethod
    def choices(cls) -> List[str]:
        return [t.value for t in cls]


class KnowledgeDomain(str, Enum):
    """Subject area of a note."""

    PHILOSOPHY = "philosophy"
    SCIENCE = "science"
    TECHNOLOGY = "technology"
    ART = "art"
    HISTORY = "history"
    PERSONAL = "personal"
    PROJECTS = "projects"
    LEARNING = "learning"

    @classmethod
    def choices(cls) -> List[str]:
        return [d.value for d in cls]

    @property
    def display_name(self) -> str:
        return self.value.title()


class LinkType(str, Enum):
    """
    Semantics of a directed link.

    Direction matters for the meaning of the type (e.g. the source is a
    PREREQUISITE of the target), but backlink bookkeeping is the same for
    every type.
    """

    RELATED = "related"
    PREREQUISITE = "prerequisite"
    FOLLOWS = "follows"
    CONTRADICTS = "contradicts"
    EXPANDS = "expands"
    REFERENCES = "references"

    @classmethod
    def choices(cls) -> List[str]:
        return [t.value for t in cls]


class ReviewStatus(str, Enum):
    """
    Learning stage of a note.
    - NEW: Never reviewed
    - LEARNING: Last review was graded 'again'
    - REVIEWING: Being reviewed on a growing interval
    - MASTERED: Excluded from the due-for-review queue
    """

    NEW = "new"
    LEARNING = "learning"
    REVIEWING = "reviewing"
    MASTERED = "mastered"

    @classmethod
    def choices(cls) -> List[str]:
        return [s.value for s in cls]


class ReviewQuality(str, Enum):
    """Recall grade supplied by the caller at review time."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @classmethod
    def choices(cls) -> List[str]:
        return [q.value for q in cls]


class ActivityType(str, Enum):
    """Kind of entry in the recent-activity log."""

    NOTE_CREATED = "note_created"
    NOTE_REVIEWED = "note_reviewed"
    QUEST_COMPLETED = "quest_completed"
    LINK_CREATED = "link_created"

    @classmethod
    def choices(cls) -> List[str]:
        return [a.value for a in cls]


class Theme(str, Enum):
    """Presentation theme stored in settings."""

    RETRO_SNES = "retro_snes"
    MYSTICAL = "mystical"
    SCHOLARLY = "scholarly"

    @classmethod
    def choices(cls) -> List[str]:
        return [t.value for t in cls]

    @property
    def display_name(self) -> str:
        display_map = {
            Theme.RETRO_SNES: "Retro SNES",
            Theme.MYSTICAL: "Mystical",
            Theme.SCHOLARLY: "Scholarly",
        }
        return display_map[self]


class QuestDifficulty(str, Enum):
    """Difficulty of a quest."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EPIC = "epic"

    @classmethod
    def choices(cls) -> List[str]:
        return [d.value for d in cls]
