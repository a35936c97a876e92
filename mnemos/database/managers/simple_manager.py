#!/usr/bin/env python3
"""
simple_manager.py
-----------------
Config-driven manager for simple keyed entities: Tag, Quest, Room.

Each entity kind is described by a SimpleManagerConfig that specifies:
- The model class and display name
- Required fields for create()
- Field normalizers
- Defaults applied on create()

Usage:
    tag_mgr = SimpleManager.for_tags(session, logger)
    quest_mgr = SimpleManager.for_quests(session, logger)
    room_mgr = SimpleManager.for_rooms(session, logger)

    tag = tag_mgr.create({"id": "t1", "name": "physics", "color": "#F00"})
    tag_mgr.update("t1", {"description": "Everything physical"})
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from sqlalchemy.orm import Session

from mnemos.core.exceptions import ValidationError
from mnemos.core.logging_manager import MnemosLogger, safe_logger
from mnemos.core.validators import DataValidator
from mnemos.database.decorators import handle_db_errors, log_database_operation
from mnemos.database.models import (
    KnowledgeDomain,
    Quest,
    QuestDifficulty,
    Room,
    Tag,
    utcnow,
)
from .base_manager import BaseManager


@dataclass
class SimpleManagerConfig:
    """
    Configuration for a simple entity manager.

    Attributes:
        model_class: SQLAlchemy model class
        display_name: Human-readable name for messages and DuplicateIdError
        required_fields: Fields that create() requires besides 'id'
        field_configs: (field, normalizer[, allow_none]) tuples
        defaults: Factories for fields left unset by create()
        order_by: Column used by get_all()
    """

    model_class: Type
    display_name: str
    required_fields: List[str] = field(default_factory=list)
    field_configs: List[tuple] = field(default_factory=list)
    defaults: Dict[str, Callable[[], Any]] = field(default_factory=dict)
    order_by: str = "id"


def _text(value: Any) -> str:
    return str(value)


def _mapping(name: str) -> Callable[[Any], Dict[str, Any]]:
    def normalize(value: Any) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise ValidationError(f"{name} must be a mapping")
        return dict(value)

    return normalize


def _sequence(name: str) -> Callable[[Any], List[Any]]:
    def normalize(value: Any) -> List[Any]:
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ValidationError(f"{name} must be a list")
        return list(value)

    return normalize


def _domain(value: Any) -> KnowledgeDomain:
    return DataValidator.normalize_enum(value, KnowledgeDomain)


TAG_CONFIG = SimpleManagerConfig(
    model_class=Tag,
    display_name="tag",
    required_fields=["name"],
    field_configs=[
        ("name", DataValidator.normalize_string),
        ("color", _text),
        ("description", _text),
        ("note_count", lambda v: DataValidator.normalize_int(v, minimum=0, field="note_count")),
        ("created_at", DataValidator.normalize_datetime),
    ],
    defaults={"color": str, "description": str, "note_count": int, "created_at": utcnow},
    order_by="created_at",
)

QUEST_CONFIG = SimpleManagerConfig(
    model_class=Quest,
    display_name="quest",
    required_fields=["title", "domain", "difficulty"],
    field_configs=[
        ("title", DataValidator.normalize_string),
        ("description", _text),
        ("objective", _text),
        ("domain", _domain),
        ("required_notes", lambda v: DataValidator.normalize_string_list(v, "required_notes")),
        ("reward", _mapping("reward")),
        ("difficulty", lambda v: DataValidator.normalize_enum(v, QuestDifficulty)),
        ("is_completed", DataValidator.normalize_bool),
        ("progress", lambda v: DataValidator.normalize_int(v, 0, 100, "progress")),
        ("created_at", DataValidator.normalize_datetime),
        ("completed_at", DataValidator.normalize_datetime, True),
    ],
    defaults={
        "description": str,
        "objective": str,
        "required_notes": list,
        "reward": lambda: {"wisdomPoints": 0},
        "is_completed": lambda: False,
        "progress": int,
        "created_at": utcnow,
    },
    order_by="created_at",
)

ROOM_CONFIG = SimpleManagerConfig(
    model_class=Room,
    display_name="room",
    required_fields=["name", "domain"],
    field_configs=[
        ("name", DataValidator.normalize_string),
        ("domain", _domain),
        ("description", _text),
        ("position", _mapping("position")),
        ("size", _mapping("size")),
        ("color_scheme", _mapping("color_scheme")),
        ("is_unlocked", DataValidator.normalize_bool),
        ("unlock_requirement", DataValidator.normalize_string, True),
        ("note_positions", _sequence("note_positions")),
        ("furniture", _sequence("furniture")),
    ],
    defaults={
        "description": str,
        "position": lambda: {"x": 0, "y": 0},
        "size": lambda: {"width": 640, "height": 400},
        "color_scheme": dict,
        "is_unlocked": lambda: False,
        "note_positions": list,
        "furniture": list,
    },
)


class SimpleManager(BaseManager):
    """
    Generic keyed manager for Tag, Quest and Room.

    Uses configuration to provide consistent CRUD operations across the
    entity kinds.
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[MnemosLogger],
        config: SimpleManagerConfig,
    ):
        super().__init__(session, logger)
        self.config = config

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def for_tags(cls, session: Session, logger: Optional[MnemosLogger] = None) -> "SimpleManager":
        """Create a manager for Tag entities."""
        return cls(session, logger, TAG_CONFIG)

    @classmethod
    def for_quests(cls, session: Session, logger: Optional[MnemosLogger] = None) -> "SimpleManager":
        """Create a manager for Quest entities."""
        return cls(session, logger, QUEST_CONFIG)

    @classmethod
    def for_rooms(cls, session: Session, logger: Optional[MnemosLogger] = None) -> "SimpleManager":
        """Create a manager for Room entities."""
        return cls(session, logger, ROOM_CONFIG)

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    def exists(self, entity_id: str) -> bool:
        return self._exists(self.config.model_class, entity_id)

    @handle_db_errors
    def get(self, entity_id: str) -> Optional[Any]:
        return self._get_by_id(self.config.model_class, entity_id)

    @handle_db_errors
    def get_all(self) -> List[Any]:
        return self._get_all(self.config.model_class, order_by=self.config.order_by)

    @handle_db_errors
    def count(self) -> int:
        return self._count(self.config.model_class)

    @handle_db_errors
    def create(self, metadata: Dict[str, Any]) -> Any:
        """
        Create a new entity.

        Args:
            metadata: Dictionary with 'id', the configured required fields
                and any optional fields

        Returns:
            Created entity object

        Raises:
            ValidationError: If a required field is missing or invalid
            DuplicateIdError: If an entity with this id already exists
        """
        DataValidator.validate_required_fields(
            metadata, ["id"] + self.config.required_fields
        )
        entity_id = DataValidator.normalize_string(metadata["id"])
        self._ensure_new_id(self.config.model_class, entity_id, self.config.display_name)

        entity = self.config.model_class(id=entity_id)
        self._update_scalar_fields(entity, metadata, self.config.field_configs)
        for field_name, factory in self.config.defaults.items():
            if getattr(entity, field_name) is None:
                setattr(entity, field_name, factory())

        self.session.add(entity)
        self._execute_with_retry(self.session.flush)

        safe_logger(self.logger).log_debug(
            f"Created {self.config.display_name}", {"id": entity_id}
        )
        return entity

    @handle_db_errors
    def update(self, entity_id: str, metadata: Dict[str, Any]) -> Optional[Any]:
        """
        Apply a partial update to an existing entity.

        Returns:
            The updated entity, or None when no entity has this id

        Raises:
            ValidationError: If metadata tries to change the id or a value
                is invalid
        """
        if "id" in metadata and metadata["id"] != entity_id:
            raise ValidationError(f"Cannot change {self.config.display_name} id")
        entity = self.get(entity_id)
        if entity is None:
            return None
        self._update_scalar_fields(entity, metadata, self.config.field_configs)
        self._execute_with_retry(self.session.flush)
        return entity

    @handle_db_errors
    def put(self, metadata: Dict[str, Any]) -> Any:
        """Overwrite an entity by id, creating it if absent."""
        DataValidator.validate_required_fields(metadata, ["id"])
        entity_id = DataValidator.normalize_string(metadata["id"])
        if self.exists(entity_id):
            return self.update(entity_id, metadata)
        return self.create(metadata)

    @handle_db_errors
    @log_database_operation("delete_entity")
    def delete(self, entity_id: str) -> bool:
        """Delete an entity; returns False when it did not exist."""
        entity = self.get(entity_id)
        if entity is None:
            return False
        self.session.delete(entity)
        self._execute_with_retry(self.session.flush)
        return True

    @handle_db_errors
    def clear(self) -> int:
        return self._delete_all(self.config.model_class)


# Aliases for the pre-configured managers
TagManager = SimpleManager.for_tags
QuestManager = SimpleManager.for_quests
RoomManager = SimpleManager.for_rooms
