#!/usr/bin/env python3
"""
singleton_manager.py
--------------------
Manager for the Stats and Settings singletons.

Both records are keyed by SINGLETON_ID. They are created with defaults on
first access and afterwards only updated.

Usage:
    stats_mgr = SingletonManager.for_stats(session, logger)
    stats = stats_mgr.get_or_create()
    stats_mgr.update({"wisdom_points": 10})
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from sqlalchemy.orm import Session

from mnemos.core.exceptions import ValidationError
from mnemos.core.logging_manager import MnemosLogger, safe_logger
from mnemos.core.validators import DataValidator
from mnemos.database.decorators import handle_db_errors, log_database_operation
from mnemos.database.models import (
    SINGLETON_ID,
    ActivityType,
    KnowledgeDomain,
    Settings,
    Stats,
    Theme,
)
from .base_manager import BaseManager


@dataclass
class SingletonConfig:
    """
    Configuration for a singleton manager.

    Attributes:
        model_class: SQLAlchemy model class
        display_name: Human-readable name for messages
        field_configs: (field, normalizer) tuples; also the set of keys
            accepted by update()
    """

    model_class: Type
    display_name: str
    field_configs: List[tuple]

    @property
    def field_names(self) -> List[str]:
        return [config[0] for config in self.field_configs]


def _counter(name: str):
    return lambda v: DataValidator.normalize_int(v, minimum=0, field=name)


def _accuracy(value: Any) -> float:
    accuracy = DataValidator.normalize_float(value, "average_review_accuracy")
    if not 0.0 <= accuracy <= 1.0:
        raise ValidationError(f"average_review_accuracy must be within [0, 1], got {accuracy}")
    return accuracy


def normalize_activity_entry(entry: Any) -> Dict[str, Any]:
    """
    Validate one recent-activity entry and store its timestamp as ISO text.

    Raises:
        ValidationError: If the entry is not a mapping or lacks a field
    """
    if not isinstance(entry, dict):
        raise ValidationError("Activity entries must be mappings")
    DataValidator.validate_required_fields(entry, ["id", "type", "timestamp"])
    normalized = {
        "id": str(entry["id"]),
        "type": DataValidator.normalize_enum(entry["type"], ActivityType).value,
        "timestamp": DataValidator.normalize_datetime(entry["timestamp"]).isoformat(),
        "description": str(entry.get("description", "")),
    }
    if entry.get("points") is not None:
        normalized["points"] = DataValidator.normalize_int(entry["points"], field="points")
    return normalized


def _activity(value: Any) -> List[Dict[str, Any]]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValidationError("recent_activity must be a list")
    return [normalize_activity_entry(entry) for entry in value]


STATS_CONFIG = SingletonConfig(
    model_class=Stats,
    display_name="stats",
    field_configs=[
        ("total_notes", _counter("total_notes")),
        ("collected_notes", _counter("collected_notes")),
        ("total_links", _counter("total_links")),
        ("review_streak", _counter("review_streak")),
        ("wisdom_points", _counter("wisdom_points")),
        ("completed_quests", _counter("completed_quests")),
        ("average_review_accuracy", _accuracy),
        ("most_productive_domain", lambda v: DataValidator.normalize_enum(v, KnowledgeDomain)),
        ("recent_activity", _activity),
    ],
)

SETTINGS_CONFIG = SingletonConfig(
    model_class=Settings,
    display_name="settings",
    field_configs=[
        ("auto_save", DataValidator.normalize_bool),
        ("default_domain", lambda v: DataValidator.normalize_enum(v, KnowledgeDomain)),
        ("review_reminders", DataValidator.normalize_bool),
        ("daily_review_goal", _counter("daily_review_goal")),
        ("theme", lambda v: DataValidator.normalize_enum(v, Theme)),
        ("sound_effects", DataValidator.normalize_bool),
        ("show_backlinks", DataValidator.normalize_bool),
        ("auto_link_similar", DataValidator.normalize_bool),
    ],
)


class SingletonManager(BaseManager):
    """Manages a single-row aggregate (Stats or Settings)."""

    def __init__(
        self,
        session: Session,
        logger: Optional[MnemosLogger],
        config: SingletonConfig,
    ):
        super().__init__(session, logger)
        self.config = config

    @classmethod
    def for_stats(cls, session: Session, logger: Optional[MnemosLogger] = None) -> "SingletonManager":
        """Create a manager for the Stats singleton."""
        return cls(session, logger, STATS_CONFIG)

    @classmethod
    def for_settings(cls, session: Session, logger: Optional[MnemosLogger] = None) -> "SingletonManager":
        """Create a manager for the Settings singleton."""
        return cls(session, logger, SETTINGS_CONFIG)

    @handle_db_errors
    def get(self) -> Optional[Any]:
        """Return the singleton, or None before it has been created."""
        return self._get_by_id(self.config.model_class, SINGLETON_ID)

    @handle_db_errors
    def get_or_create(self) -> Any:
        """Return the singleton, creating it with defaults if needed."""
        entity = self.get()
        if entity is not None:
            return entity

        entity = self.config.model_class(id=SINGLETON_ID)
        self.session.add(entity)
        self._execute_with_retry(self.session.flush)
        safe_logger(self.logger).log_info(f"Created default {self.config.display_name}")
        return entity

    @handle_db_errors
    @log_database_operation("update_singleton")
    def update(self, partial: Dict[str, Any]) -> Any:
        """
        Merge a partial update into the singleton.

        Raises:
            ValidationError: On unknown keys or invalid values
        """
        if not isinstance(partial, dict):
            raise ValidationError(f"{self.config.display_name} update must be a mapping")
        unknown = sorted(set(partial) - set(self.config.field_names))
        if unknown:
            raise ValidationError(
                f"Unknown {self.config.display_name} fields: {', '.join(unknown)}"
            )

        entity = self.get_or_create()
        self._update_scalar_fields(entity, partial, self.config.field_configs)
        self._execute_with_retry(self.session.flush)
        return entity

    @handle_db_errors
    def put(self, metadata: Dict[str, Any]) -> Any:
        """Replace the singleton: defaults for omitted fields, then metadata."""
        self.clear()
        self.get_or_create()
        return self.update(metadata)

    @handle_db_errors
    def clear(self) -> int:
        return self._delete_all(self.config.model_class)


# Aliases for the pre-configured managers
StatsManager = SingletonManager.for_stats
SettingsManager = SingletonManager.for_settings
