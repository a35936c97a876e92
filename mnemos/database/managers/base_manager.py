#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common storage helpers for every entity kind.

Key Features:
    - Retry logic for SQLite lock handling
    - Keyed lookup, listing, counting and clearing helpers
    - Duplicate-id detection for create()
    - Normalized scalar-field updates from metadata dictionaries

Usage:
    Subclass BaseManager for each entity kind and implement the keyed
    contract used throughout the knowledge base:
    - exists(id): Check if a record exists
    - get(id): Return the record or None
    - get_all(): Return every record
    - create(metadata): Insert; DuplicateIdError if the id exists
    - put(metadata): Overwrite by id, creating the record if absent
    - delete(id): Remove the record; silent when absent
    - clear(): Remove every record
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import time
from abc import ABC
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import delete
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

# --- Local imports ---
from mnemos.core.exceptions import DatabaseError, DuplicateIdError
from mnemos.core.logging_manager import MnemosLogger, safe_logger

T = TypeVar("T")


class BaseManager(ABC):
    """
    Abstract base manager providing common storage helpers.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[MnemosLogger] = None):
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _execute_with_retry(
        self,
        operation: Callable,
        max_retries: int = 3,
        retry_delay: float = 0.1,
    ) -> Any:
        """
        Execute a database operation, retrying while SQLite reports a lock.

        Args:
            operation: Callable that performs the operation
            max_retries: Maximum number of attempts
            retry_delay: Base delay between attempts (exponential backoff)

        Returns:
            Result of the operation

        Raises:
            OperationalError: If not a lock error or all retries are exhausted
        """
        for attempt in range(max_retries):
            try:
                return operation()
            except OperationalError as e:
                error_msg = str(e).lower()
                if ("locked" in error_msg or "busy" in error_msg) and attempt < max_retries - 1:
                    wait_time = retry_delay * (2**attempt)
                    safe_logger(self.logger).log_debug(
                        f"Database locked, retrying in {wait_time}s",
                        {"attempt": attempt + 1, "max_retries": max_retries},
                    )
                    time.sleep(wait_time)
                    continue
                raise

        raise DatabaseError("Retry loop completed without success")

    # -------------------------------------------------------------------------
    # Generic Keyed Helpers
    # -------------------------------------------------------------------------

    def _get_by_id(self, model_class: Type[T], entity_id: Any) -> Optional[T]:
        """Return the record with the given primary key, or None."""
        if entity_id is None:
            return None
        return self.session.get(model_class, entity_id)

    def _exists(self, model_class: Type[T], entity_id: Any) -> bool:
        return self._get_by_id(model_class, entity_id) is not None

    def _ensure_new_id(self, model_class: Type[T], entity_id: Any, kind: str) -> None:
        """
        Guard for create().

        Raises:
            DuplicateIdError: If a record with entity_id exists, either in the
                database or pending in the session
        """
        if self._get_by_id(model_class, entity_id) is not None:
            raise DuplicateIdError(kind, entity_id)

    def _get_all(
        self,
        model_class: Type[T],
        order_by: Optional[str] = None,
        **filters: Any,
    ) -> List[T]:
        """
        Get all records of a type with optional filtering and ordering.

        Args:
            model_class: ORM model class
            order_by: Column name to order by
            **filters: Equality filters

        Returns:
            List of records
        """
        query = self.session.query(model_class)
        if filters:
            query = query.filter_by(**filters)
        if order_by and hasattr(model_class, order_by):
            query = query.order_by(getattr(model_class, order_by))
        return query.all()

    def _count(self, model_class: Type[T], **filters: Any) -> int:
        query = self.session.query(model_class)
        if filters:
            query = query.filter_by(**filters)
        return query.count()

    def _delete_all(self, model_class: Type[T]) -> int:
        """Bulk-delete every row of model_class, returning the row count."""
        result = self.session.execute(delete(model_class))
        return result.rowcount or 0

    # -------------------------------------------------------------------------
    # Scalar Field Update Helpers
    # -------------------------------------------------------------------------

    def _update_scalar_fields(
        self,
        entity: Any,
        metadata: Dict[str, Any],
        field_configs: List[tuple],
    ) -> None:
        """
        Update scalar fields from metadata using normalizers.

        Args:
            entity: Entity to update
            metadata: Dictionary containing field values
            field_configs: List of tuples:
                - (field_name, normalizer) for required fields
                - (field_name, normalizer, allow_none) for optional fields

        Example:
            self._update_scalar_fields(tag, metadata, [
                ("name", DataValidator.normalize_string),
                ("description", _text, True),
            ])
        """
        for config in field_configs:
            field_name = config[0]
            normalizer = config[1]
            allow_none = config[2] if len(config) > 2 else False

            if field_name not in metadata:
                continue

            value = metadata[field_name]
            value = normalizer(value) if value is not None else None
            if value is not None or allow_none:
                setattr(entity, field_name, value)
