#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for Mnemos.

Provides type-safe conversion of caller-supplied values (snapshot JSON,
CLI arguments, partial updates) into the types stored by the database.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)


class DataValidator:
    """Centralized data validation for knowledge-base operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If a field is missing or empty
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Expected a mapping, got {type(data).__name__}")
        for field in required_fields:
            if field not in data or data[field] in (None, ""):
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Strip surrounding whitespace; empty strings become None.

        Args:
            value: Value to normalize

        Returns:
            Normalized string or None
        """
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @staticmethod
    def normalize_datetime(value: Any) -> Optional[datetime]:
        """
        Convert ISO-8601 strings and datetimes to timezone-aware UTC.

        Naive datetimes are taken to be UTC. A trailing 'Z' is accepted.

        Args:
            value: ISO string, datetime, or None

        Returns:
            Aware UTC datetime or None

        Raises:
            ValidationError: If the value cannot be parsed
        """
        if value is None or value == "":
            return None
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                value = datetime.fromisoformat(text)
            except ValueError as e:
                raise ValidationError(f"Invalid timestamp: {value!r}") from e
        if not isinstance(value, datetime):
            raise ValidationError(f"Invalid timestamp type: {type(value).__name__}")
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @staticmethod
    def normalize_int(
        value: Any,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
        field: str = "value",
    ) -> int:
        """
        Convert to int and check optional bounds.

        Raises:
            ValidationError: If not an integer or out of bounds
        """
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be an integer, got bool")
        try:
            result = int(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"{field} must be an integer: {value!r}") from e
        if minimum is not None and result < minimum:
            raise ValidationError(f"{field} must be >= {minimum}, got {result}")
        if maximum is not None and result > maximum:
            raise ValidationError(f"{field} must be <= {maximum}, got {result}")
        return result

    @staticmethod
    def normalize_float(value: Any, field: str = "value") -> float:
        if isinstance(value, bool):
            raise ValidationError(f"{field} must be a number, got bool")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"{field} must be a number: {value!r}") from e

    @staticmethod
    def normalize_bool(value: Any) -> bool:
        """
        Convert common boolean spellings to bool.

        Raises:
            ValidationError: If the value is not recognizably boolean
        """
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "yes", "1", "on"):
                return True
            if lowered in ("false", "no", "0", "off"):
                return False
        raise ValidationError(f"Invalid boolean value: {value!r}")

    @staticmethod
    def normalize_enum(value: Any, enum_class: Type[E]) -> E:
        """
        Resolve a value to a member of enum_class.

        Raises:
            ValidationError: If the value is not a member
        """
        if isinstance(value, enum_class):
            return value
        try:
            return enum_class(value)
        except ValueError as e:
            raise ValidationError(
                f"Invalid {enum_class.__name__}: {value!r} "
                f"(expected one of {[m.value for m in enum_class]})"
            ) from e

    @staticmethod
    def normalize_string_list(value: Any, field: str = "value") -> List[str]:
        """Normalize a list of strings, dropping blanks and duplicates."""
        if value is None:
            return []
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ValidationError(f"{field} must be a list of strings")
        result: List[str] = []
        for item in value:
            normalized = DataValidator.normalize_string(item)
            if normalized and normalized not in result:
                result.append(normalized)
        return result

    @staticmethod
    def word_count(content: Optional[str]) -> int:
        """Count non-empty whitespace-delimited tokens."""
        return len((content or "").split())

    @staticmethod
    def reading_time(content: Optional[str]) -> int:
        """Estimate reading time in minutes at 200 characters per minute."""
        return math.ceil(len(content or "") / 200)
