#!/usr/bin/env python3
"""
config.py
-------------------
User configuration for Mnemos.

Settings are read from a YAML file (MNEMOS_HOME/config.yaml by default).
Every key is optional; missing keys fall back to the path constants.

Example config.yaml:
    db_path: ~/notes/mnemos.db
    log_dir: ~/notes/logs
    log_max_bytes: 1048576
    keep_mirror: true
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from .exceptions import ValidationError
from .paths import CONFIG_PATH, DB_PATH, EXPORT_DIR, LOG_DIR

_PATH_FIELDS = ("db_path", "log_dir", "export_dir")


@dataclass
class MnemosConfig:
    """
    Resolved runtime configuration.

    Attributes:
        db_path: SQLite database file
        log_dir: Directory for rotating log files
        export_dir: Default directory for snapshot exports
        log_max_bytes: Size at which log files rotate
        log_backup_count: Number of rotated log files kept
        keep_mirror: Maintain the in-memory mirror after each command
    """

    db_path: Path = field(default_factory=lambda: DB_PATH)
    log_dir: Path = field(default_factory=lambda: LOG_DIR)
    export_dir: Path = field(default_factory=lambda: EXPORT_DIR)
    log_max_bytes: int = 5 * 1024 * 1024
    log_backup_count: int = 3
    keep_mirror: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MnemosConfig":
        """
        Build a config from a parsed YAML mapping.

        Raises:
            ValidationError: On unknown keys or wrongly typed values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(f"Unknown configuration keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in _PATH_FIELDS:
                values[key] = Path(str(value)).expanduser()
            elif key in ("log_max_bytes", "log_backup_count"):
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    raise ValidationError(f"{key} must be a non-negative integer")
                values[key] = value
            elif key == "keep_mirror":
                if not isinstance(value, bool):
                    raise ValidationError("keep_mirror must be true or false")
                values[key] = value
        return cls(**values)


def load_config(path: Optional[Union[str, Path]] = None) -> MnemosConfig:
    """
    Load configuration from YAML, falling back to defaults.

    Args:
        path: Config file; defaults to CONFIG_PATH. A missing file yields
            the default configuration.

    Returns:
        MnemosConfig

    Raises:
        ValidationError: If the file is not valid YAML or not a mapping
    """
    config_path = Path(path).expanduser() if path else CONFIG_PATH
    if not config_path.exists():
        return MnemosConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return MnemosConfig()
    if not isinstance(data, dict):
        raise ValidationError(f"Configuration in {config_path} must be a mapping")
    return MnemosConfig.from_dict(data)
