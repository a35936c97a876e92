#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for Mnemos.

All user data lives under a single home directory, which defaults to
~/.mnemos and can be moved with the MNEMOS_HOME environment variable:

    MNEMOS_HOME/
    ├── mnemos.db      # SQLite knowledge base
    ├── config.yaml    # Optional user configuration
    ├── logs/          # Rotating log files
    └── exports/       # Snapshot documents
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_home() -> Path:
    """Resolve the Mnemos home directory from the environment."""
    return Path(os.environ.get("MNEMOS_HOME", "~/.mnemos")).expanduser()


HOME = _get_home()

DB_PATH = HOME / "mnemos.db"
CONFIG_PATH = HOME / "config.yaml"
LOG_DIR = HOME / "logs"
EXPORT_DIR = HOME / "exports"
