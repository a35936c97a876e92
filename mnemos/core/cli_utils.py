#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Shared CLI utilities for Mnemos commands.

Functions:
    setup_logger: Initialize MnemosLogger for CLI operations
"""
from pathlib import Path

from mnemos.core.config import MnemosConfig
from mnemos.core.logging_manager import MnemosLogger


def setup_logger(
    log_dir: Path, component_name: str, config: MnemosConfig = None
) -> MnemosLogger:
    """
    Create a logger writing under log_dir/operations.

    Args:
        log_dir: Base log directory
        component_name: Component identifier (e.g. 'cli')
        config: Optional configuration supplying rotation limits

    Returns:
        Configured MnemosLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    if config is None:
        return MnemosLogger(operations_log_dir, component_name=component_name)
    return MnemosLogger(
        operations_log_dir,
        component_name=component_name,
        max_bytes=config.log_max_bytes,
        backup_count=config.log_backup_count,
    )
