#!/usr/bin/env python3
"""
Mnemos Database Package
---------------------------
Entity Store and the services that keep it consistent.

- manager: MnemosDB, engine/session handling and entity managers
- link_graph: link/backlink bookkeeping
- stats_aggregator: rolling counters and the activity log
- snapshot_manager: full-graph export/import
- decorators: logging and error translation for database operations
"""

from .manager import MnemosDB
from mnemos.core.exceptions import (
    DatabaseError,
    DuplicateIdError,
    ExportError,
    MalformedDocumentError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from .link_graph import LinkGraph
from .stats_aggregator import ActivityLog, StatsAggregator
from .snapshot_manager import SNAPSHOT_VERSION, SnapshotManager
from .decorators import (
    DatabaseOperation,
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)

__all__ = [
    # Main manager
    "MnemosDB",
    # Exceptions
    "DatabaseError",
    "DuplicateIdError",
    "ExportError",
    "MalformedDocumentError",
    "NotFoundError",
    "StorageUnavailableError",
    "ValidationError",
    # Services
    "LinkGraph",
    "ActivityLog",
    "StatsAggregator",
    "SNAPSHOT_VERSION",
    "SnapshotManager",
    # Decorators
    "DatabaseOperation",
    "handle_db_errors",
    "log_database_operation",
    "validate_metadata",
]
