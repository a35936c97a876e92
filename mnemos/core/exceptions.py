#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Mnemos knowledge base.

This module defines the hierarchy of exceptions raised by the storage
layer, the link graph, the review scheduler and the snapshot serializer.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all storage-related errors
    │   ├── NotFoundError - Referenced id does not exist
    │   ├── DuplicateIdError - Create with an id that already exists
    │   ├── StorageUnavailableError - Durable medium failed to initialize
    │   └── ExportError - Snapshot file could not be written
    └── ValidationError - Input data failed validation
        └── MalformedDocumentError - Snapshot failed shape checks

Usage:
    from mnemos.core.exceptions import DuplicateIdError, ValidationError

    try:
        db.notes.create(metadata)
    except DuplicateIdError as e:
        logger.log_error(e)
"""


class DatabaseError(Exception):
    """
    Base exception for storage-related errors.

    Raised when database operations fail due to connection issues,
    query errors, integrity violations, or other storage problems.

    Catch this to handle any storage error, or catch specific
    subclasses for more granular error handling.

    Examples:
        >>> raise DatabaseError("Connection to database failed")

    See Also:
        NotFoundError, DuplicateIdError, StorageUnavailableError, ExportError
    """

    pass


class NotFoundError(DatabaseError):
    """
    Exception for operations referencing a nonexistent id.

    Only raised where a command cannot proceed meaningfully, e.g. creating
    a link whose endpoint does not exist. Updates and deletes of a missing
    id are silent no-ops.

    Examples:
        >>> raise NotFoundError("Note not found: note_123")
    """

    pass


class DuplicateIdError(DatabaseError):
    """
    Exception for creating a record whose id already exists.

    Also raised when importing a snapshot into a store that was not
    cleared, or a snapshot that repeats an id.

    Examples:
        >>> raise DuplicateIdError("note already exists: note_123")
    """

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} already exists: {entity_id}")


class StorageUnavailableError(DatabaseError):
    """
    Exception for a durable medium that failed to initialize.

    Fatal to every subsequent operation until the knowledge base is
    re-initialized.

    Examples:
        >>> raise StorageUnavailableError("Cannot open database: disk I/O error")
    """

    pass


class ExportError(DatabaseError):
    """
    Exception for snapshot export failures.

    Raised when the snapshot document cannot be serialized or the
    destination file cannot be written.

    Examples:
        >>> raise ExportError("Failed to write snapshot: permission denied")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Unknown enumeration values
    - Missing required fields
    - Attempts to set derived fields directly
    - Unknown stats or settings keys

    Examples:
        >>> raise ValidationError("Invalid note type: 'poem'")
        >>> raise ValidationError("Required field 'title' missing or empty")
    """

    pass


class MalformedDocumentError(ValidationError):
    """
    Exception for snapshot documents that fail basic shape checks.

    Examples:
        >>> raise MalformedDocumentError("Snapshot is missing 'version'")
        >>> raise MalformedDocumentError("'notes' must be a list")
    """

    pass
