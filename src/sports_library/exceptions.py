"""
Exceptions raised by the sports library.

All errors share the SportsLibraryError base, so callers can handle every
failure of an add/update/delete with a single except clause. Lookups
(find_*) never raise for missing records; they return None or an empty list.
"""

from typing import Any, Optional


class SportsLibraryError(Exception):
    """
    Base exception for all sports library errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with additional context for logging
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class StoreUnavailableError(SportsLibraryError):
    """Raised when the datastore is closed, not initialized or unreadable."""


class NotFoundError(SportsLibraryError):
    """Raised when an expected record is missing."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateKeyError(SportsLibraryError):
    """Raised when a record with the same key already exists."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        super().__init__(
            f"{entity_type} with key {entity_id} already exists",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class UnsupportedTypeError(SportsLibraryError):
    """Raised when an object of an unregistered type reaches the repository."""

    def __init__(self, entity_type: str) -> None:
        super().__init__(
            f"Unsupported type: {entity_type}",
            details={"entity_type": entity_type},
        )
        self.entity_type = entity_type


class CascadeError(SportsLibraryError):
    """
    Raised when a step of a cascaded add, update or delete fails.

    The cascade is not transactional: records written before the failing
    step stay in the datastore. The original exception is chained.
    """

    def __init__(self, action: str, entity_type: str, entity_id: str, reason: str) -> None:
        super().__init__(
            f"Could not {action} {entity_type} with id {entity_id}: {reason}",
            details={"action": action, "entity_type": entity_type, "entity_id": entity_id},
        )
        self.action = action
        self.entity_type = entity_type
        self.entity_id = entity_id


class TemplateError(SportsLibraryError):
    """Raised when a JSON template can't be read, parsed or written."""


class GPXError(SportsLibraryError):
    """Raised when a GPX file can't be read, parsed or written."""


class ICALError(SportsLibraryError):
    """Raised when an iCAL file can't be read, parsed or written."""
