"""Errors raised by namespace operations."""

from enum import Enum
from typing import Dict, List, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from basic_vfs.models.base import Entity


class ErrorKind(str, Enum):
    """Failure categories for operations that touch children."""

    UNSUPPORTED = "unsupported"
    NOT_FOUND = "not_found"


class NamespaceError(Exception):
    """Base class for namespace errors."""

    kind: ErrorKind | None = None


class UnsupportedOperationError(NamespaceError):
    """Raised when a child operation is invoked on a node that cannot hold children."""

    kind = ErrorKind.UNSUPPORTED


class EntityNotFoundError(NamespaceError):
    """Raised when no direct child carries the requested id."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_id: int, message: str | None = None):
        self.entity_id = entity_id
        super().__init__(message or f"Entity not found: {entity_id}")


class AttachError(NamespaceError):
    """Raised when an entity cannot be attached to a folder."""


class DanglingLinkError(NamespaceError):
    """Raised when a symbolic link is resolved after its target is gone."""


class DuplicateIdError(NamespaceError):
    """Raised by the id validation pass when several entities share an id."""

    def __init__(self, duplicates: Dict[int, List["Entity"]]):
        self.duplicates = duplicates
        ids = ", ".join(str(entity_id) for entity_id in sorted(duplicates))
        super().__init__(f"Duplicate entity ids: {ids}")
