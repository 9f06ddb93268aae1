"""Exceptions raised by the directory layer."""
from __future__ import annotations


class DirectoryError(Exception):
    """Base class for every error surfaced by the directory layer."""


class NotFoundError(DirectoryError):
    """Raised when an operation targets an id that does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id!r} not found")


class InvalidReferenceError(DirectoryError):
    """Raised when a company reference does not resolve to a stored company."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} {value!r} does not reference an existing company")


class ValidationError(DirectoryError):
    """Raised when input fails field-level validation."""

    def __init__(self, message: str, errors: list[dict[str, object]] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)


class PersistenceError(DirectoryError):
    """Raised when the storage backend cannot read or write a value."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"storage failure for {key!r}: {reason}")
