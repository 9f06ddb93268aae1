"""Infrastructure layer exports."""

from .store import (
    ASSIGNMENTS_KEY,
    COMPANIES_KEY,
    EMPLOYEES_KEY,
    SCOPE_KEY,
    ChangeNotifier,
    EntityStore,
    InMemoryStorageBackend,
    JsonFileStorageBackend,
    StorageBackend,
    ValueStore,
)

__all__ = [
    "ASSIGNMENTS_KEY",
    "COMPANIES_KEY",
    "EMPLOYEES_KEY",
    "SCOPE_KEY",
    "ChangeNotifier",
    "EntityStore",
    "InMemoryStorageBackend",
    "JsonFileStorageBackend",
    "StorageBackend",
    "ValueStore",
]
