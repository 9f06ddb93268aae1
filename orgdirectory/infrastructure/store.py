"""Infrastructure layer for directory persistence.

Every value is stored whole under a logical key. Collections are replaced in
full on each write and a change notification carrying the key is published
after the write succeeds. There is no locking: two processes doing
read-modify-write against the same JSON root race and the later write wins.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar

from orgdirectory.core.errors import PersistenceError

logger = logging.getLogger(__name__)

COMPANIES_KEY = "companies"
EMPLOYEES_KEY = "employees"
ASSIGNMENTS_KEY = "active_assignments"
SCOPE_KEY = "active_company"

ChangeListener = Callable[[str], None]


class StorageBackend(Protocol):
    """Persistence contract: whole JSON values addressed by key."""

    def read(self, key: str) -> Any | None: ...

    def write(self, key: str, value: Any) -> None: ...

    def exists(self, key: str) -> bool: ...

    def reset(self) -> None: ...


class InMemoryStorageBackend:
    """Simple in-memory backend for fast iteration and tests."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def read(self, key: str) -> Any | None:
        raw = self._values.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def write(self, key: str, value: Any) -> None:
        # values are kept serialised so callers never share mutable state with the store
        try:
            self._values[key] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(key, str(exc)) from exc

    def exists(self, key: str) -> bool:
        return key in self._values

    def reset(self) -> None:
        self._values.clear()


class JsonFileStorageBackend:
    """One ``<key>.json`` file per key under ``root``.

    Reads always go to disk so writes from other processes sharing the root
    become visible on the next read.
    """

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        return self._root / f"{key}.json"

    def read(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fp:
                return json.load(fp)
        except (OSError, ValueError) as exc:
            raise PersistenceError(key, str(exc)) from exc

    def write(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fp:
                    fp.write(payload)
                    fp.write("\n")
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(key, str(exc)) from exc

    def exists(self, key: str) -> bool:
        return self._path(key).exists()

    def reset(self) -> None:
        for path in self._root.glob("*.json"):
            path.unlink()


class ChangeNotifier:
    """Synchronous observer list keyed by storage key."""

    def __init__(self) -> None:
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, key: str) -> None:
        logger.debug("change notification for %s to %d listener(s)", key, len(self._listeners))
        for listener in list(self._listeners):
            try:
                listener(key)
            except Exception:
                logger.exception("change listener %r failed for key %s", listener, key)

    def clear(self) -> None:
        self._listeners.clear()


T = TypeVar("T")


class EntityStore(Generic[T]):
    """Persisted collection of records with full-replace writes."""

    def __init__(
        self,
        key: str,
        backend: StorageBackend,
        notifier: ChangeNotifier,
        *,
        encode: Callable[[T], dict[str, Any]],
        decode: Callable[[dict[str, Any]], T],
        sort_key: Callable[[T], Any],
        id_of: Callable[[T], str],
    ) -> None:
        self.key = key
        self._backend = backend
        self._notifier = notifier
        self._encode = encode
        self._decode = decode
        self._sort_key = sort_key
        self._id_of = id_of

    def list(self) -> list[T]:
        """Newest first, ties broken by ascending id."""

        raw = self._backend.read(self.key) or []
        if not isinstance(raw, list):
            raise PersistenceError(self.key, f"expected a list, found {type(raw).__name__}")
        try:
            items = [self._decode(item) for item in raw]
            items.sort(key=self._id_of)
            items.sort(key=self._sort_key, reverse=True)
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(self.key, f"undecodable record: {exc}") from exc
        return items

    def get(self, item_id: str) -> T | None:
        return next((item for item in self.list() if self._id_of(item) == item_id), None)

    def replace_all(self, items: Iterable[T]) -> None:
        payload = [self._encode(item) for item in items]
        self._backend.write(self.key, payload)
        logger.debug("replaced %s with %d record(s)", self.key, len(payload))
        self._notifier.notify(self.key)

    def ensure(self) -> None:
        if not self._backend.exists(self.key):
            self._backend.write(self.key, [])


class ValueStore:
    """Single persisted JSON value with the same write-then-notify contract."""

    def __init__(self, key: str, backend: StorageBackend, notifier: ChangeNotifier, *, default: Any = None) -> None:
        self.key = key
        self._backend = backend
        self._notifier = notifier
        self._default = default

    def read(self) -> Any:
        value = self._backend.read(self.key)
        if value is None:
            return copy.deepcopy(self._default)
        return value

    def write(self, value: Any) -> None:
        self._backend.write(self.key, value)
        logger.debug("wrote %s", self.key)
        self._notifier.notify(self.key)

    def ensure(self) -> None:
        if not self._backend.exists(self.key):
            self._backend.write(self.key, copy.deepcopy(self._default))
