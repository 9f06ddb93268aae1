"""Active company scope shared by every directory query."""
from __future__ import annotations

import logging

from orgdirectory.domain import OVERVIEW, CompanyScope, Overview, ScopedTo
from orgdirectory.infrastructure import ValueStore

logger = logging.getLogger(__name__)


def coerce_scope(value: CompanyScope | str | None) -> CompanyScope:
    """Accept a scope, a bare company id, or None (overview)."""

    if isinstance(value, (Overview, ScopedTo)):
        return value
    if value is None:
        return OVERVIEW
    if isinstance(value, str):
        value = value.strip()
        return ScopedTo(value) if value else OVERVIEW
    raise TypeError(f"cannot interpret {value!r} as a company scope")


class ScopeContext:
    """Persisted pointer to the active company.

    Writes are not checked against the company directory: a stale id simply
    yields empty scoped listings until it is corrected or the company is
    deleted (which resets the pointer).
    """

    def __init__(self, store: ValueStore) -> None:
        self._store = store

    def get(self) -> CompanyScope:
        raw = self._store.read()
        return ScopedTo(str(raw)) if raw else OVERVIEW

    @property
    def company_id(self) -> str | None:
        scope = self.get()
        return scope.company_id if isinstance(scope, ScopedTo) else None

    def set(self, scope: CompanyScope | str | None) -> CompanyScope:
        resolved = coerce_scope(scope)
        self._store.write(resolved.company_id if isinstance(resolved, ScopedTo) else None)
        return resolved

    def reset(self) -> None:
        self.set(OVERVIEW)
