"""Department -> active employee registry with self-healing reads."""
from __future__ import annotations

import logging
from typing import Protocol

from orgdirectory.core.errors import PersistenceError
from orgdirectory.core.validation import coerce_department
from orgdirectory.domain import Department, Employee, EmployeeStatus
from orgdirectory.infrastructure import ValueStore

logger = logging.getLogger(__name__)


class EmployeeLookup(Protocol):
    def get_by_id(self, employee_id: str) -> Employee | None: ...


class ActiveAssignmentRegistry:
    """Stores which employee is selected for each department.

    Writes are taken verbatim. Validity is checked when the entry is read
    through :meth:`resolve`, which clears entries pointing at a missing or
    on-leave employee.
    """

    def __init__(self, store: ValueStore) -> None:
        self._store = store

    def _entries(self) -> dict[str, str | None]:
        raw = self._store.read() or {}
        if not isinstance(raw, dict):
            raise PersistenceError(self._store.key, f"expected a mapping, found {type(raw).__name__}")
        entries: dict[str, str | None] = {department.value: None for department in Department}
        for key, value in raw.items():
            if key in entries:
                entries[key] = str(value) if value else None
        return entries

    def snapshot(self) -> dict[Department, str | None]:
        return {Department(key): value for key, value in self._entries().items()}

    def set_active(self, department: Department | str, employee_id: str | None) -> None:
        department = coerce_department(department)
        entries = self._entries()
        entries[department.value] = employee_id or None
        self._store.write(entries)

    def get_raw(self, department: Department | str) -> str | None:
        department = coerce_department(department)
        return self._entries()[department.value]

    def resolve(self, department: Department | str, employees: EmployeeLookup) -> str | None:
        department = coerce_department(department)
        entries = self._entries()
        employee_id = entries[department.value]
        if employee_id is None:
            return None

        employee = employees.get_by_id(employee_id)
        if employee is not None and employee.status is EmployeeStatus.ACTIVE:
            return employee_id

        reason = "missing" if employee is None else "on leave"
        entries[department.value] = None
        self._store.write(entries)
        logger.info("cleared %s assignment: employee %s is %s", department.value, employee_id, reason)
        return None

    def clear_employee(self, employee_id: str) -> list[Department]:
        """Drop every entry pointing at ``employee_id``; returns the departments affected."""

        entries = self._entries()
        cleared = [Department(key) for key, value in entries.items() if value == employee_id]
        if not cleared:
            return []
        for department in cleared:
            entries[department.value] = None
        self._store.write(entries)
        logger.info(
            "cleared assignment(s) %s for employee %s",
            ", ".join(department.value for department in cleared),
            employee_id,
        )
        return cleared
