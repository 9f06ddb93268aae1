"""Answers which employee, if any, currently speaks for a department."""
from __future__ import annotations

import logging

from orgdirectory.application.assignments import ActiveAssignmentRegistry
from orgdirectory.application.employees import EmployeeDirectory
from orgdirectory.application.scope import ScopeContext, coerce_scope
from orgdirectory.domain import AssignedTo, CompanyScope, Department, Employee, ScopedTo

logger = logging.getLogger(__name__)


class ActiveAssignmentResolver:
    """Combines the registry, the employee directory and the active scope.

    Resolution is two-staged. The registry read drops entries whose employee
    is gone or on leave (this writes). The scope check then hides an employee
    that belongs to a different company than the scoped one, leaving the
    registry untouched since the same entry is valid under other scopes.
    """

    def __init__(
        self,
        employees: EmployeeDirectory,
        registry: ActiveAssignmentRegistry,
        scope: ScopeContext,
    ) -> None:
        self._employees = employees
        self._registry = registry
        self._scope = scope

    def resolve_effective(
        self,
        department: Department | str,
        scope: CompanyScope | str | None = None,
    ) -> Employee | None:
        """Resolve against ``scope`` when given, otherwise the active scope."""

        employee_id = self._registry.resolve(department, self._employees)
        if employee_id is None:
            return None

        employee = self._employees.get_by_id(employee_id)
        if employee is None:
            return None

        active_scope = self._scope.get() if scope is None else coerce_scope(scope)
        assignment = employee.assignment
        if (
            isinstance(active_scope, ScopedTo)
            and isinstance(assignment, AssignedTo)
            and assignment.company_id != active_scope.company_id
        ):
            logger.debug(
                "employee %s belongs to company %s, not to scoped company %s",
                employee_id,
                assignment.company_id,
                active_scope.company_id,
            )
            return None
        return employee

    def instructions_for(self, department: Department | str, scope: CompanyScope | str | None = None) -> str | None:
        employee = self.resolve_effective(department, scope)
        return employee.instructions if employee else None
