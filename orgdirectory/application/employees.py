"""Employee CRUD, status transitions and company-scoped listings."""
from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from orgdirectory.application.assignments import ActiveAssignmentRegistry
from orgdirectory.application.companies import Clock, CompanyDirectory, IdFactory, new_id, utc_now
from orgdirectory.application.scope import coerce_scope
from orgdirectory.core.errors import InvalidReferenceError, NotFoundError
from orgdirectory.core.validation import (
    coerce_department,
    coerce_status,
    validate_employee,
    validate_employee_update,
)
from orgdirectory.domain import CompanyScope, Department, Employee, EmployeeStatus, ScopedTo
from orgdirectory.infrastructure import EntityStore

logger = logging.getLogger(__name__)


class EmployeeDirectory:
    """Owns employee records.

    The department of an employee is fixed at creation; moving an employee
    to another department means deleting and recreating it. Status changes to
    on-leave, and deletions, also clear any registry entry that selected the
    employee.
    """

    def __init__(
        self,
        employees: EntityStore[Employee],
        companies: CompanyDirectory,
        registry: ActiveAssignmentRegistry,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ) -> None:
        self._employees = employees
        self._companies = companies
        self._registry = registry
        self._clock = clock
        self._new_id = id_factory

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def list(self) -> list[Employee]:
        return self._employees.list()

    def get_by_id(self, employee_id: str) -> Employee | None:
        return self._employees.get(employee_id)

    def list_scoped(self, scope: CompanyScope | str | None = None) -> list[Employee]:
        """Employees of the scoped company plus available ones; everything for overview."""

        resolved = coerce_scope(scope)
        employees = self._employees.list()
        if not isinstance(resolved, ScopedTo):
            return employees
        return [
            employee
            for employee in employees
            if employee.company_id is None or employee.company_id == resolved.company_id
        ]

    def list_by_department_scoped(
        self,
        department: Department | str,
        scope: CompanyScope | str | None = None,
    ) -> list[Employee]:
        department = coerce_department(department)
        return [
            employee
            for employee in self.list_scoped(scope)
            if employee.department is department and employee.status is EmployeeStatus.ACTIVE
        ]

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------
    def _check_company(self, company_id: str | None) -> None:
        if company_id is not None and not self._companies.exists(company_id):
            raise InvalidReferenceError("company_id", company_id)

    def _require(self, employees: list[Employee], employee_id: str) -> Employee:
        for employee in employees:
            if employee.id == employee_id:
                return employee
        raise NotFoundError("employee", employee_id)

    def create(self, data: Mapping[str, Any]) -> Employee:
        payload = validate_employee(data)
        self._check_company(payload.company_id)

        employee = Employee(
            id=self._new_id(),
            name=payload.name,
            instructions=payload.instructions,
            department=payload.department,
            company_id=payload.company_id,
            status=payload.status,
            created_at=self._clock(),
        )
        self._employees.replace_all([employee, *self._employees.list()])
        logger.info("created employee %s (%s) in %s", employee.id, employee.name, employee.department.value)
        return employee

    def update(self, employee: Employee | Mapping[str, Any]) -> Employee:
        """Replace editable fields. Any department in the input is ignored."""

        data = employee.to_dict() if isinstance(employee, Employee) else dict(employee)
        employee_id = str(data.get("id") or "")
        payload = validate_employee_update(data)

        employees = self._employees.list()
        stored = self._require(employees, employee_id)
        self._check_company(payload.company_id)

        status = payload.status or stored.status
        if status is EmployeeStatus.ON_LEAVE and stored.status is not EmployeeStatus.ON_LEAVE:
            self._registry.clear_employee(employee_id)

        updated = dataclasses.replace(
            stored,
            name=payload.name,
            instructions=payload.instructions,
            company_id=payload.company_id,
            status=status,
        )
        self._employees.replace_all(updated if item.id == employee_id else item for item in employees)
        return updated

    def set_status(self, employee_id: str, status: EmployeeStatus | str) -> Employee:
        status = coerce_status(status)
        employees = self._employees.list()
        stored = self._require(employees, employee_id)

        if status is EmployeeStatus.ON_LEAVE:
            # cleared before the status write so a failed write never leaves an on-leave employee selected
            self._registry.clear_employee(employee_id)
        if stored.status is status:
            return stored

        updated = dataclasses.replace(stored, status=status)
        self._employees.replace_all(updated if item.id == employee_id else item for item in employees)
        logger.info("employee %s is now %s", employee_id, status.value)
        return updated

    def delete(self, employee_id: str) -> None:
        employees = self._employees.list()
        self._require(employees, employee_id)
        self._registry.clear_employee(employee_id)
        self._employees.replace_all(employee for employee in employees if employee.id != employee_id)
        logger.info("deleted employee %s", employee_id)
