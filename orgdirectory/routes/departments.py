from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query

from orgdirectory.application import get_directory_service
from orgdirectory.core.validation import coerce_department
from orgdirectory.routes.employees import scope_from_param

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("")
async def list_departments() -> dict:
    service = get_directory_service()
    return service.overview()


@router.get("/{department}/candidates")
async def list_department_candidates(department: str, scope: str | None = Query(default=None)) -> dict:
    service = get_directory_service()
    resolved = scope_from_param(scope)
    if resolved is None:
        resolved = service.scope.get()
    employees = service.employees.list_by_department_scoped(department, resolved)
    return {"department": coerce_department(department).value, "items": [item.to_dict() for item in employees]}


@router.put("/{department}/active")
async def set_department_active(department: str, payload: dict[str, Any]) -> dict:
    service = get_directory_service()
    employee_id = payload.get("employee_id")
    service.assignments.set_active(department, str(employee_id) if employee_id else None)
    return {
        "department": coerce_department(department).value,
        "selected_employee_id": service.assignments.get_raw(department),
    }


@router.get("/{department}/effective")
async def get_department_effective(department: str, scope: str | None = Query(default=None)) -> dict:
    service = get_directory_service()
    employee = service.resolver.resolve_effective(department, scope_from_param(scope))
    return {
        "department": coerce_department(department).value,
        "employee": employee.to_dict() if employee else None,
    }
