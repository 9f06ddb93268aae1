from __future__ import annotations

import io
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from orgdirectory.application import get_directory_service
from orgdirectory.domain import OVERVIEW, CompanyScope
from orgdirectory.exporters.roster_csv import export_roster

router = APIRouter(prefix="/employees", tags=["employees"])

OVERVIEW_PARAM = "overview"


def scope_from_param(value: str | None) -> CompanyScope | str | None:
    """``overview`` forces the unscoped view; None defers to the active scope."""

    if value is None:
        return None
    if value.strip().lower() == OVERVIEW_PARAM:
        return OVERVIEW
    return value


@router.get("")
async def list_employees(
    scope: str | None = Query(default=None),
    department: str | None = Query(default=None),
) -> dict:
    service = get_directory_service()
    resolved = scope_from_param(scope)
    if resolved is None:
        resolved = service.scope.get()
    if department:
        employees = service.employees.list_by_department_scoped(department, resolved)
    else:
        employees = service.employees.list_scoped(resolved)
    return {"items": [employee.to_dict() for employee in employees]}


@router.post("")
async def create_employee(payload: dict[str, Any]) -> dict:
    service = get_directory_service()
    employee = service.employees.create(payload)
    return employee.to_dict()


@router.get("/export")
async def export_employees() -> Response:
    service = get_directory_service()
    buffer = io.StringIO()
    export_roster(buffer, service.employees.list(), service.companies.list())
    return Response(
        buffer.getvalue(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="roster.csv"'},
    )


@router.get("/{employee_id}")
async def get_employee(employee_id: str) -> dict:
    service = get_directory_service()
    employee = service.employees.get_by_id(employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail="employee not found")
    return employee.to_dict()


@router.put("/{employee_id}")
async def update_employee(employee_id: str, payload: dict[str, Any]) -> dict:
    service = get_directory_service()
    employee = service.employees.update({**payload, "id": employee_id})
    return employee.to_dict()


@router.put("/{employee_id}/status")
async def set_employee_status(employee_id: str, payload: dict[str, Any]) -> dict:
    status = payload.get("status")
    if not status:
        raise HTTPException(status_code=400, detail="status is required")
    service = get_directory_service()
    employee = service.employees.set_status(employee_id, str(status))
    return employee.to_dict()


@router.delete("/{employee_id}")
async def delete_employee(employee_id: str) -> dict:
    service = get_directory_service()
    service.employees.delete(employee_id)
    return {"deleted": employee_id}
