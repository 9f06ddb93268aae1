from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic

from orgdirectory.core.errors import ValidationError
from orgdirectory.core.schema import ApiConfigFields, CompanyInput, CompanyUpdate, EmployeeInput, EmployeeUpdate
from orgdirectory.domain import Department, EmployeeStatus

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _describe(exc: pydantic.ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "input"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def _parse(model: type[ModelT], data: Mapping[str, Any] | pydantic.BaseModel) -> ModelT:
    if isinstance(data, pydantic.BaseModel):
        data = data.model_dump()
    if not isinstance(data, Mapping):
        raise ValidationError(f"expected an object, got {type(data).__name__}")
    try:
        return model.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe(exc), errors=exc.errors(include_url=False)) from exc


def validate_company(data: Mapping[str, Any] | pydantic.BaseModel) -> CompanyInput:
    return _parse(CompanyInput, data)


def validate_company_update(data: Mapping[str, Any] | pydantic.BaseModel) -> CompanyUpdate:
    return _parse(CompanyUpdate, data)


def validate_employee(data: Mapping[str, Any] | pydantic.BaseModel) -> EmployeeInput:
    return _parse(EmployeeInput, data)


def validate_employee_update(data: Mapping[str, Any] | pydantic.BaseModel) -> EmployeeUpdate:
    return _parse(EmployeeUpdate, data)


def validate_api_config(platform: str, fields: Mapping[str, Any]) -> tuple[str, dict[str, str | None]]:
    platform = (platform or "").strip()
    if not platform:
        raise ValidationError("platform: must not be empty")
    return platform, _parse(ApiConfigFields, fields).supplied_fields()


def coerce_department(value: Department | str) -> Department:
    try:
        return Department(value)
    except ValueError as exc:
        valid = ", ".join(item.value for item in Department)
        raise ValidationError(f"department: unknown department {value!r} (valid: {valid})") from exc


def coerce_status(value: EmployeeStatus | str) -> EmployeeStatus:
    try:
        return EmployeeStatus(value)
    except ValueError as exc:
        valid = ", ".join(item.value for item in EmployeeStatus)
        raise ValidationError(f"status: unknown status {value!r} (valid: {valid})") from exc
