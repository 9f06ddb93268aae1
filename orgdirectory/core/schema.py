from __future__ import annotations

from typing import Any

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from orgdirectory.domain import Department, EmployeeStatus

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def check_optional_url(value: str | None) -> str | None:
    """Validate URL syntax but keep the caller's spelling of the URL."""

    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        _URL_ADAPTER.validate_python(value)
    except ValueError as exc:
        raise ValueError(f"{value!r} is not a valid URL") from exc
    return value


class CompanyInput(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=2)
    logo_url: str | None = None

    @field_validator("logo_url")
    @classmethod
    def check_logo_url(cls, value: str | None) -> str | None:
        return check_optional_url(value)


class ApiConfigFields(BaseModel):
    """Credential bag for one publishing platform. Unknown fields are kept."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    api_key: str | None = None
    api_secret: str | None = None
    access_token: str | None = None
    account_id: str | None = None
    username: str | None = None
    endpoint_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def coerce_to_text(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            str(key): value if value is None or isinstance(value, str) else str(value)
            for key, value in data.items()
        }

    @field_validator("endpoint_url")
    @classmethod
    def check_endpoint_url(cls, value: str | None) -> str | None:
        return check_optional_url(value)

    def supplied_fields(self) -> dict[str, str | None]:
        """Only the fields the caller actually sent, extras included."""

        extras = self.model_extra or {}
        return {
            key: value
            for key, value in self.model_dump().items()
            if key in self.model_fields_set or key in extras
        }


class CompanyUpdate(CompanyInput):
    # None keeps the stored configs
    api_configs: dict[str, ApiConfigFields] | None = None


class EmployeeUpdate(BaseModel):
    """Editable employee fields. ``department`` is not declared and is dropped on purpose."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=3)
    instructions: str = Field(min_length=10)
    company_id: str | None = None
    # None keeps the stored status
    status: EmployeeStatus | None = None

    @field_validator("company_id")
    @classmethod
    def blank_company_is_available(cls, value: str | None) -> str | None:
        return value or None


class EmployeeInput(EmployeeUpdate):
    department: Department
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @field_validator("status", mode="before")
    @classmethod
    def absent_status_is_active(cls, value: Any) -> Any:
        return value or EmployeeStatus.ACTIVE
