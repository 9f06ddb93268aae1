"""Domain entities for the company/employee directory."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class Department(str, Enum):
    """Closed set of departments that can each have one active employee."""

    CONTENT_CREATION = "ContentCreation"
    SUMMARIZER = "Summarizer"
    THEME_PLANNER = "ThemePlanner"
    SMART_HASHTAG_SUGGESTIONS = "SmartHashtagSuggestions"

    @property
    def label(self) -> str:
        return _DEPARTMENT_LABELS[self]


_DEPARTMENT_LABELS: dict[Department, str] = {
    Department.CONTENT_CREATION: "Content creation",
    Department.SUMMARIZER: "Text summarizer",
    Department.THEME_PLANNER: "Theme planner",
    Department.SMART_HASHTAG_SUGGESTIONS: "Hashtag suggestions",
}


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "OnLeave"


@dataclass(frozen=True, slots=True)
class Overview:
    """Unscoped view: every company and every available employee."""


@dataclass(frozen=True, slots=True)
class ScopedTo:
    """View narrowed to one company plus the available employees."""

    company_id: str


CompanyScope = Union[Overview, ScopedTo]

OVERVIEW = Overview()


@dataclass(frozen=True, slots=True)
class Available:
    """Employee not bound to any company; usable under every scope."""


@dataclass(frozen=True, slots=True)
class AssignedTo:
    company_id: str


EmployeeCompanyAssignment = Union[Available, AssignedTo]

AVAILABLE = Available()


@dataclass(frozen=True, slots=True)
class Company:
    id: str
    name: str
    created_at: datetime
    logo_url: str | None = None
    api_configs: dict[str, dict[str, str | None]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "logo_url": self.logo_url,
            "created_at": self.created_at.isoformat(),
            "api_configs": {platform: dict(fields) for platform, fields in self.api_configs.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Company":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            logo_url=data.get("logo_url") or None,
            created_at=datetime.fromisoformat(data["created_at"]),
            api_configs={
                str(platform): dict(fields or {})
                for platform, fields in (data.get("api_configs") or {}).items()
            },
        )


@dataclass(frozen=True, slots=True)
class Employee:
    id: str
    name: str
    instructions: str
    department: Department
    created_at: datetime
    company_id: str | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def assignment(self) -> EmployeeCompanyAssignment:
        if self.company_id:
            return AssignedTo(self.company_id)
        return AVAILABLE

    @property
    def is_active(self) -> bool:
        return self.status is EmployeeStatus.ACTIVE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "instructions": self.instructions,
            "department": self.department.value,
            "company_id": self.company_id,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Employee":
        # records written before the status field existed count as active
        status = data.get("status") or EmployeeStatus.ACTIVE.value
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            instructions=str(data["instructions"]),
            department=Department(data["department"]),
            company_id=data.get("company_id") or None,
            status=EmployeeStatus(status),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
