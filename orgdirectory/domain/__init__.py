"""Domain layer definitions."""

from .directory import (
    AVAILABLE,
    OVERVIEW,
    AssignedTo,
    Available,
    Company,
    CompanyScope,
    Department,
    Employee,
    EmployeeCompanyAssignment,
    EmployeeStatus,
    Overview,
    ScopedTo,
)

__all__ = [
    "AVAILABLE",
    "OVERVIEW",
    "AssignedTo",
    "Available",
    "Company",
    "CompanyScope",
    "Department",
    "Employee",
    "EmployeeCompanyAssignment",
    "EmployeeStatus",
    "Overview",
    "ScopedTo",
]
