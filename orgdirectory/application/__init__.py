"""Application services."""

from .assignments import ActiveAssignmentRegistry
from .companies import CompanyDirectory
from .employees import EmployeeDirectory
from .resolver import ActiveAssignmentResolver
from .scope import ScopeContext, coerce_scope
from .service import (
    DirectoryService,
    build_directory_service,
    configure_directory_service,
    get_directory_service,
    reset_directory_state,
)

__all__ = [
    "ActiveAssignmentRegistry",
    "ActiveAssignmentResolver",
    "CompanyDirectory",
    "DirectoryService",
    "EmployeeDirectory",
    "ScopeContext",
    "build_directory_service",
    "coerce_scope",
    "configure_directory_service",
    "get_directory_service",
    "reset_directory_state",
]
