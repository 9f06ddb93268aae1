"""Process-wide composition of stores, directories and the resolver."""
from __future__ import annotations

import logging
from collections.abc import Callable

from orgdirectory.application.assignments import ActiveAssignmentRegistry
from orgdirectory.application.companies import Clock, CompanyDirectory, IdFactory, new_id, utc_now
from orgdirectory.application.employees import EmployeeDirectory
from orgdirectory.application.resolver import ActiveAssignmentResolver
from orgdirectory.application.scope import ScopeContext
from orgdirectory.core import config
from orgdirectory.domain import Company, Department, Employee, ScopedTo
from orgdirectory.infrastructure import (
    ASSIGNMENTS_KEY,
    COMPANIES_KEY,
    EMPLOYEES_KEY,
    SCOPE_KEY,
    ChangeNotifier,
    EntityStore,
    InMemoryStorageBackend,
    JsonFileStorageBackend,
    StorageBackend,
    ValueStore,
)

logger = logging.getLogger(__name__)


class DirectoryService:
    """Coordinates the directory use cases over one storage backend."""

    def __init__(
        self,
        backend: StorageBackend,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ) -> None:
        self._backend = backend
        self._notifier = ChangeNotifier()

        self._company_store: EntityStore[Company] = EntityStore(
            COMPANIES_KEY,
            backend,
            self._notifier,
            encode=Company.to_dict,
            decode=Company.from_dict,
            sort_key=lambda company: company.created_at,
            id_of=lambda company: company.id,
        )
        self._employee_store: EntityStore[Employee] = EntityStore(
            EMPLOYEES_KEY,
            backend,
            self._notifier,
            encode=Employee.to_dict,
            decode=Employee.from_dict,
            sort_key=lambda employee: employee.created_at,
            id_of=lambda employee: employee.id,
        )
        self._assignment_store = ValueStore(
            ASSIGNMENTS_KEY,
            backend,
            self._notifier,
            default={department.value: None for department in Department},
        )
        self._scope_store = ValueStore(SCOPE_KEY, backend, self._notifier, default=None)

        self.scope = ScopeContext(self._scope_store)
        self.assignments = ActiveAssignmentRegistry(self._assignment_store)
        self.companies = CompanyDirectory(
            self._company_store,
            self._employee_store,
            self.scope,
            clock=clock,
            id_factory=id_factory,
        )
        self.employees = EmployeeDirectory(
            self._employee_store,
            self.companies,
            self.assignments,
            clock=clock,
            id_factory=id_factory,
        )
        self.resolver = ActiveAssignmentResolver(self.employees, self.assignments, self.scope)

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def init(self) -> None:
        """Create missing persisted keys with empty values. Does not notify."""

        self._company_store.ensure()
        self._employee_store.ensure()
        self._assignment_store.ensure()
        self._scope_store.ensure()

    def subscribe(self, listener: Callable[[str], None]) -> Callable[[], None]:
        """Register ``listener(key)``; returns a callable that unsubscribes it."""

        return self._notifier.subscribe(listener)

    def overview(self) -> dict[str, object]:
        """Summary of each department's selection under the active scope."""

        scope = self.scope.get()
        departments = []
        for department in Department:
            effective = self.resolver.resolve_effective(department)
            departments.append(
                {
                    "department": department.value,
                    "label": department.label,
                    "selected_employee_id": self.assignments.get_raw(department),
                    "effective_employee": effective.to_dict() if effective else None,
                }
            )
        return {
            "active_company_id": self.scope.company_id,
            "scoped": isinstance(scope, ScopedTo),
            "departments": departments,
        }

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._backend.reset()
        self._notifier.clear()
        self.init()


def build_directory_service(backend: StorageBackend | None = None) -> DirectoryService:
    """Build a service from ``backend`` or from the environment configuration."""

    if backend is None:
        if config.storage_kind() == config.STORAGE_JSON:
            backend = JsonFileStorageBackend(config.data_root() / "store")
        else:
            backend = InMemoryStorageBackend()
    service = DirectoryService(backend)
    service.init()
    logger.info("directory service ready (%s)", type(backend).__name__)
    return service


_service: DirectoryService | None = None


def get_directory_service() -> DirectoryService:
    """Return the singleton directory service for the process."""

    global _service
    if _service is None:
        _service = build_directory_service()
    return _service


def configure_directory_service(service: DirectoryService) -> None:
    """Install the service returned by :func:`get_directory_service`."""

    global _service
    _service = service


def reset_directory_state() -> None:
    """Reset the process store (used in tests)."""

    global _service
    if _service is not None:
        _service.reset()
    _service = None
