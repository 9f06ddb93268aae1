"""Company CRUD and the cascade that runs when a company is deleted."""
from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from orgdirectory.application.scope import ScopeContext
from orgdirectory.core.errors import NotFoundError
from orgdirectory.core.validation import validate_api_config, validate_company, validate_company_update
from orgdirectory.domain import Company, Employee, ScopedTo
from orgdirectory.infrastructure import EntityStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class CompanyDirectory:
    def __init__(
        self,
        companies: EntityStore[Company],
        employees: EntityStore[Employee],
        scope: ScopeContext,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ) -> None:
        self._companies = companies
        self._employees = employees
        self._scope = scope
        self._clock = clock
        self._new_id = id_factory

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def list(self) -> list[Company]:
        return self._companies.list()

    def get_by_id(self, company_id: str) -> Company | None:
        return self._companies.get(company_id)

    def exists(self, company_id: str) -> bool:
        return self.get_by_id(company_id) is not None

    def _require(self, companies: list[Company], company_id: str) -> Company:
        for company in companies:
            if company.id == company_id:
                return company
        raise NotFoundError("company", company_id)

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------
    def create(self, data: Mapping[str, Any]) -> Company:
        payload = validate_company(data)
        company = Company(
            id=self._new_id(),
            name=payload.name,
            logo_url=payload.logo_url,
            created_at=self._clock(),
            api_configs={},
        )
        self._companies.replace_all([company, *self._companies.list()])
        logger.info("created company %s (%s)", company.id, company.name)
        return company

    def update(self, company: Company | Mapping[str, Any]) -> Company:
        """Replace the editable fields of a stored company; id and created_at never change."""

        data = company.to_dict() if isinstance(company, Company) else dict(company)
        company_id = str(data.get("id") or "")
        payload = validate_company_update(data)

        companies = self._companies.list()
        stored = self._require(companies, company_id)
        api_configs = stored.api_configs
        if payload.api_configs is not None:
            api_configs = {
                platform: fields.supplied_fields() for platform, fields in payload.api_configs.items()
            }
        updated = dataclasses.replace(
            stored,
            name=payload.name,
            logo_url=payload.logo_url,
            api_configs=api_configs,
        )
        self._companies.replace_all(updated if item.id == company_id else item for item in companies)
        return updated

    def set_api_config(self, company_id: str, platform: str, fields: Mapping[str, Any]) -> Company:
        platform, supplied = validate_api_config(platform, fields)

        companies = self._companies.list()
        stored = self._require(companies, company_id)
        api_configs = {name: dict(bag) for name, bag in stored.api_configs.items()}
        api_configs[platform] = {**api_configs.get(platform, {}), **supplied}
        updated = dataclasses.replace(stored, api_configs=api_configs)
        self._companies.replace_all(updated if item.id == company_id else item for item in companies)
        return updated

    def delete(self, company_id: str) -> None:
        """Remove a company, releasing its employees and resetting a scope that points at it.

        Writes run in an order where every intermediate state is consistent:
        employees are released first, then the scope is reset, and only then
        is the company removed.
        """

        companies = self._companies.list()
        self._require(companies, company_id)

        employees = self._employees.list()
        released = [employee for employee in employees if employee.company_id == company_id]
        if released:
            self._employees.replace_all(
                dataclasses.replace(employee, company_id=None) if employee.company_id == company_id else employee
                for employee in employees
            )
            logger.info("released %d employee(s) from company %s", len(released), company_id)

        if self._scope.get() == ScopedTo(company_id):
            self._scope.reset()
            logger.info("scope reset to overview after deleting company %s", company_id)

        self._companies.replace_all(company for company in companies if company.id != company_id)
        logger.info("deleted company %s", company_id)
