from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from orgdirectory.application import get_directory_service
from orgdirectory.routes.employees import scope_from_param

router = APIRouter(prefix="/scope", tags=["scope"])


def _serialise(company_id: str | None) -> dict:
    return {"company_id": company_id, "overview": company_id is None}


@router.get("")
async def get_scope() -> dict:
    service = get_directory_service()
    return _serialise(service.scope.company_id)


@router.put("")
async def set_scope(payload: dict[str, Any]) -> dict:
    # null, missing, blank and "overview" all select the overview
    company_id = payload.get("company_id")
    service = get_directory_service()
    service.scope.set(scope_from_param(str(company_id)) if company_id else None)
    return _serialise(service.scope.company_id)
