from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from orgdirectory.application import get_directory_service

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("")
async def list_companies() -> dict:
    service = get_directory_service()
    return {"items": [company.to_dict() for company in service.companies.list()]}


@router.post("")
async def create_company(payload: dict[str, Any]) -> dict:
    service = get_directory_service()
    company = service.companies.create(payload)
    return company.to_dict()


@router.get("/{company_id}")
async def get_company(company_id: str) -> dict:
    service = get_directory_service()
    company = service.companies.get_by_id(company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="company not found")
    return company.to_dict()


@router.put("/{company_id}")
async def update_company(company_id: str, payload: dict[str, Any]) -> dict:
    service = get_directory_service()
    company = service.companies.update({**payload, "id": company_id})
    return company.to_dict()


@router.put("/{company_id}/api-configs/{platform}")
async def set_company_api_config(company_id: str, platform: str, payload: dict[str, Any]) -> dict:
    service = get_directory_service()
    company = service.companies.set_api_config(company_id, platform, payload)
    return company.to_dict()


@router.delete("/{company_id}")
async def delete_company(company_id: str) -> dict:
    service = get_directory_service()
    service.companies.delete(company_id)
    return {"deleted": company_id, "active_company_id": service.scope.company_id}
