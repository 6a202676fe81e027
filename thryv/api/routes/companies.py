"""Company Routes — CRUD + soft delete/restore over the key-value store.

Invariants:
    - Every route requires an authenticated Identity
    - List is cursor-paginated: `lastKey` in, `nextKey` out, both opaque
    - A `lastKey` that does not decode returns 400 BAD_CURSOR, never page one
    - DELETE is a soft delete (204); PATCH /{id}/restore is the only way back
"""

from fastapi import APIRouter, Depends, Query, status

from thryv.api.dependencies import get_company_service, get_current_identity
from thryv.config import get_settings
from thryv.core.cursor import parse_limit
from thryv.core.domain_types import CompanyId, CompanyStatus
from thryv.schemas.company import (
    CompanyCreate, CompanyPageResponse, CompanyResponse, CompanyUpdate,
)
from thryv.services.company_service import CompanyService

router = APIRouter(
    prefix="/api/v1/companies", tags=["companies"],
    dependencies=[Depends(get_current_identity)],
)


@router.post(
    "", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED,
)
async def create_company(
    body: CompanyCreate, service: CompanyService = Depends(get_company_service),
):
    """Create a new company."""
    return await service.create(body.model_dump())


@router.get("", response_model=CompanyPageResponse)
async def list_companies(
    limit: str | None = Query(None),
    last_key: str | None = Query(None, alias="lastKey"),
    status_filter: CompanyStatus | None = Query(None, alias="status"),
    service: CompanyService = Depends(get_company_service),
):
    """List active companies with cursor pagination."""
    settings = get_settings()
    page = await service.list(
        limit=parse_limit(limit, settings.default_page_limit, settings.max_page_limit),
        cursor=last_key,
        status=status_filter,
    )
    return CompanyPageResponse(
        companies=[CompanyResponse.model_validate(c) for c in page.items],
        count=page.count,
        next_key=page.next_cursor,
    )


@router.get("/identification/{identification}", response_model=CompanyResponse)
async def get_company_by_identification(
    identification: str, service: CompanyService = Depends(get_company_service),
):
    return await service.find_by_identification(identification)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: str, service: CompanyService = Depends(get_company_service),
):
    return await service.find_one(CompanyId(company_id))


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: str,
    body: CompanyUpdate,
    service: CompanyService = Depends(get_company_service),
):
    """Partial update — only fields present in the body are applied."""
    return await service.update(CompanyId(company_id), body.patch())


@router.delete("/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(
    company_id: str, service: CompanyService = Depends(get_company_service),
):
    await service.soft_delete(CompanyId(company_id))


@router.patch("/{company_id}/restore", response_model=CompanyResponse)
async def restore_company(
    company_id: str, service: CompanyService = Depends(get_company_service),
):
    return await service.restore(CompanyId(company_id))
