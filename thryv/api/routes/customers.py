"""Customer Routes — CRUD + soft delete/restore over the relational store.

Invariants:
    - Every route requires an authenticated Identity
    - page/limit parsed with the shared policy: non-numeric → default,
      < 1 → 400, limit above the configured ceiling → ceiling
    - DELETE is a soft delete (204); PATCH /{id}/restore is the only way back
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from thryv.api.dependencies import get_current_identity, get_customer_service
from thryv.config import get_settings
from thryv.core.cursor import parse_limit, parse_positive_int
from thryv.core.domain_types import CustomerId, CustomerStatus
from thryv.schemas.customer import (
    CustomerCreate, CustomerPageResponse, CustomerResponse, CustomerUpdate,
)
from thryv.services.customer_service import CustomerService

router = APIRouter(
    prefix="/api/v1/customers", tags=["customers"],
    dependencies=[Depends(get_current_identity)],
)


@router.post(
    "", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    body: CustomerCreate, service: CustomerService = Depends(get_customer_service),
):
    """Create a new customer."""
    return await service.create(body.model_dump())


@router.get("", response_model=CustomerPageResponse)
async def list_customers(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    status_filter: CustomerStatus | None = Query(None, alias="status"),
    service: CustomerService = Depends(get_customer_service),
):
    """List active customers, newest first, with offset pagination."""
    settings = get_settings()
    result = await service.list(
        page=parse_positive_int(page, 1, "page"),
        limit=parse_limit(limit, settings.default_page_limit, settings.max_page_limit),
        status=status_filter,
    )
    return CustomerPageResponse(
        customers=[CustomerResponse.model_validate(c) for c in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("/identification/{identification}", response_model=CustomerResponse)
async def get_customer_by_identification(
    identification: str, service: CustomerService = Depends(get_customer_service),
):
    return await service.find_by_identification(identification)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: UUID, service: CustomerService = Depends(get_customer_service),
):
    return await service.find_one(CustomerId(customer_id))


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: UUID,
    body: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    """Partial update — only fields present in the body are applied."""
    return await service.update(CustomerId(customer_id), body.patch())


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: UUID, service: CustomerService = Depends(get_customer_service),
):
    """Soft delete — the row stays and can be restored."""
    await service.soft_delete(CustomerId(customer_id))


@router.patch("/{customer_id}/restore", response_model=CustomerResponse)
async def restore_customer(
    customer_id: UUID, service: CustomerService = Depends(get_customer_service),
):
    return await service.restore(CustomerId(customer_id))
