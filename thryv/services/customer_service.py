"""Customer Service — validate-then-persist operations on the relational store.

Invariants:
    - create/update validate domain invariants BEFORE any write (nothing persisted on failure)
    - find_one, find_by_identification, update, soft_delete see ACTIVE rows only
    - restore is the only operation that can locate a DELETED row
    - identification stays unique across active and deleted rows
    - list is offset-paginated, newest first; page/limit < 1 rejected
"""

import logging
from typing import Any

from thryv.core.domain_types import CustomerId, CustomerStatus
from thryv.core.errors import (
    DuplicateIdentificationError, EntityValidationError, ResourceNotFoundError,
)
from thryv.core.lifecycle import mark_deleted, mark_restored
from thryv.core.pagination import OffsetPage, offset_for
from thryv.core.validation import validate_customer
from thryv.infrastructure.customer_repository import CustomerRepository
from thryv.models.customer import Customer

logger = logging.getLogger(__name__)

ENTITY = "Customer"
NON_NULLABLE_FIELDS = ("date_born", "gender", "status")


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


class CustomerService:
    def __init__(self, repository: CustomerRepository):
        self._repo = repository

    async def create(self, fields: dict[str, Any]) -> Customer:
        cleaned = validate_customer(fields)
        await self._ensure_identification_free(cleaned["identification"])
        customer = Customer(
            identification=cleaned["identification"],
            name=cleaned["name"],
            lastname=cleaned["lastname"],
            date_born=cleaned["date_born"],
            gender=_enum_value(cleaned["gender"]),
            status=_enum_value(cleaned.get("status") or CustomerStatus.PENDING),
        )
        customer = await self._repo.save(customer)
        logger.info(
            "Customer created", extra={"entity": ENTITY, "entity_id": str(customer.id)},
        )
        return customer

    async def list(
        self, page: int = 1, limit: int = 10, status: CustomerStatus | None = None,
    ) -> OffsetPage[Customer]:
        if page < 1:
            raise EntityValidationError("page must be at least 1", field="page")
        if limit < 1:
            raise EntityValidationError("limit must be at least 1", field="limit")
        rows, total = await self._repo.list_page(
            offset_for(page, limit), limit, _enum_value(status) if status else None,
        )
        return OffsetPage(items=rows, total=total, page=page, limit=limit)

    async def find_one(self, customer_id: CustomerId) -> Customer:
        customer = await self._repo.get(customer_id)
        if customer is None:
            raise ResourceNotFoundError(ENTITY, str(customer_id))
        return customer

    async def find_by_identification(self, identification: str) -> Customer:
        customer = await self._repo.get_by_identification(identification)
        if customer is None:
            raise ResourceNotFoundError(ENTITY, identification)
        return customer

    async def update(self, customer_id: CustomerId, patch: dict[str, Any]) -> Customer:
        """Apply a partial patch; untouched fields are neither changed nor re-validated."""
        customer = await self.find_one(customer_id)
        for name in NON_NULLABLE_FIELDS:
            if name in patch and patch[name] is None:
                raise EntityValidationError(f"{name} cannot be null", field=name)
        cleaned = validate_customer(patch, partial=True)
        new_identification = cleaned.get("identification")
        if new_identification and new_identification != customer.identification:
            await self._ensure_identification_free(new_identification)
        for name, value in cleaned.items():
            setattr(customer, name, _enum_value(value))
        return await self._repo.save(customer)

    async def soft_delete(self, customer_id: CustomerId) -> None:
        customer = await self.find_one(customer_id)
        mark_deleted(customer)
        await self._repo.save(customer)
        logger.info(
            "Customer soft-deleted", extra={"entity": ENTITY, "entity_id": str(customer_id)},
        )

    async def restore(self, customer_id: CustomerId) -> Customer:
        customer = await self._repo.get(customer_id, include_deleted=True)
        if customer is None:
            raise ResourceNotFoundError(ENTITY, str(customer_id))
        mark_restored(customer)
        customer = await self._repo.save(customer)
        logger.info(
            "Customer restored", extra={"entity": ENTITY, "entity_id": str(customer_id)},
        )
        return customer

    async def _ensure_identification_free(self, identification: str) -> None:
        existing = await self._repo.get_by_identification(
            identification, include_deleted=True,
        )
        if existing is not None:
            raise DuplicateIdentificationError(ENTITY, identification)
