"""Company Service — validate-then-persist operations on the key-value store.

Invariants:
    - Same lifecycle as Customer: reads/updates/deletes see ACTIVE items only,
      restore finds an item regardless of deletedAt
    - identification unique across active and deleted items (checked via the
      identification index before every write that sets it)
    - list is cursor-paginated; the active-only and status filters are pushed
      down into the scan, so a cursor is bound to its status filter
    - Writes are full-item puts: last writer wins, no conditional checks
"""

import logging
from typing import Any

from thryv.core.cursor import DEFAULT_PAGE_LIMIT
from thryv.core.domain_types import CompanyId, CompanyStatus
from thryv.core.errors import (
    DuplicateIdentificationError, EntityValidationError, ResourceNotFoundError,
)
from thryv.core.lifecycle import is_active, mark_deleted, mark_restored, utc_now
from thryv.core.pagination import CursorPage
from thryv.core.repository_protocols import KeyValueTable, ScanFilter
from thryv.core.validation import validate_company
from thryv.models.company import Company
from thryv.services.cursor_pagination import paginate_scan

logger = logging.getLogger(__name__)

ENTITY = "Company"
IDENTIFICATION_INDEX = "identification-index"


def active_filter(status: CompanyStatus | None = None) -> ScanFilter:
    equals = {"status": CompanyStatus(status).value} if status else {}
    return ScanFilter(equals=equals, absent=("deletedAt",))


class CompanyService:
    def __init__(
        self, table: KeyValueTable, identification_index: str = IDENTIFICATION_INDEX,
    ):
        self._table = table
        self._index = identification_index

    async def create(self, fields: dict[str, Any]) -> Company:
        cleaned = validate_company(fields)
        await self._ensure_identification_free(cleaned["identification"])
        company = Company(
            identification=cleaned["identification"],
            name=cleaned["name"],
            alias=cleaned.get("alias"),
            address=cleaned.get("address"),
            status=CompanyStatus(cleaned.get("status") or CompanyStatus.PENDING),
        )
        await self._table.put_item(company.to_item())
        logger.info("Company created", extra={"entity": ENTITY, "entity_id": company.id})
        return company

    async def list(
        self,
        limit: int = DEFAULT_PAGE_LIMIT,
        cursor: str | None = None,
        status: CompanyStatus | None = None,
    ) -> CursorPage[Company]:
        if limit < 1:
            raise EntityValidationError("limit must be at least 1", field="limit")
        page = await paginate_scan(
            self._table, limit, cursor, active_filter(status),
        )
        return CursorPage(
            items=[Company.from_item(item) for item in page.items],
            next_cursor=page.next_cursor,
        )

    async def find_one(self, company_id: CompanyId) -> Company:
        company = await self._get(company_id)
        if company is None or not is_active(company):
            raise ResourceNotFoundError(ENTITY, company_id)
        return company

    async def find_by_identification(self, identification: str) -> Company:
        for company in await self._by_identification(identification):
            if is_active(company):
                return company
        raise ResourceNotFoundError(ENTITY, identification)

    async def update(self, company_id: CompanyId, patch: dict[str, Any]) -> Company:
        """Apply a partial patch; alias/address accept explicit null to clear."""
        company = await self.find_one(company_id)
        if "status" in patch and patch["status"] is None:
            raise EntityValidationError("status cannot be null", field="status")
        cleaned = validate_company(patch, partial=True)
        new_identification = cleaned.get("identification")
        if new_identification and new_identification != company.identification:
            await self._ensure_identification_free(new_identification)
        for name, value in cleaned.items():
            if name == "status":
                value = CompanyStatus(value)
            setattr(company, name, value)
        company.update_date = utc_now()
        await self._table.put_item(company.to_item())
        return company

    async def soft_delete(self, company_id: CompanyId) -> None:
        company = await self.find_one(company_id)
        now = utc_now()
        mark_deleted(company, now)
        company.update_date = now
        await self._table.put_item(company.to_item())
        logger.info("Company soft-deleted", extra={"entity": ENTITY, "entity_id": company_id})

    async def restore(self, company_id: CompanyId) -> Company:
        company = await self._get(company_id)
        if company is None:
            raise ResourceNotFoundError(ENTITY, company_id)
        mark_restored(company)
        company.update_date = utc_now()
        await self._table.put_item(company.to_item())
        logger.info("Company restored", extra={"entity": ENTITY, "entity_id": company_id})
        return company

    async def _get(self, company_id: CompanyId) -> Company | None:
        item = await self._table.get_item({"id": company_id})
        return Company.from_item(item) if item else None

    async def _by_identification(self, identification: str) -> "list[Company]":
        items = await self._table.query_index(
            self._index, "identification", identification,
        )
        return [Company.from_item(item) for item in items]

    async def _ensure_identification_free(self, identification: str) -> None:
        if await self._by_identification(identification):
            raise DuplicateIdentificationError(ENTITY, identification)
