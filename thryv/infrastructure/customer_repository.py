"""Customer Repository — relational Record Store Adapter for the customers table.

Invariants:
    - Every lookup is active-only (deleted_at IS NULL) unless include_deleted=True;
      the filter is applied in one place (_scoped)
    - IntegrityError on the identification unique key → DuplicateIdentificationError
    - Any other IntegrityError (NOT NULL, etc.) is a programming error: rolled back
      and re-raised unchanged
    - Any other SQLAlchemyError → StoreUnavailableError, after rollback
    - list_page orders newest first (create_date DESC, id DESC as tie-breaker)
"""

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from thryv.core.domain_types import CustomerId
from thryv.core.errors import DuplicateIdentificationError, StoreUnavailableError
from thryv.models.customer import Customer

logger = logging.getLogger(__name__)

STORE_NAME = "postgresql"


def _scoped(stmt: Select, include_deleted: bool) -> Select:
    if include_deleted:
        return stmt
    return stmt.where(Customer.deleted_at.is_(None))


def _is_identification_conflict(e: IntegrityError) -> bool:
    """Unique violation on identification (asyncpg sqlstate 23505 or SQLite text)."""
    orig = e.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    text = str(orig)
    unique = code == "23505" or "UNIQUE constraint failed" in text
    return unique and "identification" in text


class CustomerRepository:
    """Thin async adapter over AsyncSession; no business rules."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, customer_id: CustomerId, include_deleted: bool = False) -> Customer | None:
        stmt = _scoped(select(Customer).where(Customer.id == customer_id), include_deleted)
        return await self._scalar(stmt, "get")

    async def get_by_identification(
        self, identification: str, include_deleted: bool = False,
    ) -> Customer | None:
        stmt = _scoped(
            select(Customer).where(Customer.identification == identification),
            include_deleted,
        )
        return await self._scalar(stmt, "get_by_identification")

    async def list_page(
        self, offset: int, limit: int, status: str | None = None,
    ) -> tuple[list[Customer], int]:
        """Active customers for one page plus the total active count."""
        base = _scoped(select(Customer), include_deleted=False)
        count_stmt = _scoped(select(func.count()).select_from(Customer), include_deleted=False)
        if status:
            base = base.where(Customer.status == status)
            count_stmt = count_stmt.where(Customer.status == status)
        page_stmt = (
            base.order_by(Customer.create_date.desc(), Customer.id.desc())
            .offset(offset)
            .limit(limit)
        )
        try:
            total = (await self._db.execute(count_stmt)).scalar_one()
            rows = list((await self._db.execute(page_stmt)).scalars().all())
        except SQLAlchemyError as e:
            raise await self._store_error(e, "list")
        return rows, total

    async def save(self, customer: Customer) -> Customer:
        """Insert or update, commit, and refresh server-side values."""
        identification = customer.identification
        self._db.add(customer)
        try:
            await self._db.commit()
            await self._db.refresh(customer)
        except IntegrityError as e:
            await self._db.rollback()
            if not _is_identification_conflict(e):
                logger.error(
                    f"Integrity violation on save: {e.orig}",
                    extra={"entity": "Customer", "store": STORE_NAME, "operation": "save"},
                )
                raise
            logger.warning(
                f"Identification conflict on save: {e.orig}",
                extra={"entity": "Customer", "store": STORE_NAME},
            )
            raise DuplicateIdentificationError("Customer", identification) from e
        except SQLAlchemyError as e:
            raise await self._store_error(e, "save")
        return customer

    async def _scalar(self, stmt: Select, operation: str) -> Customer | None:
        try:
            result = await self._db.execute(stmt)
        except SQLAlchemyError as e:
            raise await self._store_error(e, operation)
        return result.scalar_one_or_none()

    async def _store_error(self, e: SQLAlchemyError, operation: str) -> StoreUnavailableError:
        await self._db.rollback()
        logger.error(
            f"Customer {operation} failed: {e}",
            extra={"store": STORE_NAME, "operation": operation},
        )
        return StoreUnavailableError("Database operation failed", STORE_NAME, operation)
