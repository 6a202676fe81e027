"""Customer ORM — relational record with soft-delete timestamp.

Invariants:
    - id is UUID primary key (client-side default)
    - identification is unique across active AND deleted rows
    - deleted_at NULL means ACTIVE; rows are never hard-deleted via the API
    - create_date set once on insert; update_date refreshed on every UPDATE

Design Decisions:
    - status/gender stored as strings holding the str-Enum values: portable
      across PostgreSQL and the SQLite test database
    - Index on (deleted_at, create_date) serves the active-only, newest-first list
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Date, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from thryv.core.domain_types import CustomerStatus, LifecycleState
from thryv.core.lifecycle import lifecycle_state
from thryv.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Customer(Base):
    """Customer row — soft-deletable via deleted_at."""
    __tablename__ = "customers"
    __table_args__ = (
        Index("ix_customers_deleted_at_create_date", "deleted_at", "create_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    identification: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[str] = mapped_column(String(100), nullable=False)
    date_born: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CustomerStatus.PENDING.value,
    )
    create_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    update_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    @property
    def lifecycle(self) -> LifecycleState:
        return lifecycle_state(self.deleted_at)
