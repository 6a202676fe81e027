"""Soft-Delete Lifecycle — the ACTIVE/DELETED state machine for stored entities.

Invariants:
    - State is derived from deleted_at in exactly one place (lifecycle_state)
    - New entities start ACTIVE; neither state is terminal
    - mark_deleted overwrites an existing timestamp without error
    - mark_restored clears deleted_at and is a no-op on an ACTIVE entity
    - Ordinary reads filter to ACTIVE; only restore may locate a DELETED entity
      (enforced by the repositories/services through is_active)

Design Decisions:
    - Works on any object with a mutable `deleted_at` attribute (SoftDeletable),
      so the SQLAlchemy Customer row and the Company item model share it
"""

from datetime import datetime, timezone
from typing import Protocol

from thryv.core.domain_types import LifecycleState


class SoftDeletable(Protocol):
    deleted_at: datetime | None


def lifecycle_state(deleted_at: datetime | None) -> LifecycleState:
    """Single source of truth for mapping the nullable timestamp to a state."""
    if deleted_at is None:
        return LifecycleState.ACTIVE
    return LifecycleState.DELETED


def is_active(entity: SoftDeletable) -> bool:
    return lifecycle_state(entity.deleted_at) is LifecycleState.ACTIVE


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def mark_deleted(entity: SoftDeletable, now: datetime | None = None) -> LifecycleState:
    """ACTIVE → DELETED (or DELETED → DELETED with a fresh timestamp)."""
    entity.deleted_at = now or utc_now()
    return LifecycleState.DELETED


def mark_restored(entity: SoftDeletable) -> LifecycleState:
    """DELETED → ACTIVE."""
    entity.deleted_at = None
    return LifecycleState.ACTIVE
