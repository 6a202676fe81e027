"""Soft-delete lifecycle — state derivation and transitions on plain objects."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from thryv.core.domain_types import LifecycleState
from thryv.core.lifecycle import (
    is_active, lifecycle_state, mark_deleted, mark_restored,
)


@dataclass
class _Row:
    deleted_at: datetime | None = None


def test_null_timestamp_is_active():
    assert lifecycle_state(None) is LifecycleState.ACTIVE


def test_timestamp_is_deleted():
    assert lifecycle_state(datetime.now(timezone.utc)) is LifecycleState.DELETED


def test_new_entity_starts_active():
    assert is_active(_Row())


def test_mark_deleted_sets_timestamp():
    row = _Row()
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert mark_deleted(row, now) is LifecycleState.DELETED
    assert row.deleted_at == now
    assert not is_active(row)


def test_mark_deleted_twice_overwrites_timestamp():
    row = _Row()
    first = datetime(2026, 1, 1, tzinfo=timezone.utc)
    mark_deleted(row, first)
    mark_deleted(row, first + timedelta(hours=1))
    assert row.deleted_at == first + timedelta(hours=1)


def test_mark_restored_clears_timestamp():
    row = _Row(deleted_at=datetime.now(timezone.utc))
    assert mark_restored(row) is LifecycleState.ACTIVE
    assert row.deleted_at is None


def test_restore_on_active_is_noop():
    row = _Row()
    mark_restored(row)
    assert is_active(row)


def test_states_cycle_indefinitely():
    row = _Row()
    for _ in range(3):
        mark_deleted(row)
        assert not is_active(row)
        mark_restored(row)
        assert is_active(row)
