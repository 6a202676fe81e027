"""Cursor Pagination Engine — completeness, bounds, under-fill refill, bad cursors.

Invariants:
    - Following next_cursor until None yields every matching item exactly once
    - len(items) <= limit on every page
    - Each round scans a full batch; rounds per call are capped
    - A malformed cursor raises before any scan happens
"""

import pytest

from thryv.core.cursor import decode_cursor, encode_cursor
from thryv.core.errors import BadCursorError
from thryv.core.repository_protocols import ScanFilter
from thryv.services.cursor_pagination import (
    MAX_SCAN_ROUNDS, SCAN_BATCH_SIZE, paginate_scan,
)

from tests.fakes import InMemoryTable


def _table(n: int) -> InMemoryTable:
    items = []
    for i in range(n):
        item = {
            "id": f"id-{i:03d}",
            "status": "ACTIVE" if i % 4 == 0 else "PENDING",
        }
        if i % 7 == 3:
            item["deletedAt"] = "2026-01-01T00:00:00+00:00"
        items.append(item)
    return InMemoryTable(items)


async def _traverse(table, limit, scan_filter=None):
    seen, cursor, pages = [], None, 0
    while True:
        page = await paginate_scan(table, limit, cursor, scan_filter)
        assert len(page.items) <= limit
        seen.extend(item["id"] for item in page.items)
        pages += 1
        cursor = page.next_cursor
        if cursor is None:
            return seen, pages


@pytest.mark.parametrize("limit", [1, 3, 10, 50])
async def test_unfiltered_traversal_is_complete(limit):
    table = _table(23)
    seen, _ = await _traverse(table, limit)
    assert len(seen) == len(set(seen))
    assert set(seen) == set(table.items)


@pytest.mark.parametrize("limit", [1, 2, 5])
async def test_filtered_traversal_matches_dataset(limit):
    table = _table(40)
    scan_filter = ScanFilter(equals={"status": "ACTIVE"}, absent=("deletedAt",))
    expected = {k for k, v in table.items.items() if scan_filter.matches(v)}

    seen, _ = await _traverse(table, limit, scan_filter)
    assert len(seen) == len(set(seen))
    assert set(seen) == expected


def _sparse_table(n: int, active: set[int]) -> InMemoryTable:
    return InMemoryTable([
        {"id": f"id-{i:04d}", "status": "ACTIVE" if i in active else "PENDING"}
        for i in range(n)
    ])


async def test_every_round_requests_a_full_batch():
    table = _table(40)
    await paginate_scan(table, 3, None, ScanFilter(equals={"status": "ACTIVE"}))
    assert [call["limit"] for call in table.scan_calls] == [SCAN_BATCH_SIZE]


async def test_sparse_filter_scan_calls_are_bounded():
    table = _sparse_table(2000, active=set(range(9)))
    page = await paginate_scan(table, 10, None, ScanFilter(equals={"status": "ACTIVE"}))
    assert len(page.items) == 9
    assert len(table.scan_calls) <= MAX_SCAN_ROUNDS
    assert all(call["limit"] == SCAN_BATCH_SIZE for call in table.scan_calls)
    assert page.next_cursor is not None


async def test_sparse_traversal_reaches_late_matches():
    table = _sparse_table(2000, active={3, 1999})
    seen, pages = await _traverse(table, 10, ScanFilter(equals={"status": "ACTIVE"}))
    assert seen == ["id-0003", "id-1999"]
    assert pages > 1


async def test_overflow_truncates_and_resumes_after_last_returned():
    table = _table(40)
    scan_filter = ScanFilter(equals={"status": "ACTIVE"})
    first = await paginate_scan(table, 3, None, scan_filter)
    assert [i["id"] for i in first.items] == ["id-000", "id-004", "id-008"]
    assert decode_cursor(first.next_cursor) == {"id": "id-008"}

    second = await paginate_scan(table, 3, first.next_cursor, scan_filter)
    assert [i["id"] for i in second.items] == ["id-012", "id-016", "id-020"]


async def test_page_ending_on_last_key_leaves_trailing_empty_page():
    table = _table(SCAN_BATCH_SIZE)
    first = await paginate_scan(table, SCAN_BATCH_SIZE)
    assert len(first.items) == SCAN_BATCH_SIZE
    assert first.next_cursor is not None

    last = await paginate_scan(table, SCAN_BATCH_SIZE, first.next_cursor)
    assert last.items == []
    assert last.next_cursor is None


async def test_exhausted_scan_has_no_cursor():
    page = await paginate_scan(_table(5), 10)
    assert len(page.items) == 5
    assert page.next_cursor is None


async def test_empty_table():
    page = await paginate_scan(InMemoryTable(), 10)
    assert page.items == []
    assert page.next_cursor is None


async def test_cursor_resumes_after_key():
    table = _table(6)
    page = await paginate_scan(table, 10, encode_cursor({"id": "id-002"}))
    assert [item["id"] for item in page.items] == ["id-003", "id-004", "id-005"]


async def test_bad_cursor_raises_without_scanning():
    table = _table(5)
    with pytest.raises(BadCursorError):
        await paginate_scan(table, 10, "not-base64!!")
    assert table.scan_calls == []
