"""Cursor Pagination Engine — filtered forward iteration over a key-value scan.

Invariants:
    - Returned items never exceed `limit`
    - Every round evaluates a full batch (at least SCAN_BATCH_SIZE items), so a
      sparse filter costs table_size / batch round trips, never one per item
    - When a round yields more matches than fit, the page is truncated and
      next_cursor is the key of the last item returned; the store resumes
      right after it, so the dropped matches come first on the next page
    - Otherwise next_cursor is the encoded LastEvaluatedKey of the final
      round; None iff the store reported no further results
    - At most MAX_SCAN_ROUNDS rounds per call; an under-filled page with a
      cursor is returned when the cap is hit
    - Malformed cursors raise BadCursorError before any store call

Design Decisions:
    - Filtering stays server-side (ScanFilter → FilterExpression); the loop only
      compensates for DynamoDB applying Limit before the filter
    - Item order is whatever the store yields; no sorting is attempted
"""

import logging
from typing import Any

from thryv.core.cursor import decode_cursor, encode_cursor
from thryv.core.pagination import CursorPage
from thryv.core.repository_protocols import KeyValueTable, ScanFilter

logger = logging.getLogger(__name__)

SCAN_BATCH_SIZE = 100
MAX_SCAN_ROUNDS = 10
KEY_ATTRIBUTES = ("id",)


def item_key(
    item: dict[str, Any], key_attributes: tuple[str, ...] = KEY_ATTRIBUTES,
) -> dict[str, Any]:
    """The table key of an item, usable as an ExclusiveStartKey."""
    return {name: item[name] for name in key_attributes}


async def paginate_scan(
    table: KeyValueTable,
    limit: int,
    cursor: str | None = None,
    scan_filter: ScanFilter | None = None,
    key_attributes: tuple[str, ...] = KEY_ATTRIBUTES,
) -> CursorPage[dict[str, Any]]:
    """Collect up to `limit` matching items starting after `cursor`."""
    start_key = decode_cursor(cursor)
    batch = max(limit, SCAN_BATCH_SIZE)
    items: list[dict[str, Any]] = []
    rounds = 0

    while rounds < MAX_SCAN_ROUNDS:
        page = await table.scan(
            limit=batch,
            exclusive_start_key=start_key,
            scan_filter=scan_filter,
        )
        rounds += 1
        items.extend(page.items)
        start_key = page.last_evaluated_key
        if len(items) > limit:
            items = items[:limit]
            start_key = item_key(items[-1], key_attributes)
            break
        if start_key is None or len(items) == limit:
            break

    logger.debug(
        f"Scan page collected {len(items)}/{limit} items in {rounds} round(s)",
    )
    return CursorPage(items=items, next_cursor=encode_cursor(start_key))
