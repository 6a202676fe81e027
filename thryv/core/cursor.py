"""Cursor Codec — opaque continuation tokens and page-size parsing.

Invariants:
    - Wire format is base64(JSON(lastEvaluatedKey)); decode is the exact inverse
    - A token that is not valid base64, UTF-8, JSON, or a JSON object raises
      BadCursorError — never treated as "start from the beginning"
    - parse_limit: absent/non-numeric → default; < 1 → EntityValidationError;
      above ceiling → ceiling

Design Decisions:
    - Standard (not urlsafe) base64 with strict validation: tokens produced by
      the previous service version keep decoding
    - Keys are JSON-encoded with sort_keys so equal keys yield equal tokens
"""

import base64
import binascii
import json
from decimal import Decimal
from typing import Any

from thryv.core.errors import BadCursorError, EntityValidationError

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


def _json_default(value: Any) -> Any:
    # DynamoDB numeric key attributes come back as Decimal
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    raise TypeError(f"Unserializable cursor key value: {type(value).__name__}")


def encode_cursor(last_evaluated_key: dict[str, Any] | None) -> str | None:
    """Encode a store key into an opaque token. None stays None."""
    if not last_evaluated_key:
        return None
    payload = json.dumps(
        last_evaluated_key, sort_keys=True, default=_json_default,
    )
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_cursor(token: str | None) -> dict[str, Any] | None:
    """Decode an opaque token back into the store's exclusive start key."""
    if token is None or token == "":
        return None
    try:
        raw = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError) as e:
        raise BadCursorError("not valid base64") from e
    try:
        key = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise BadCursorError("not valid UTF-8") from e
    except json.JSONDecodeError as e:
        raise BadCursorError("not valid JSON") from e
    if not isinstance(key, dict) or not key:
        raise BadCursorError("expected a non-empty JSON object")
    return key


def parse_positive_int(
    raw: Any, default: int, field: str, ceiling: int | None = None,
) -> int:
    """Parse a 1-based integer query value with the shared policy."""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    if value < 1:
        raise EntityValidationError(f"{field} must be at least 1", field=field)
    if ceiling is not None and value > ceiling:
        return ceiling
    return value


def parse_limit(
    raw: Any, default: int = DEFAULT_PAGE_LIMIT, ceiling: int = MAX_PAGE_LIMIT,
) -> int:
    return parse_positive_int(raw, default, "limit", ceiling)
