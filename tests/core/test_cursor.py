"""Cursor codec and limit parsing.

Invariants:
    - decode(encode(key)) == key
    - Anything that is not base64(JSON object) raises BadCursorError
    - Limit policy: non-numeric → default, < 1 → error, > ceiling → ceiling
"""

import base64
import json
from decimal import Decimal

import pytest

from thryv.core.cursor import (
    DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT,
    decode_cursor, encode_cursor, parse_limit, parse_positive_int,
)
from thryv.core.errors import BadCursorError, EntityValidationError


def test_wire_format_is_base64_json():
    token = encode_cursor({"id": "abc"})
    assert json.loads(base64.b64decode(token)) == {"id": "abc"}


def test_decode_inverts_encode():
    key = {"id": "6f1c", "identification": "900123456"}
    assert decode_cursor(encode_cursor(key)) == key


def test_token_from_previous_service_decodes():
    # Buffer.from(JSON.stringify(key)).toString('base64')
    token = base64.b64encode(b'{"id":"0b7e"}').decode()
    assert decode_cursor(token) == {"id": "0b7e"}


def test_no_key_encodes_to_none():
    assert encode_cursor(None) is None
    assert encode_cursor({}) is None


def test_absent_cursor_decodes_to_none():
    assert decode_cursor(None) is None
    assert decode_cursor("") is None


def test_decimal_key_values_serialize():
    token = encode_cursor({"id": "a", "version": Decimal("3")})
    assert decode_cursor(token) == {"id": "a", "version": 3}


def test_invalid_base64_is_bad_cursor():
    with pytest.raises(BadCursorError) as exc:
        decode_cursor("not-base64!!")
    assert exc.value.code == "BAD_CURSOR"
    assert exc.value.http_status == 400


def test_invalid_json_is_bad_cursor():
    token = base64.b64encode(b"{not json").decode()
    with pytest.raises(BadCursorError):
        decode_cursor(token)


def test_invalid_utf8_is_bad_cursor():
    token = base64.b64encode(b"\xff\xfe\xfd").decode()
    with pytest.raises(BadCursorError):
        decode_cursor(token)


@pytest.mark.parametrize("payload", [b"[1, 2]", b'"id"', b"{}", b"null"])
def test_non_object_json_is_bad_cursor(payload):
    with pytest.raises(BadCursorError):
        decode_cursor(base64.b64encode(payload).decode())


@pytest.mark.parametrize("raw", [None, "", "abc", "1.5"])
def test_limit_defaults_when_absent_or_non_numeric(raw):
    assert parse_limit(raw) == DEFAULT_PAGE_LIMIT


def test_limit_numeric_string_parsed():
    assert parse_limit("25") == 25


@pytest.mark.parametrize("raw", ["0", "-3", 0])
def test_limit_below_one_rejected(raw):
    with pytest.raises(EntityValidationError) as exc:
        parse_limit(raw)
    assert exc.value.field == "limit"


def test_limit_clamped_to_ceiling():
    assert parse_limit("5000") == MAX_PAGE_LIMIT
    assert parse_limit("50", ceiling=20) == 20


def test_page_has_no_ceiling():
    assert parse_positive_int("900", 1, "page") == 900


def test_page_zero_rejected_with_page_field():
    with pytest.raises(EntityValidationError) as exc:
        parse_positive_int("0", 1, "page")
    assert exc.value.field == "page"
