"""Entity Validation — field-level domain invariants checked before persistence.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Checks run in a fixed order: identification → name → lastname
    - First violated invariant wins (fail fast), raised as EntityValidationError(field)
    - Partial updates validate only the fields they carry

Design Decisions:
    - Raise instead of returning error dicts: services call these inline and
      the global ThryvError handler renders the 400 response
    - Fields passed as a mapping so create (all fields) and patch (touched
      fields) share one code path
"""

import re
from typing import Any, Mapping

from thryv.core.errors import EntityValidationError

IDENTIFICATION_PATTERN = re.compile(r"^[A-Za-z0-9-]{5,20}$")

CUSTOMER_CHECK_ORDER = ("identification", "name", "lastname")
COMPANY_CHECK_ORDER = ("identification", "name")


def validate_identification(value: Any) -> str:
    """Rule 1: identification is non-empty and matches IDENTIFICATION_PATTERN."""
    if value is None:
        raise EntityValidationError(
            "identification is required", field="identification",
        )
    if not isinstance(value, str) or not value.strip():
        raise EntityValidationError(
            "identification cannot be empty", field="identification",
        )
    value = value.strip()
    if not IDENTIFICATION_PATTERN.match(value):
        raise EntityValidationError(
            "identification must be 5-20 letters, digits or hyphens",
            field="identification",
        )
    return value


def validate_present(value: Any, field: str) -> str:
    """Rule 2/3: a name-like field is a non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise EntityValidationError(f"{field} cannot be empty", field=field)
    return value.strip()


def _run_checks(
    fields: Mapping[str, Any], order: tuple[str, ...], partial: bool,
) -> dict[str, Any]:
    cleaned = dict(fields)
    for name in order:
        if name not in fields and partial:
            continue
        value = fields.get(name)
        if name == "identification":
            cleaned[name] = validate_identification(value)
        else:
            cleaned[name] = validate_present(value, name)
    return cleaned


def validate_customer(
    fields: Mapping[str, Any], partial: bool = False,
) -> dict[str, Any]:
    """Validate customer fields; returns a normalized copy.

    partial=True checks only the keys present in `fields` (update patches).
    """
    return _run_checks(fields, CUSTOMER_CHECK_ORDER, partial)


def validate_company(
    fields: Mapping[str, Any], partial: bool = False,
) -> dict[str, Any]:
    """Validate company fields; see validate_customer."""
    return _run_checks(fields, COMPANY_CHECK_ORDER, partial)
