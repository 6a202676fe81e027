"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CustomerId wraps the relational UUID key, CompanyId the key-value string key;
      services and repositories take these, never a bare UUID or str
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and DynamoDB strings without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CustomerId = NewType("CustomerId", UUID)
CompanyId = NewType("CompanyId", str)


# ─── Enums ───────────────────────────────────────────────────────

class CustomerStatus(str, Enum):
    """Customer business status — maps to DB `status` column."""
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    INACTIVE = "INACTIVE"


class CompanyStatus(str, Enum):
    """Company business status — stored as the `status` item attribute."""
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    INACTIVE = "INACTIVE"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class LifecycleState(str, Enum):
    """Soft-delete lifecycle. Independent of the business status."""
    ACTIVE = "active"
    DELETED = "deleted"
