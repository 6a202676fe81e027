"""Boundary Protocols — contracts between core and the key-value store adapter.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Key-value IO accessed only through KeyValueTable
    - scan() has DynamoDB semantics: `limit` bounds the items EVALUATED, filters
      apply afterwards, last_evaluated_key is set when evaluation stopped early

Design Decisions:
    - Protocol over ABC: structural subtyping, the DynamoDB adapter and the
      in-memory test table share no base class
    - ScanFilter is store-neutral (equals / attribute-absent); the adapter
      translates it into a native filter expression
"""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class ScanFilter:
    """Conjunction of equality and attribute-absent conditions."""
    equals: dict[str, Any] = field(default_factory=dict)
    absent: tuple[str, ...] = ()

    def matches(self, item: dict[str, Any]) -> bool:
        if any(item.get(name) is not None for name in self.absent):
            return False
        return all(item.get(k) == v for k, v in self.equals.items())


@dataclass
class ScanPage:
    items: list[dict[str, Any]]
    last_evaluated_key: dict[str, Any] | None = None


class KeyValueTable(Protocol):
    """Record Store Adapter for a key-value table — implemented by infrastructure."""
    async def get_item(self, key: dict[str, Any]) -> dict[str, Any] | None: ...
    async def put_item(self, item: dict[str, Any]) -> None: ...
    async def scan(
        self,
        limit: int,
        exclusive_start_key: dict[str, Any] | None = None,
        scan_filter: ScanFilter | None = None,
    ) -> ScanPage: ...
    async def query_index(
        self, index_name: str, attribute: str, value: Any,
    ) -> list[dict[str, Any]]: ...
    async def delete_item(self, key: dict[str, Any]) -> None: ...
