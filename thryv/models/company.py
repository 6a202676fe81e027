"""Company Item — key-value record mapped to/from DynamoDB attribute dicts.

Invariants:
    - id (UUID string) is the partition key; identification feeds identification-index
    - Attribute names are camelCase (createDate, updateDate, deletedAt) to match
      the provisioned table and items written by earlier service versions
    - deletedAt absent means ACTIVE; it is removed (not nulled) on restore
    - Timestamps stored as ISO-8601 UTC strings
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from thryv.core.domain_types import CompanyStatus, LifecycleState
from thryv.core.lifecycle import lifecycle_state, utc_now


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@dataclass
class Company:
    identification: str
    name: str
    alias: str | None = None
    address: str | None = None
    status: CompanyStatus = CompanyStatus.PENDING
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    create_date: datetime = field(default_factory=utc_now)
    update_date: datetime = field(default_factory=utc_now)
    deleted_at: datetime | None = None

    @property
    def lifecycle(self) -> LifecycleState:
        return lifecycle_state(self.deleted_at)

    def to_item(self) -> dict[str, Any]:
        item: dict[str, Any] = {
            "id": self.id,
            "identification": self.identification,
            "name": self.name,
            "status": CompanyStatus(self.status).value,
            "createDate": self.create_date.isoformat(),
            "updateDate": self.update_date.isoformat(),
        }
        # DynamoDB rejects empty strings on index keys; optional attrs are omitted
        if self.alias is not None:
            item["alias"] = self.alias
        if self.address is not None:
            item["address"] = self.address
        if self.deleted_at is not None:
            item["deletedAt"] = self.deleted_at.isoformat()
        return item

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "Company":
        return cls(
            id=item["id"],
            identification=item["identification"],
            name=item["name"],
            alias=item.get("alias"),
            address=item.get("address"),
            status=CompanyStatus(item.get("status", CompanyStatus.PENDING.value)),
            create_date=_parse_ts(item.get("createDate")) or utc_now(),
            update_date=_parse_ts(item.get("updateDate")) or utc_now(),
            deleted_at=_parse_ts(item.get("deletedAt")),
        )
