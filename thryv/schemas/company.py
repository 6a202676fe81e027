"""Company Schemas — create/patch payloads and cursor-paginated responses."""

from datetime import datetime

from pydantic import Field

from thryv.core.domain_types import CompanyStatus
from thryv.schemas import CamelModel


class CompanyCreate(CamelModel):
    identification: str = Field(max_length=50)
    name: str = Field(max_length=200)
    alias: str | None = Field(None, max_length=200)
    address: str | None = Field(None, max_length=500)
    status: CompanyStatus | None = None


class CompanyUpdate(CamelModel):
    """Partial patch — alias/address may be cleared with an explicit null."""
    identification: str | None = Field(None, max_length=50)
    name: str | None = Field(None, max_length=200)
    alias: str | None = Field(None, max_length=200)
    address: str | None = Field(None, max_length=500)
    status: CompanyStatus | None = None

    def patch(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CompanyResponse(CamelModel):
    id: str
    identification: str
    name: str
    alias: str | None = None
    address: str | None = None
    status: CompanyStatus
    create_date: datetime
    update_date: datetime
    deleted_at: datetime | None = None


class CompanyPageResponse(CamelModel):
    """One cursor page. next_key is opaque; absent when the scan is exhausted."""
    companies: list[CompanyResponse]
    count: int
    next_key: str | None = None
