"""Customer Schemas — create/patch payloads and offset-paginated responses."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from thryv.core.domain_types import CustomerStatus, Gender
from thryv.schemas import CamelModel


class CustomerCreate(CamelModel):
    """Creation payload — status defaults to PENDING in the service when omitted."""
    identification: str = Field(max_length=50)
    name: str = Field(max_length=100)
    lastname: str = Field(max_length=100)
    date_born: date
    gender: Gender
    status: CustomerStatus | None = None


class CustomerUpdate(CamelModel):
    """Partial patch — only fields present in the request body are applied."""
    identification: str | None = Field(None, max_length=50)
    name: str | None = Field(None, max_length=100)
    lastname: str | None = Field(None, max_length=100)
    date_born: date | None = None
    gender: Gender | None = None
    status: CustomerStatus | None = None

    def patch(self) -> dict:
        """Fields explicitly sent by the client, explicit nulls included."""
        return self.model_dump(exclude_unset=True)


class CustomerResponse(CamelModel):
    id: UUID
    identification: str
    name: str
    lastname: str
    date_born: date
    gender: Gender
    status: CustomerStatus
    create_date: datetime
    update_date: datetime
    deleted_at: datetime | None = None


class CustomerPageResponse(CamelModel):
    customers: list[CustomerResponse]
    total: int
    page: int
    total_pages: int
