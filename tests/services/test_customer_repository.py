"""Customer Repository — integrity errors are classified, not all treated as duplicates."""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from thryv.core.errors import DuplicateIdentificationError
from thryv.infrastructure.customer_repository import CustomerRepository
from thryv.models.customer import Customer


def _customer(**overrides) -> Customer:
    fields = {
        "identification": "12345678901", "name": "John", "lastname": "Doe",
        "date_born": date(1990, 1, 15), "gender": "MALE", "status": "PENDING",
    }
    fields.update(overrides)
    return Customer(**fields)


async def test_unique_identification_violation_is_duplicate(test_db):
    repo = CustomerRepository(test_db)
    await repo.save(_customer())
    with pytest.raises(DuplicateIdentificationError):
        await repo.save(_customer(name="Other"))


async def test_not_null_violation_is_not_reported_as_duplicate(test_db):
    repo = CustomerRepository(test_db)
    with pytest.raises(IntegrityError):
        await repo.save(_customer(name=None))


async def test_session_usable_after_integrity_error(test_db):
    repo = CustomerRepository(test_db)
    with pytest.raises(IntegrityError):
        await repo.save(_customer(lastname=None))
    saved = await repo.save(_customer(identification="55555555555"))
    assert (await repo.get(saved.id)).identification == "55555555555"
