"""Domain Types — verifies enum members and wire values."""

from uuid import uuid4

from thryv.core.domain_types import (
    CompanyId, CompanyStatus, CustomerId, CustomerStatus, Gender, LifecycleState,
)


def test_identity_types_wrap_store_keys():
    uid = uuid4()
    assert CustomerId(uid) == uid
    assert CompanyId(str(uid)) == str(uid)


def test_status_enums_share_wire_values():
    assert {s.value for s in CustomerStatus} == {"ACTIVE", "PENDING", "INACTIVE"}
    assert {s.value for s in CompanyStatus} == {"ACTIVE", "PENDING", "INACTIVE"}


def test_gender_has_three_values():
    assert set(Gender) == {Gender.MALE, Gender.FEMALE, Gender.OTHER}


def test_lifecycle_has_two_states():
    assert len(LifecycleState) == 2
