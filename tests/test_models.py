from __future__ import annotations

import dataclasses

import pytest

from apprunner_domains.domain.models import (
    ABSENT,
    Absent,
    Association,
    AssociationStatus,
    ValidationRecord,
)
from apprunner_domains.errors import (
    ErrorKind,
    NotFoundError,
    ProbeError,
    RemoteError,
    TerminalFailureError,
    is_kind,
)


def _association(**overrides) -> Association:
    values = {
        "domain_name": "example.com",
        "service_arn": "svc-1",
        "status": "active",
        "dns_target": "abc.awsapprunner.com",
        "enable_www_subdomain": True,
        "certificate_validation_records": frozenset(
            {
                ValidationRecord("_b.example.com.", "CNAME", "_b.acm.aws.", "SUCCESS"),
                ValidationRecord("_a.example.com.", "CNAME", "_a.acm.aws.", "PENDING_VALIDATION"),
            }
        ),
    }
    values.update(overrides)
    return Association(**values)


def test_absent_is_a_singleton_distinct_from_statuses() -> None:
    assert Absent() is ABSENT
    assert not ABSENT
    assert repr(ABSENT) == "ABSENT"
    assert all(ABSENT != status.value for status in AssociationStatus)


def test_association_id_uses_identity_codec() -> None:
    assert _association().id == "example.com,svc-1"


def test_association_identity_is_immutable() -> None:
    association = _association()

    with pytest.raises(dataclasses.FrozenInstanceError):
        association.domain_name = "other.example.com"  # type: ignore[misc]


def test_validation_records_compare_as_a_set() -> None:
    first = _association()
    records = sorted(first.certificate_validation_records, key=lambda r: r.name, reverse=True)
    second = _association(certificate_validation_records=frozenset(records))

    assert first == second


def test_to_state_is_deterministic() -> None:
    state = _association().to_state()

    assert state["id"] == "example.com,svc-1"
    assert state["status"] == "active"
    assert state["dns_target"] == "abc.awsapprunner.com"
    assert state["enable_www_subdomain"] is True
    assert [r["name"] for r in state["certificate_validation_records"]] == [
        "_a.example.com.",
        "_b.example.com.",
    ]
    assert state["certificate_validation_records"][0] == {
        "name": "_a.example.com.",
        "type": "CNAME",
        "value": "_a.acm.aws.",
        "status": "PENDING_VALIDATION",
    }


def test_error_kinds_are_checked_by_kind() -> None:
    not_found = NotFoundError("gone")
    probe = ProbeError("probe failed", attempts=3)

    assert is_kind(not_found, ErrorKind.NOT_FOUND)
    assert not is_kind(not_found, ErrorKind.REMOTE)
    assert is_kind(probe, ErrorKind.PROBE)
    assert isinstance(probe, RemoteError)
    assert not is_kind(ValueError("x"), ErrorKind.REMOTE)


def test_error_str_includes_identity_and_status() -> None:
    err = TerminalFailureError("entered terminal status", status="create_failed")
    assert str(err) == "entered terminal status (last_status=create_failed)"

    err.with_identity("example.com,svc-1")
    err.with_identity("ignored,once-set")

    assert err.identity == "example.com,svc-1"
    assert str(err) == (
        "entered terminal status (identity=example.com,svc-1, last_status=create_failed)"
    )
