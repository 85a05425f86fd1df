"""Domain objects for App Runner custom domain associations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from apprunner_domains.domain.identity import encode_id


class AssociationStatus(str, Enum):
    """Lifecycle states App Runner reports for a custom domain."""

    CREATING = "creating"
    CREATE_FAILED = "create_failed"
    ACTIVE = "active"
    DELETING = "deleting"
    DELETE_FAILED = "delete_failed"
    PENDING_CERTIFICATE_DNS_VALIDATION = "pending_certificate_dns_validation"
    BINDING_CERTIFICATE = "binding_certificate"


class Absent:
    """Marker for "the remote side has no record".

    Distinct from every status string so a waiter can treat absence as a
    success (deletion) or as a transient observation (creation).
    """

    _instance: "Absent | None" = None

    def __new__(cls) -> "Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()

Observation = str | Absent


@dataclass(frozen=True)
class ValidationRecord:
    name: str
    type: str
    value: str
    status: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "type": self.type,
            "value": self.value,
            "status": self.status,
        }


@dataclass(frozen=True)
class AssociateResult:
    domain_name: str
    service_arn: str
    dns_target: str
    status: str


@dataclass(frozen=True)
class Association:
    """Observed state of one custom domain association.

    ``domain_name`` and ``service_arn`` form the identity and never change;
    ``status`` is always the last status App Runner reported.
    """

    domain_name: str
    service_arn: str
    status: str
    dns_target: str | None = None
    enable_www_subdomain: bool = True
    certificate_validation_records: frozenset[ValidationRecord] = field(
        default_factory=frozenset
    )

    @property
    def id(self) -> str:
        return encode_id(self.domain_name, self.service_arn)

    def to_state(self) -> dict[str, object]:
        records = sorted(
            self.certificate_validation_records,
            key=lambda r: (r.name, r.type, r.value),
        )
        return {
            "id": self.id,
            "domain_name": self.domain_name,
            "service_arn": self.service_arn,
            "dns_target": self.dns_target,
            "status": self.status,
            "enable_www_subdomain": self.enable_www_subdomain,
            "certificate_validation_records": [r.to_dict() for r in records],
        }
