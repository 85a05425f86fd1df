"""Custom domain association domain model."""

from apprunner_domains.domain.identity import DELIMITER, decode_id, encode_id
from apprunner_domains.domain.models import (
    ABSENT,
    Absent,
    AssociateResult,
    Association,
    AssociationStatus,
    Observation,
    ValidationRecord,
)

__all__ = [
    "ABSENT",
    "Absent",
    "AssociateResult",
    "Association",
    "AssociationStatus",
    "DELIMITER",
    "Observation",
    "ValidationRecord",
    "decode_id",
    "encode_id",
]
