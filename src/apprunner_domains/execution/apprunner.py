"""Remote operations on App Runner custom domains.

The reconciler depends only on :class:`AssociationClient`; the boto3-backed
:class:`AppRunnerAssociationClient` is the production implementation.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from apprunner_domains.domain.identity import encode_id
from apprunner_domains.domain.models import AssociateResult, Association, ValidationRecord
from apprunner_domains.errors import NotFoundError, RemoteError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"ResourceNotFoundException"})


class AssociationClient(Protocol):
    def associate(
        self, domain_name: str, service_arn: str, enable_www_subdomain: bool
    ) -> AssociateResult: ...

    def describe(self, domain_name: str, service_arn: str) -> Association: ...

    def disassociate(self, domain_name: str, service_arn: str) -> None: ...


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "Unknown")


def _translate_error(
    exc: Exception, action: str, domain_name: str, service_arn: str
) -> RemoteError:
    identity = encode_id(domain_name, service_arn)
    if isinstance(exc, ClientError):
        code = _error_code(exc)
        error_message = exc.response.get("Error", {}).get("Message", str(exc))
        if code in _NOT_FOUND_CODES:
            return NotFoundError(f"{action}: {error_message}", identity=identity)
        return RemoteError(f"{action}: {error_message}", code=code, identity=identity)
    return RemoteError(f"{action}: {exc}", code=type(exc).__name__, identity=identity)


def _flatten_validation_records(
    records: list[dict[str, Any]] | None,
) -> frozenset[ValidationRecord]:
    return frozenset(
        ValidationRecord(
            name=record.get("Name", ""),
            type=record.get("Type", ""),
            value=record.get("Value", ""),
            status=record.get("Status", ""),
        )
        for record in records or []
    )


def _to_association(custom_domain: dict[str, Any], service_arn: str) -> Association:
    # dns_target is set once, from the associate response.
    return Association(
        domain_name=custom_domain["DomainName"],
        service_arn=service_arn,
        status=custom_domain.get("Status", ""),
        enable_www_subdomain=bool(custom_domain.get("EnableWWWSubdomain", False)),
        certificate_validation_records=_flatten_validation_records(
            custom_domain.get("CertificateValidationRecords")
        ),
    )


class AppRunnerAssociationClient:
    """AssociationClient backed by a boto3 ``apprunner`` client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def associate(
        self, domain_name: str, service_arn: str, enable_www_subdomain: bool
    ) -> AssociateResult:
        action = f"associating App Runner Custom Domain ({domain_name}) for Service ({service_arn})"
        try:
            response = self._client.associate_custom_domain(
                ServiceArn=service_arn,
                DomainName=domain_name,
                EnableWWWSubdomain=enable_www_subdomain,
            )
        except (ClientError, BotoCoreError) as exc:
            raise _translate_error(exc, action, domain_name, service_arn) from exc

        if not response:
            raise RemoteError(
                f"{action}: empty output",
                identity=encode_id(domain_name, service_arn),
            )

        custom_domain = response.get("CustomDomain") or {}
        logger.info("Associated custom domain %s with %s", domain_name, service_arn)
        return AssociateResult(
            domain_name=custom_domain.get("DomainName", domain_name),
            service_arn=response.get("ServiceArn", service_arn),
            dns_target=response.get("DNSTarget", ""),
            status=custom_domain.get("Status", ""),
        )

    def describe(self, domain_name: str, service_arn: str) -> Association:
        action = f"reading App Runner Custom Domain ({domain_name}) for Service ({service_arn})"
        params: dict[str, Any] = {"ServiceArn": service_arn}
        while True:
            try:
                response = self._client.describe_custom_domains(**params)
            except (ClientError, BotoCoreError) as exc:
                raise _translate_error(exc, action, domain_name, service_arn) from exc

            for custom_domain in response.get("CustomDomains") or []:
                if custom_domain.get("DomainName") == domain_name:
                    return _to_association(custom_domain, service_arn)

            next_token = response.get("NextToken")
            if not next_token:
                break
            params["NextToken"] = next_token

        raise NotFoundError(
            f"{action}: custom domain not found",
            identity=encode_id(domain_name, service_arn),
        )

    def disassociate(self, domain_name: str, service_arn: str) -> None:
        action = (
            f"disassociating App Runner Custom Domain ({domain_name}) for Service ({service_arn})"
        )
        try:
            self._client.disassociate_custom_domain(
                ServiceArn=service_arn,
                DomainName=domain_name,
            )
        except (ClientError, BotoCoreError) as exc:
            raise _translate_error(exc, action, domain_name, service_arn) from exc
        logger.info("Disassociated custom domain %s from %s", domain_name, service_arn)
