"""Composite identity for custom domain associations.

An association is named by ``(domain_name, service_arn)``; state stores keep
it as the single string ``"<domain_name>,<service_arn>"``.
"""

from __future__ import annotations

from apprunner_domains.errors import MalformedIdentityError

DELIMITER = ","


def encode_id(domain_name: str, service_arn: str) -> str:
    return f"{domain_name}{DELIMITER}{service_arn}"


def decode_id(identity: str) -> tuple[str, str]:
    parts = identity.split(DELIMITER)
    if len(parts) != 2 or not all(parts):
        raise MalformedIdentityError(
            f"unexpected format for ID ({identity!r}), expected DOMAIN_NAME{DELIMITER}SERVICE_ARN"
        )
    return parts[0], parts[1]
