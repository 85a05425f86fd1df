"""App Runner client factory."""

from __future__ import annotations

import boto3
from botocore.config import Config

from apprunner_domains.config import Settings, load_settings

SERVICE_NAME = "apprunner"


def get_client(
    region: str | None = None,
    profile: str | None = None,
    settings: Settings | None = None,
):
    """Build a boto3 App Runner client.

    A new client is built on every call; callers hold on to it for as long as
    they need it.
    """
    if settings is None:
        settings = load_settings()
    session = boto3.Session(
        profile_name=profile or settings.aws.default_profile,
        region_name=region or settings.aws.default_region,
    )
    return session.client(SERVICE_NAME, config=_get_service_config(settings))


def _get_service_config(settings: Settings) -> Config:
    return Config(
        read_timeout=settings.execution.sdk_timeout_seconds,
        connect_timeout=settings.execution.sdk_timeout_seconds,
        retries={
            "max_attempts": settings.execution.max_retries + 1,
            "mode": "standard",
        },
    )
