"""Application context assembly."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from apprunner_domains import __version__
from apprunner_domains.config import Settings, load_settings
from apprunner_domains.execution.apprunner import AppRunnerAssociationClient
from apprunner_domains.execution.aws_client import get_client
from apprunner_domains.lifecycle.reconciler import Reconciler
from apprunner_domains.logging_utils import configure_logging

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Dependencies for reconciling custom domains in one region/profile."""

    settings: Settings
    client: AppRunnerAssociationClient
    reconciler: Reconciler


def build_app_context(region: str | None = None, profile: str | None = None) -> AppContext:
    settings = load_settings()
    configure_logging(settings.logging)

    client = AppRunnerAssociationClient(get_client(region, profile, settings=settings))
    reconciler = Reconciler(
        client,
        poll_interval=settings.waiter.poll_interval_seconds,
        create_timeout=settings.waiter.create_timeout_seconds,
        delete_timeout=settings.waiter.delete_timeout_seconds,
    )

    logger.info(
        "Initialized apprunner-domains v%s (region=%s)",
        __version__,
        region or settings.aws.default_region,
    )
    return AppContext(settings=settings, client=client, reconciler=reconciler)
