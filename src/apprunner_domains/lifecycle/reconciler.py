"""Create, read and delete custom domain associations.

App Runner accepts an associate call long before the domain is usable and
acknowledges a disassociate call long before the record is gone, so every
mutation is followed by a :class:`~apprunner_domains.lifecycle.waiter.Waiter`
that polls ``describe`` until the remote side settles.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from collections.abc import Callable, Iterable

from apprunner_domains.domain.identity import decode_id, encode_id
from apprunner_domains.domain.models import (
    ABSENT,
    Absent,
    Association,
    AssociationStatus,
    Observation,
)
from apprunner_domains.errors import (
    AssociationError,
    NotFoundError,
    PostCreateNotFoundError,
)
from apprunner_domains.execution.apprunner import AssociationClient
from apprunner_domains.lifecycle.waiter import Waiter

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 5.0
DEFAULT_TIMEOUT_SECONDS = 300.0


class Reconciler:
    """Drive custom domain associations to a settled remote state.

    The reconciler keeps no state between calls: every observation is a
    fresh ``describe``. Errors raised from any operation carry the identity
    they apply to, including failed or timed-out creates, so the caller can
    decide whether to read or delete a half-created association.
    """

    def __init__(
        self,
        client: AssociationClient,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        create_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        delete_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        create_success: Iterable[Observation] = (AssociationStatus.ACTIVE,),
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self._poll_interval = poll_interval
        self._create_timeout = create_timeout
        self._delete_timeout = delete_timeout
        self._create_success = tuple(create_success)
        self._clock = clock
        self._sleep = sleep

    def _status_probe(self, domain_name: str, service_arn: str) -> Callable[[], Observation]:
        def probe() -> Observation:
            try:
                return self._client.describe(domain_name, service_arn).status
            except NotFoundError:
                return ABSENT

        return probe

    def _waiter(
        self,
        identity: str,
        probe: Callable[[], Observation],
        *,
        success: Iterable[Observation],
        failure: Iterable[Observation],
        timeout: float,
        action: str,
    ) -> Waiter:
        return Waiter(
            probe,
            success=success,
            failure=failure,
            poll_interval=self._poll_interval,
            timeout=timeout,
            description=f"App Runner Custom Domain Association ({identity}) {action}",
            clock=self._clock,
            sleep=self._sleep,
        )

    def create(
        self,
        domain_name: str,
        service_arn: str,
        enable_www_subdomain: bool = True,
    ) -> Association:
        result = self._client.associate(domain_name, service_arn, enable_www_subdomain)

        # The remote side names the association; the ID follows its answer.
        domain_name, service_arn = result.domain_name, result.service_arn
        identity = encode_id(domain_name, service_arn)
        dns_target = result.dns_target
        logger.info(
            "Custom domain association %s accepted (status=%s, dns_target=%s)",
            identity,
            result.status,
            dns_target,
        )

        waiter = self._waiter(
            identity,
            self._status_probe(domain_name, service_arn),
            success=self._create_success,
            failure=(AssociationStatus.CREATE_FAILED,),
            timeout=self._create_timeout,
            action="creation",
        )
        try:
            waiter.wait()
        except AssociationError as exc:
            exc.with_identity(identity)
            raise

        return self.read(identity, new_resource=True, dns_target=dns_target)

    def read(
        self,
        identity: str,
        *,
        new_resource: bool = False,
        dns_target: str | None = None,
    ) -> Association | Absent:
        """Describe the association named by ``identity``.

        ``dns_target`` is the value recorded when the association was created;
        App Runner is never asked for it again, so it is carried through as-is.
        """
        domain_name, service_arn = decode_id(identity)

        try:
            association = self._client.describe(domain_name, service_arn)
        except NotFoundError as exc:
            if new_resource:
                raise PostCreateNotFoundError(
                    "reading App Runner Custom Domain Association: not found after creation",
                    identity=identity,
                ) from exc
            logger.warning(
                "App Runner Custom Domain Association (%s) not found, removing from state",
                identity,
            )
            return ABSENT
        except AssociationError as exc:
            exc.with_identity(identity)
            raise
        return dataclasses.replace(association, dns_target=dns_target)

    def import_(self, identity: str) -> Association | Absent:
        """Adopt an existing association by its identity string."""
        return self.read(identity)

    def delete(self, identity: str) -> None:
        domain_name, service_arn = decode_id(identity)

        try:
            self._client.disassociate(domain_name, service_arn)
        except NotFoundError:
            logger.info("Custom domain association %s already absent", identity)
            return
        except AssociationError as exc:
            exc.with_identity(identity)
            raise

        waiter = self._waiter(
            identity,
            self._status_probe(domain_name, service_arn),
            success=(ABSENT,),
            failure=(AssociationStatus.DELETE_FAILED,),
            timeout=self._delete_timeout,
            action="deletion",
        )
        # The probe reports NotFound as ABSENT, which is this waiter's success.
        try:
            waiter.wait()
        except AssociationError as exc:
            exc.with_identity(identity)
            raise
        logger.info("Custom domain association %s deleted", identity)

    async def create_async(
        self,
        domain_name: str,
        service_arn: str,
        enable_www_subdomain: bool = True,
    ) -> Association:
        return await asyncio.to_thread(self.create, domain_name, service_arn, enable_www_subdomain)

    async def read_async(
        self,
        identity: str,
        *,
        new_resource: bool = False,
        dns_target: str | None = None,
    ) -> Association | Absent:
        return await asyncio.to_thread(
            self.read, identity, new_resource=new_resource, dns_target=dns_target
        )

    async def delete_async(self, identity: str) -> None:
        await asyncio.to_thread(self.delete, identity)
