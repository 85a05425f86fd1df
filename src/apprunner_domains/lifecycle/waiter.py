"""Polling state machine for eventually consistent remote state."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from apprunner_domains.domain.models import Observation
from apprunner_domains.errors import (
    ProbeError,
    RemoteError,
    TerminalFailureError,
    WaiterTimeoutError,
)

logger = logging.getLogger(__name__)


class WaiterState(str, Enum):
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class WaitResult:
    state: WaiterState
    observation: Observation
    attempts: int
    elapsed: float


def _normalize(observations: Iterable[Observation]) -> frozenset[Observation]:
    # Enum members hash by name; compare on their string values.
    return frozenset(o.value if isinstance(o, Enum) else o for o in observations)


def _describe(observation: Observation | None) -> str | None:
    if observation is None:
        return None
    return observation if isinstance(observation, str) else repr(observation)


class Waiter:
    """Poll ``probe`` until it reports a success or failure observation.

    ``probe`` returns either a status string or ``ABSENT``. A ``RemoteError``
    raised by the probe ends the wait at once as a ``ProbeError``; retrying
    individual calls is the transport's job. The probe is issued at a fixed
    ``poll_interval`` for as long as the next probe still falls within
    ``timeout`` seconds of the first one.
    """

    def __init__(
        self,
        probe: Callable[[], Observation],
        *,
        success: Iterable[Observation],
        failure: Iterable[Observation] = (),
        poll_interval: float,
        timeout: float,
        description: str = "",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        self._success = _normalize(success)
        self._failure = _normalize(failure)
        if not self._success:
            raise ValueError("at least one success observation is required")
        overlap = self._success & self._failure
        if overlap:
            raise ValueError(f"observations both succeed and fail: {sorted(map(repr, overlap))}")

        self._probe = probe
        self._poll_interval = poll_interval
        self._timeout = timeout
        self._description = description or "remote resource"
        self._clock = clock
        self._sleep = sleep
        self.state = WaiterState.POLLING

    def wait(self) -> WaitResult:
        started = self._clock()
        deadline = started + self._timeout
        attempts = 0
        last: Observation | None = None

        while True:
            attempts += 1
            try:
                observation = self._probe()
            except RemoteError as exc:
                self.state = WaiterState.FAILED
                raise ProbeError(
                    f"probing {self._description}: {exc.message}",
                    code=exc.code,
                    attempts=attempts,
                    identity=exc.identity,
                    last_status=_describe(last),
                ) from exc

            if isinstance(observation, Enum):
                observation = observation.value
            last = observation
            logger.debug(
                "Waiting for %s: attempt %d observed %s",
                self._description,
                attempts,
                _describe(observation),
            )

            if observation in self._success:
                self.state = WaiterState.SUCCEEDED
                elapsed = self._clock() - started
                logger.info(
                    "%s reached %s after %d attempt(s)",
                    self._description,
                    _describe(observation),
                    attempts,
                )
                return WaitResult(self.state, observation, attempts, elapsed)

            if observation in self._failure:
                self.state = WaiterState.FAILED
                status = _describe(observation) or ""
                raise TerminalFailureError(
                    f"{self._description} entered terminal status {status!r}",
                    status=status,
                )

            # Stop once the next probe would land past the deadline.
            if self._clock() + self._poll_interval > deadline:
                self.state = WaiterState.TIMED_OUT
                raise WaiterTimeoutError(
                    f"timeout while waiting for {self._description} after "
                    f"{self._timeout:g}s ({attempts} attempt(s))",
                    timeout=self._timeout,
                    last_status=_describe(observation),
                )

            self._sleep(self._poll_interval)
