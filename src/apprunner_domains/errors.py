"""Error taxonomy for custom domain reconciliation.

Every error carries an :class:`ErrorKind` so callers can match on the kind
rather than on the concrete class, plus the identity it applies to and the
last remote status that was observed (when known).
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MALFORMED_IDENTITY = "malformed_identity"
    REMOTE = "remote"
    NOT_FOUND = "not_found"
    TERMINAL_FAILURE = "terminal_failure"
    TIMEOUT = "timeout"
    PROBE = "probe"
    POST_CREATE_NOT_FOUND = "post_create_not_found"


class AssociationError(Exception):
    """Base class for all reconciliation errors."""

    kind: ErrorKind = ErrorKind.REMOTE

    def __init__(
        self,
        message: str,
        *,
        identity: str | None = None,
        last_status: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.identity = identity
        self.last_status = last_status

    def with_identity(self, identity: str) -> "AssociationError":
        if self.identity is None:
            self.identity = identity
        return self

    def __str__(self) -> str:
        parts = [self.message]
        if self.identity:
            parts.append(f"identity={self.identity}")
        if self.last_status:
            parts.append(f"last_status={self.last_status}")
        if len(parts) == 1:
            return self.message
        return f"{parts[0]} ({', '.join(parts[1:])})"


class MalformedIdentityError(AssociationError):
    """The composite identity string cannot be decoded. Never retried."""

    kind = ErrorKind.MALFORMED_IDENTITY


class RemoteError(AssociationError):
    """A transport or API failure reported by the App Runner client."""

    kind = ErrorKind.REMOTE

    def __init__(
        self,
        message: str,
        *,
        code: str = "Unknown",
        identity: str | None = None,
        last_status: str | None = None,
    ) -> None:
        super().__init__(message, identity=identity, last_status=last_status)
        self.code = code


class NotFoundError(RemoteError):
    """The remote side has no record for the requested association."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, *, identity: str | None = None) -> None:
        super().__init__(message, code="ResourceNotFoundException", identity=identity)


class ProbeError(RemoteError):
    """A status probe failed while a waiter was polling."""

    kind = ErrorKind.PROBE

    def __init__(
        self,
        message: str,
        *,
        code: str = "Unknown",
        attempts: int = 0,
        identity: str | None = None,
        last_status: str | None = None,
    ) -> None:
        super().__init__(message, code=code, identity=identity, last_status=last_status)
        self.attempts = attempts


class TerminalFailureError(AssociationError):
    """The remote side reported a failure status such as create_failed."""

    kind = ErrorKind.TERMINAL_FAILURE

    def __init__(self, message: str, *, status: str, identity: str | None = None) -> None:
        super().__init__(message, identity=identity, last_status=status)
        self.status = status


class WaiterTimeoutError(AssociationError):
    """The deadline passed before a terminal status was observed.

    The remote operation may still complete later; the outcome is unknown.
    """

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        message: str,
        *,
        timeout: float,
        identity: str | None = None,
        last_status: str | None = None,
    ) -> None:
        super().__init__(message, identity=identity, last_status=last_status)
        self.timeout = timeout


class PostCreateNotFoundError(AssociationError):
    """An association reported as created vanished before it could be read."""

    kind = ErrorKind.POST_CREATE_NOT_FOUND


def is_kind(exc: BaseException, kind: ErrorKind) -> bool:
    return isinstance(exc, AssociationError) and exc.kind is kind
