"""
Error taxonomy surfaced by the role assignment policy.

Callers receive a typed error that tells them whether the request failed
because required state does not hold (precondition), because the request
itself is malformed (client error), or for some other reason reported by a
collaborator. Only the first two are produced by the policy itself; every
other kind passes through unchanged from the membership store.

These are pure types - no framework or transport imports allowed.
"""

from enum import Enum

# Caller-facing messages
ROLES_DO_NOT_EXIST = "roles do not exist"
ROLE_ALREADY_ASSIGNED = "role already assigned"
ROLE_NOT_ASSIGNED = "role not assigned"


class ErrorKind(Enum):
    """Classification of a service failure."""

    PRECONDITION_FAILED = "precondition_failed"  # Required state does not hold
    CLIENT_ERROR = "client_error"  # Malformed or invalid request input
    NOT_FOUND = "not_found"  # Referenced identity does not exist
    CONFLICT = "conflict"  # Concurrent modification detected by a store
    UNAVAILABLE = "unavailable"  # Collaborator temporarily unreachable
    INTERNAL = "internal"  # Anything else


class ServiceError(Exception):
    """
    Base exception for role assignment failures.

    Carries a structured kind so callers can decide whether to correct the
    request, retry later, or give up, without parsing the message.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        kind: ErrorKind | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.reason = reason

    @property
    def audit_reason(self) -> str:
        """
        Lowercase reason code recorded in the audit trail.

        Falls back to the error kind when neither reason nor message is set.
        """
        return (self.reason or self.message or self.kind.value).lower()

    @property
    def retryable(self) -> bool:
        """Whether retrying the same request later may succeed."""
        return self.kind in (ErrorKind.CONFLICT, ErrorKind.UNAVAILABLE)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, kind={self.kind.value})"


class PreconditionFailed(ServiceError):
    """Raised when a role does not exist or its assignment state is wrong."""

    kind = ErrorKind.PRECONDITION_FAILED


class ClientError(ServiceError):
    """Raised when the request input is invalid."""

    kind = ErrorKind.CLIENT_ERROR


class NotFound(ServiceError):
    """Raised when the target user cannot be resolved."""

    kind = ErrorKind.NOT_FOUND


_ERRORS_BY_KIND: dict[ErrorKind, type[ServiceError]] = {
    ErrorKind.PRECONDITION_FAILED: PreconditionFailed,
    ErrorKind.CLIENT_ERROR: ClientError,
    ErrorKind.NOT_FOUND: NotFound,
}


def error_for_kind(kind: ErrorKind, message: str) -> ServiceError:
    """
    Build the typed error for a kind, keeping the message as is.

    Kinds without a dedicated subclass become a ServiceError carrying
    that kind.
    """
    error_class = _ERRORS_BY_KIND.get(kind)
    if error_class is None:
        return ServiceError(message, kind=kind)
    return error_class(message)
