"""
Operation reporting for the role assignment policy.

Wraps each policy invocation in a scope that emits exactly one audit record
when the scope exits, whichever way it exits.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass

from rolegate_core.audit import AuditRecord, OperationKind, ReasonCodes
from rolegate_core.errors import ServiceError
from rolegate_core.ports.audit import AuditSink

logger = logging.getLogger(__name__)


@dataclass
class Attempt:
    """
    Request-scoped state of one operation attempt.

    user_id is filled in by the engine once the user has been resolved.
    """

    operation: OperationKind
    client_id: str
    user_id: str | None = None


class OperationReporter:
    """
    Emits audit records for operation attempts.

    Usage:
        with reporter.attempt(OperationKind.ASSIGN, client_id) as attempt:
            user = resolve(...)
            attempt.user_id = user.id
            ...

    A clean exit records a success. A ServiceError records a failure with the
    error's audit reason; any other exception, including interrupts, records
    unexpected_error. The exception is always re-raised.

    The sink is fire-and-forget: an error raised by the sink is logged and
    never reaches the caller.
    """

    def __init__(self, sink: AuditSink):
        self._sink = sink

    @contextmanager
    def attempt(
        self,
        operation: OperationKind,
        client_id: str,
    ) -> Generator[Attempt, None, None]:
        """Context manager for a single audited attempt."""
        attempt = Attempt(operation=operation, client_id=client_id)
        try:
            yield attempt
        except ServiceError as e:
            self.failure(attempt, e.audit_reason)
            raise
        except BaseException:
            logger.exception(
                "Unexpected error during %s for client %s",
                operation.value,
                client_id,
            )
            self.failure(attempt, ReasonCodes.UNEXPECTED_ERROR)
            raise
        self.success(attempt)

    def success(self, attempt: Attempt) -> None:
        """Record a successful attempt."""
        logger.info(
            "%s succeeded: client=%s user=%s",
            attempt.operation.value,
            attempt.client_id,
            attempt.user_id,
        )
        self._emit(
            AuditRecord.success(attempt.operation, attempt.client_id, attempt.user_id)
        )

    def failure(self, attempt: Attempt, reason: str) -> None:
        """Record a failed attempt."""
        logger.warning(
            "%s failed: client=%s user=%s reason=%s",
            attempt.operation.value,
            attempt.client_id,
            attempt.user_id,
            reason,
        )
        self._emit(
            AuditRecord.failure(
                attempt.operation,
                attempt.client_id,
                attempt.user_id,
                reason or ReasonCodes.UNEXPECTED_ERROR,
            )
        )

    def _emit(self, record: AuditRecord) -> None:
        try:
            self._sink.record(record)
        except Exception:
            logger.exception(
                "Audit sink %s failed to record %s",
                type(self._sink).__name__,
                record.record_id,
            )
