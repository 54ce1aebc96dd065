"""
Audit sink adapters.

LoggingAuditSink writes records to the process log as structured lines.
InMemoryAuditSink keeps them in a list for inspection. FanOutAuditSink
forwards to several sinks.
"""

import logging
import threading
from collections.abc import Iterable

from rolegate_core.audit import AuditRecord
from rolegate_core.ports import AuditSink

logger = logging.getLogger(__name__)


class LoggingAuditSink(AuditSink):
    """
    Audit sink backed by a standard library logger.

    Successes are logged at INFO and failures at WARNING. The full record is
    attached as the "audit" extra so handlers can emit it as JSON.
    """

    def __init__(self, logger_name: str = "rolegate.audit") -> None:
        self._log = logging.getLogger(logger_name)

    def record(self, record: AuditRecord) -> None:
        level = logging.WARNING if record.is_failure else logging.INFO
        if record.is_failure:
            message = "audit %s %s client=%s user=%s reason=%s"
            args = (
                record.operation.value,
                record.outcome.value,
                record.client_id,
                record.user_id,
                record.reason,
            )
        else:
            message = "audit %s %s client=%s user=%s"
            args = (
                record.operation.value,
                record.outcome.value,
                record.client_id,
                record.user_id,
            )
        self._log.log(level, message, *args, extra={"audit": record.to_dict()})


class InMemoryAuditSink(AuditSink):
    """Audit sink that keeps every record in memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[AuditRecord] = []

    def record(self, record: AuditRecord) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> list[AuditRecord]:
        """All records, oldest first."""
        with self._lock:
            return list(self._records)

    @property
    def failures(self) -> list[AuditRecord]:
        return [r for r in self.records if r.is_failure]

    @property
    def successes(self) -> list[AuditRecord]:
        return [r for r in self.records if not r.is_failure]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class FanOutAuditSink(AuditSink):
    """
    Forwards each record to every wrapped sink.

    A sink that raises is logged and skipped; the remaining sinks still
    receive the record.
    """

    def __init__(self, sinks: Iterable[AuditSink]) -> None:
        self._sinks = list(sinks)

    def record(self, record: AuditRecord) -> None:
        for sink in self._sinks:
            try:
                sink.record(record)
            except Exception:
                logger.exception(
                    "Audit sink %s failed to record %s",
                    type(sink).__name__,
                    record.record_id,
                )
