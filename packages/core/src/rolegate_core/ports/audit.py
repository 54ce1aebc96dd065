"""
Audit sink port interface.

The sink durably records operation attempts. Its storage format is up to
the implementation.
"""

from abc import ABC, abstractmethod

from rolegate_core.audit import AuditRecord


class AuditSink(ABC):
    """
    Abstract base for audit record consumers.

    Fire-and-forget from the policy's perspective: record() is called exactly
    once per invocation, after the outcome is known.
    """

    @abstractmethod
    def record(self, record: AuditRecord) -> None:
        """
        Accept one audit record.

        Args:
            record: The record to store.
        """
        ...
