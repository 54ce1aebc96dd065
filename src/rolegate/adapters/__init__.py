"""
Rolegate adapters - concrete implementations of the core ports.
"""

from rolegate.adapters.audit import FanOutAuditSink, InMemoryAuditSink, LoggingAuditSink
from rolegate.adapters.memory import (
    InMemoryMembershipStore,
    InMemoryRoleCatalog,
    InMemoryUserDirectory,
)

__all__ = [
    "InMemoryUserDirectory",
    "InMemoryRoleCatalog",
    "InMemoryMembershipStore",
    "LoggingAuditSink",
    "InMemoryAuditSink",
    "FanOutAuditSink",
]
