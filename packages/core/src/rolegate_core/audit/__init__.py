"""
Rolegate Core Audit - Audit domain models.

This module provides pure domain models describing each role assignment
attempt. Exactly one record is produced per policy invocation.

Architecture Rules:
- No side effects on import
- No framework-specific imports
- No logging initialization
- All models are immutable

Usage:
    from rolegate_core.audit import AuditRecord, OperationKind

    record = AuditRecord.success(
        OperationKind.ASSIGN,
        client_id="admin-console",
        user_id="u-123",
    )
"""

from rolegate_core.audit.model import (
    AuditOutcome,
    AuditRecord,
    OperationKind,
    ReasonCodes,
)

__all__ = [
    # Core types
    "OperationKind",
    "AuditOutcome",
    "AuditRecord",
    # Constants
    "ReasonCodes",
]
