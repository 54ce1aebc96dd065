"""
Core audit domain models.

Pure domain types describing one role assignment attempt. Records are
created once per request by the policy engine and handed straight to the
audit sink; the core never retains them.

Architecture Rules:
- No framework imports (FastAPI, Flask)
- No database driver imports
- No logging initialization
- Only stdlib + typing allowed
- All models are immutable (frozen dataclasses)

Design Principles:
- Append-only: Records should never be modified after creation
- Complete: Each record is self-contained (operation, caller, user, outcome)
- Stable reasons: Failure reasons are lowercase codes suitable for filtering
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


def _utc_now() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def _generate_id() -> str:
    """Generate a unique identifier."""
    return str(uuid4())


class OperationKind(Enum):
    """Role assignment operations that are audited."""

    ASSIGN = "assign"
    UNASSIGN = "unassign"
    REPLACE = "replace"


class AuditOutcome(Enum):
    """Terminal outcome of the audited operation."""

    SUCCESS = "success"
    FAILURE = "failure"


class ReasonCodes:
    """
    Failure reason codes produced by the policy itself.

    Failures reported by the membership store carry their own reason,
    lowercased, instead of one of these.
    """

    NONEXISTENT_ROLE = "nonexistent_role"
    NONEXISTENT_USER = "nonexistent_user"
    INVALID_REQUEST = "invalid_request"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True, slots=True)
class AuditRecord:
    """
    Immutable record of one operation attempt.

    Required invariants:
    - record_id and timestamp are always set
    - reason is None on success
    - reason is a non-empty lowercase string on failure

    Use the success() and failure() factories, which enforce these.

    Example:
        record = AuditRecord.failure(
            OperationKind.ASSIGN,
            client_id="cid1",
            user_id="u-alice",
            reason="nonexistent_role",
        )
    """

    operation: OperationKind
    client_id: str
    user_id: str | None = None  # None only when the user could not be resolved
    outcome: AuditOutcome = AuditOutcome.SUCCESS
    reason: str | None = None

    record_id: str = field(default_factory=_generate_id)
    timestamp: datetime = field(default_factory=_utc_now)

    @classmethod
    def success(
        cls,
        operation: OperationKind,
        client_id: str,
        user_id: str | None,
    ) -> "AuditRecord":
        """Create a record for a successful attempt."""
        return cls(
            operation=operation,
            client_id=client_id,
            user_id=user_id,
            outcome=AuditOutcome.SUCCESS,
        )

    @classmethod
    def failure(
        cls,
        operation: OperationKind,
        client_id: str,
        user_id: str | None,
        reason: str,
    ) -> "AuditRecord":
        """
        Create a record for a failed attempt.

        Raises:
            ValueError: If reason is empty.
        """
        if not reason:
            raise ValueError("reason is required for a failure record")

        return cls(
            operation=operation,
            client_id=client_id,
            user_id=user_id,
            outcome=AuditOutcome.FAILURE,
            reason=reason.lower(),
        )

    @property
    def is_failure(self) -> bool:
        """Check if this represents a failed operation."""
        return self.outcome == AuditOutcome.FAILURE

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for serialization.

        The output is JSON-safe and suitable for structured logging.
        """
        result: dict[str, Any] = {
            "record_id": self.record_id,
            "timestamp": self.timestamp.isoformat(),
            "operation": self.operation.value,
            "client_id": self.client_id,
            "user_id": self.user_id,
            "outcome": self.outcome.value,
        }
        if self.reason:
            result["reason"] = self.reason
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuditRecord":
        """Create from dictionary."""
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        elif timestamp is None:
            timestamp = _utc_now()

        return cls(
            operation=OperationKind(data["operation"]),
            client_id=data.get("client_id", ""),
            user_id=data.get("user_id"),
            outcome=AuditOutcome(data.get("outcome", "success")),
            reason=data.get("reason"),
            record_id=data.get("record_id", _generate_id()),
            timestamp=timestamp,
        )
