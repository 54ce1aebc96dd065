"""
Role membership port interfaces.

Defines the mutation primitives for a user's role set. Stores report
failures as values (MembershipResult) rather than raising, and tag the
failures the policy knows how to translate with a MembershipCondition so
that translation never depends on message text.

Concurrency control (e.g. two assigns racing on the same user) is the
store's responsibility.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from rolegate_core.errors import ErrorKind, ServiceError, error_for_kind
from rolegate_core.ports.directory import User


class MembershipCondition(Enum):
    """Assignment-state conditions a store may report."""

    ROLE_ALREADY_ASSIGNED = "role already assigned"
    ROLE_NOT_ASSIGNED = "role not assigned"


@dataclass(frozen=True)
class MembershipFailure:
    """
    A failed membership mutation.

    Attributes:
        kind: Failure classification.
        reason: Human-readable reason, also used (lowercased) as the audit code.
        condition: Structured sub-kind for assignment-state failures.
    """

    kind: ErrorKind
    reason: str
    condition: MembershipCondition | None = None

    def is_precondition(self, condition: MembershipCondition) -> bool:
        """Check for a precondition failure with the given condition."""
        return self.kind == ErrorKind.PRECONDITION_FAILED and self.condition == condition

    def to_error(self) -> ServiceError:
        """Convert to the typed exception for this failure's kind, keeping the reason."""
        return error_for_kind(self.kind, self.reason)

    @classmethod
    def already_assigned(cls, role_ids: Sequence[str] = ()) -> "MembershipFailure":
        """Failure for a strict assign that hit a role the user already holds."""
        reason = MembershipCondition.ROLE_ALREADY_ASSIGNED.value
        if role_ids:
            reason = f"{reason}: {', '.join(role_ids)}"
        return cls(
            kind=ErrorKind.PRECONDITION_FAILED,
            reason=reason,
            condition=MembershipCondition.ROLE_ALREADY_ASSIGNED,
        )

    @classmethod
    def not_assigned(cls, role_id: str | None = None) -> "MembershipFailure":
        """Failure for an unassign of a role the user does not hold."""
        reason = MembershipCondition.ROLE_NOT_ASSIGNED.value
        if role_id:
            reason = f"{reason}: {role_id}"
        return cls(
            kind=ErrorKind.PRECONDITION_FAILED,
            reason=reason,
            condition=MembershipCondition.ROLE_NOT_ASSIGNED,
        )


@dataclass(frozen=True)
class MembershipResult:
    """Outcome of a membership mutation."""

    failure: MembershipFailure | None = None

    @property
    def ok(self) -> bool:
        """Whether the mutation was applied."""
        return self.failure is None

    @classmethod
    def success(cls) -> "MembershipResult":
        return cls()

    @classmethod
    def failed(cls, failure: MembershipFailure) -> "MembershipResult":
        return cls(failure=failure)


class RoleMembershipStore(ABC):
    """
    Abstract base for role membership mutation.

    Each operation must be atomic: a failed call leaves the user's role set
    untouched.
    """

    @abstractmethod
    def assign_strict(self, user: User, role_ids: Sequence[str]) -> MembershipResult:
        """
        Add roles to a user, refusing if any is already held.

        Args:
            user: The target user.
            role_ids: Roles to add.

        Returns:
            Success, or a ROLE_ALREADY_ASSIGNED precondition failure when any
            target role is already assigned.
        """
        ...

    @abstractmethod
    def unassign(self, user: User, role_id: str) -> MembershipResult:
        """
        Remove a role from a user.

        Args:
            user: The target user.
            role_id: Role to remove.

        Returns:
            Success, or a ROLE_NOT_ASSIGNED precondition failure when the
            role is not currently assigned.
        """
        ...

    @abstractmethod
    def replace(self, user: User, role_ids: Sequence[str]) -> MembershipResult:
        """
        Set a user's roles to exactly the given set.

        Args:
            user: The target user.
            role_ids: The complete new role set (may be empty).

        Returns:
            Success or a store-specific failure.
        """
        ...

    @abstractmethod
    def roles_of(self, user: User) -> frozenset[str]:
        """
        Get the role identifiers currently assigned to a user.

        Args:
            user: The user to inspect.

        Returns:
            The assigned role identifiers.
        """
        ...
