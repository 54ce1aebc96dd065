"""
Role assignment policy engine.

The single place where role-change business rules are enforced:

1. Resolve the user and the target role(s).
2. Check that every role exists.
3. Delegate the mutation to the membership store.
4. Translate the store's assignment-state failures into caller-facing
   errors; pass every other failure through unchanged.
5. Emit exactly one audit record per call (see OperationReporter).

The engine keeps no state between calls. Users and roles are resolved
afresh on every invocation so precondition decisions are never made on
stale data.
"""

import logging
from collections.abc import Sequence

from rolegate_core.audit import OperationKind, ReasonCodes
from rolegate_core.errors import (
    ROLE_ALREADY_ASSIGNED,
    ROLE_NOT_ASSIGNED,
    ROLES_DO_NOT_EXIST,
    ClientError,
    NotFound,
    PreconditionFailed,
)
from rolegate_core.policy.reporting import Attempt, OperationReporter
from rolegate_core.ports.audit import AuditSink
from rolegate_core.ports.directory import (
    RoleCatalog,
    User,
    UserDirectory,
    UserNotFoundError,
)
from rolegate_core.ports.membership import (
    MembershipCondition,
    MembershipResult,
    RoleMembershipStore,
)

logger = logging.getLogger(__name__)


class RoleAssignmentPolicy:
    """
    Enforces preconditions around assign, unassign and replace.

    Args:
        users: Resolves usernames to users.
        roles: Resolves role names to role identifiers.
        membership: Applies the mutations.
        audit: Receives one record per call.
    """

    def __init__(
        self,
        users: UserDirectory,
        roles: RoleCatalog,
        membership: RoleMembershipStore,
        audit: AuditSink,
    ):
        self._users = users
        self._roles = roles
        self._membership = membership
        self._reporter = OperationReporter(audit)

    def assign_roles(
        self,
        username: str,
        role_names: Sequence[str],
        client_id: str,
    ) -> None:
        """
        Assign roles to a user, refusing roles the user already holds.

        An empty role_names is a successful no-op.

        Raises:
            ClientError: If the request input is malformed.
            NotFound: If the user does not exist.
            PreconditionFailed: If a role does not exist or is already assigned.
            ServiceError: Any other failure reported by the membership store.
        """
        with self._reporter.attempt(OperationKind.ASSIGN, client_id) as attempt:
            _check_request(username, client_id)
            names = _check_role_names(role_names)
            user = self._resolve_user(username, attempt)
            if not names:
                logger.debug("No roles to assign to user %s", user.id)
                return

            role_ids = self._resolve_role_ids(names)
            if len(role_ids) != len(names):
                raise PreconditionFailed(
                    ROLES_DO_NOT_EXIST, reason=ReasonCodes.NONEXISTENT_ROLE
                )

            result = self._membership.assign_strict(user, role_ids)
            _raise_for_failure(
                result,
                MembershipCondition.ROLE_ALREADY_ASSIGNED,
                ROLE_ALREADY_ASSIGNED,
            )

    def unassign_role(self, username: str, role_name: str, client_id: str) -> None:
        """
        Remove a single role from a user.

        Raises:
            ClientError: If the request input is malformed.
            NotFound: If the user does not exist.
            PreconditionFailed: If the role does not exist or is not assigned.
            ServiceError: Any other failure reported by the membership store.
        """
        with self._reporter.attempt(OperationKind.UNASSIGN, client_id) as attempt:
            _check_request(username, client_id)
            if not isinstance(role_name, str) or not role_name:
                raise ClientError(
                    "role name must be a non-empty string",
                    reason=ReasonCodes.INVALID_REQUEST,
                )
            user = self._resolve_user(username, attempt)

            role_id = self._roles.find_role_id(role_name)
            if role_id is None:
                raise PreconditionFailed(
                    ROLES_DO_NOT_EXIST, reason=ReasonCodes.NONEXISTENT_ROLE
                )

            result = self._membership.unassign(user, role_id)
            _raise_for_failure(
                result,
                MembershipCondition.ROLE_NOT_ASSIGNED,
                ROLE_NOT_ASSIGNED,
            )

    def replace_roles(
        self,
        username: str,
        role_names: Sequence[str],
        client_id: str,
    ) -> None:
        """
        Set a user's roles to exactly the named roles.

        An empty role_names leaves the user with no roles. Unknown role names
        are treated as bad input, not as a state conflict.

        Raises:
            ClientError: If the input is malformed or a role does not exist.
            NotFound: If the user does not exist.
            ServiceError: Any failure reported by the membership store.
        """
        with self._reporter.attempt(OperationKind.REPLACE, client_id) as attempt:
            _check_request(username, client_id)
            names = _check_role_names(role_names)
            user = self._resolve_user(username, attempt)

            role_ids = self._resolve_role_ids(names)
            if len(role_ids) != len(names):
                raise ClientError(
                    ROLES_DO_NOT_EXIST, reason=ReasonCodes.NONEXISTENT_ROLE
                )

            result = self._membership.replace(user, role_ids)
            _raise_for_failure(result)

    def _resolve_user(self, username: str, attempt: Attempt) -> User:
        try:
            user = self._users.get_by_username(username)
        except UserNotFoundError as e:
            raise NotFound(str(e), reason=ReasonCodes.NONEXISTENT_USER) from e
        attempt.user_id = user.id
        return user

    def _resolve_role_ids(self, names: Sequence[str]) -> list[str]:
        """Resolve every name, dropping the ones that do not exist."""
        role_ids = []
        for name in names:
            role_id = self._roles.find_role_id(name)
            if role_id is None:
                logger.debug("Role %r does not exist", name)
                continue
            role_ids.append(role_id)
        return role_ids


def _check_request(username: str, client_id: str) -> None:
    if not isinstance(username, str) or not username:
        raise ClientError(
            "username must be a non-empty string",
            reason=ReasonCodes.INVALID_REQUEST,
        )
    if not isinstance(client_id, str):
        raise ClientError(
            "client id must be a string",
            reason=ReasonCodes.INVALID_REQUEST,
        )


def _check_role_names(role_names: Sequence[str]) -> list[str]:
    # A bare string is a Sequence too; reject it rather than iterate characters.
    if isinstance(role_names, str) or not isinstance(role_names, Sequence):
        raise ClientError(
            "role names must be a sequence of strings",
            reason=ReasonCodes.INVALID_REQUEST,
        )
    names = list(role_names)
    if not all(isinstance(name, str) for name in names):
        raise ClientError(
            "role names must be a sequence of strings",
            reason=ReasonCodes.INVALID_REQUEST,
        )
    return names


def _raise_for_failure(
    result: MembershipResult,
    condition: MembershipCondition | None = None,
    message: str | None = None,
) -> None:
    """
    Raise for a failed mutation.

    A precondition failure matching condition becomes PreconditionFailed
    with message; anything else is raised with the store's kind and reason.
    """
    failure = result.failure
    if failure is None:
        return

    if condition is not None and message and failure.is_precondition(condition):
        raise PreconditionFailed(message)

    logger.debug(
        "Membership store failure passed through: kind=%s reason=%s",
        failure.kind.value,
        failure.reason,
    )
    raise failure.to_error()
