"""
In-memory adapters for the Rolegate core ports.

Thread-safe reference implementations of the directory and membership
ports. Used for local runs seeded from configuration and in tests. All
state is held in process memory.
"""

import logging
import threading
from collections.abc import Iterable, Sequence
from uuid import uuid4

from rolegate_core.ports import (
    MembershipFailure,
    MembershipResult,
    Role,
    RoleCatalog,
    RoleMembershipStore,
    User,
    UserDirectory,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


def _generate_id() -> str:
    """Generate a unique ID."""
    return str(uuid4())


class InMemoryUserDirectory(UserDirectory):
    """In-memory user directory keyed by username."""

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        for user in users:
            self._users[user.username] = user

    def add_user(self, username: str, user_id: str | None = None) -> User:
        """Add (or overwrite) a user and return it."""
        user = User(id=user_id or _generate_id(), username=username)
        with self._lock:
            self._users[username] = user
        return user

    def get_by_username(self, username: str) -> User:
        with self._lock:
            user = self._users.get(username)
        if user is None:
            raise UserNotFoundError(username)
        return user


class InMemoryRoleCatalog(RoleCatalog):
    """In-memory role catalog keyed by role name."""

    def __init__(self, roles: Iterable[Role] = ()) -> None:
        self._lock = threading.Lock()
        self._by_name: dict[str, Role] = {}
        self._by_id: dict[str, Role] = {}
        for role in roles:
            self._by_name[role.name] = role
            self._by_id[role.id] = role

    def add_role(
        self,
        name: str,
        role_id: str | None = None,
        description: str | None = None,
    ) -> Role:
        """Add (or overwrite) a role and return it."""
        role = Role(id=role_id or _generate_id(), name=name, description=description)
        with self._lock:
            previous = self._by_name.get(name)
            if previous is not None:
                self._by_id.pop(previous.id, None)
            self._by_name[name] = role
            self._by_id[role.id] = role
        return role

    def find_role_id(self, name: str) -> str | None:
        with self._lock:
            role = self._by_name.get(name)
        return role.id if role else None

    def get_role(self, role_id: str) -> Role | None:
        with self._lock:
            return self._by_id.get(role_id)


class InMemoryMembershipStore(RoleMembershipStore):
    """
    In-memory role membership keyed by user id.

    Each mutation holds a single lock across its check and its write, so
    concurrent assigns to the same user cannot both succeed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._assignments: dict[str, set[str]] = {}

    def assign_strict(self, user: User, role_ids: Sequence[str]) -> MembershipResult:
        with self._lock:
            held = self._assignments.setdefault(user.id, set())
            already = [role_id for role_id in role_ids if role_id in held]
            if already:
                return MembershipResult.failed(MembershipFailure.already_assigned(already))
            held.update(role_ids)
        logger.debug("Assigned roles %s to user %s", list(role_ids), user.id)
        return MembershipResult.success()

    def unassign(self, user: User, role_id: str) -> MembershipResult:
        with self._lock:
            held = self._assignments.get(user.id, set())
            if role_id not in held:
                return MembershipResult.failed(MembershipFailure.not_assigned(role_id))
            held.discard(role_id)
        logger.debug("Unassigned role %s from user %s", role_id, user.id)
        return MembershipResult.success()

    def replace(self, user: User, role_ids: Sequence[str]) -> MembershipResult:
        with self._lock:
            self._assignments[user.id] = set(role_ids)
        logger.debug("Replaced roles of user %s with %s", user.id, list(role_ids))
        return MembershipResult.success()

    def roles_of(self, user: User) -> frozenset[str]:
        with self._lock:
            return frozenset(self._assignments.get(user.id, ()))
