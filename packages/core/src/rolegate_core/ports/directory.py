"""
User and role lookup port interfaces.

Defines read-only abstractions over the identity store (users) and the role
store (roles). Implementations may be backed by an IdP admin API, a SQL
database, or in-memory fixtures.

These are pure interfaces - no client library or database imports allowed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class UserNotFoundError(LookupError):
    """Raised when no user exists for a username."""

    def __init__(self, username: str):
        super().__init__(f"user not found: {username}")
        self.username = username


@dataclass(frozen=True)
class User:
    """
    Identity record owned by the user store.

    The policy holds this only for the duration of a single request.
    """

    id: str
    username: str
    attributes: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Role:
    """Named permission grouping owned by the role store."""

    id: str
    name: str
    description: str | None = None


class UserDirectory(ABC):
    """
    Abstract base for resolving usernames to user records.
    """

    @abstractmethod
    def get_by_username(self, username: str) -> User:
        """
        Resolve a username.

        Args:
            username: The username to look up.

        Returns:
            The user record.

        Raises:
            UserNotFoundError: If no such user exists.
        """
        ...


class RoleCatalog(ABC):
    """
    Abstract base for resolving role names to role identifiers.

    Lookups return None for unknown names rather than raising, so callers
    can check a whole batch of names without one miss aborting the rest.
    """

    @abstractmethod
    def find_role_id(self, name: str) -> str | None:
        """
        Resolve a role name.

        Args:
            name: The role name.

        Returns:
            The role identifier, or None if the role does not exist.
        """
        ...

    @abstractmethod
    def get_role(self, role_id: str) -> Role | None:
        """
        Fetch a role by identifier.

        Args:
            role_id: The role identifier.

        Returns:
            The role if found, None otherwise.
        """
        ...
