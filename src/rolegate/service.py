"""
Service wiring for Rolegate.

Builds a ready RoleAssignmentPolicy and its adapters from a RolegateConfig.
"""

import logging
from dataclasses import dataclass

from rolegate.adapters.audit import InMemoryAuditSink, LoggingAuditSink
from rolegate.adapters.memory import (
    InMemoryMembershipStore,
    InMemoryRoleCatalog,
    InMemoryUserDirectory,
)
from rolegate.config import LoggingConfig, RolegateConfig
from rolegate_core.policy import RoleAssignmentPolicy
from rolegate_core.ports import AuditSink

logger = logging.getLogger(__name__)


@dataclass
class RolegateServices:
    """The policy engine together with the adapters it was built on."""

    users: InMemoryUserDirectory
    roles: InMemoryRoleCatalog
    membership: InMemoryMembershipStore
    audit: AuditSink
    policy: RoleAssignmentPolicy


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure process logging."""
    config = config or LoggingConfig()
    logging.basicConfig(
        level=config.level.upper(),
        format=config.format,
    )


def create_audit_sink(config: RolegateConfig) -> AuditSink:
    """Create the audit sink selected in configuration."""
    if config.audit.sink == "memory":
        return InMemoryAuditSink()
    return LoggingAuditSink(logger_name=config.audit.logger_name)


def build_services(
    config: RolegateConfig | None = None,
    audit: AuditSink | None = None,
) -> RolegateServices:
    """
    Build the policy engine and seed the in-memory adapters.

    Args:
        config: Configuration to build from (defaults when omitted).
        audit: Audit sink overriding the configured one.

    Returns:
        The assembled services.
    """
    config = config or RolegateConfig()
    directory = config.directory

    users = InMemoryUserDirectory()
    for username, user_id in directory.users.items():
        users.add_user(username, user_id=user_id)

    roles = InMemoryRoleCatalog()
    for name, role_id in directory.roles.items():
        roles.add_role(name, role_id=role_id)

    membership = InMemoryMembershipStore()
    for username, role_names in directory.assignments.items():
        user = users.get_by_username(username)
        role_ids = [directory.roles[name] for name in role_names]
        membership.replace(user, role_ids)

    sink = audit or create_audit_sink(config)
    policy = RoleAssignmentPolicy(
        users=users,
        roles=roles,
        membership=membership,
        audit=sink,
    )

    logger.info(
        "Rolegate ready: %d users, %d roles, audit sink %s",
        len(directory.users),
        len(directory.roles),
        type(sink).__name__,
    )

    return RolegateServices(
        users=users,
        roles=roles,
        membership=membership,
        audit=sink,
        policy=policy,
    )
