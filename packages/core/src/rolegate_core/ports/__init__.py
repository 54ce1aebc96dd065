"""
Rolegate Core Ports - Interface definitions for adapters.

This module exports all port (interface) definitions that adapters must
implement. Ports define contracts without implementations.

Usage:
    from rolegate_core.ports import UserDirectory, RoleCatalog, AuditSink

Architecture:
    - Ports are abstract base classes
    - Adapters provide concrete implementations
    - Core depends only on ports, never on adapters
"""

# Directory Ports
from rolegate_core.ports.directory import (
    Role,
    RoleCatalog,
    User,
    UserDirectory,
    UserNotFoundError,
)

# Membership Ports
from rolegate_core.ports.membership import (
    MembershipCondition,
    MembershipFailure,
    MembershipResult,
    RoleMembershipStore,
)

# Audit Ports
from rolegate_core.ports.audit import AuditSink

__all__ = [
    # Directory
    "User",
    "Role",
    "UserNotFoundError",
    "UserDirectory",
    "RoleCatalog",
    # Membership
    "MembershipCondition",
    "MembershipFailure",
    "MembershipResult",
    "RoleMembershipStore",
    # Audit
    "AuditSink",
]
