"""
Rolegate Core - Role assignment policy.

This package contains the business rules for changing a user's roles and
the ports its collaborators implement. It must not import the rolegate
product package.

Architecture Rules:
- Core must not import rolegate
- No framework imports (FastAPI, Flask)
- No database driver imports
- No configuration file loading
- No side effects on import

Modules:
- ports: Interface definitions for adapters to implement
- policy: The role assignment policy engine
- audit: Audit domain models
- errors: Caller-facing error taxonomy
"""

__version__ = "0.1.0"

# Re-export ports at package level
from rolegate_core.ports import (
    # Directory
    Role,
    RoleCatalog,
    User,
    UserDirectory,
    UserNotFoundError,
    # Membership
    MembershipCondition,
    MembershipFailure,
    MembershipResult,
    RoleMembershipStore,
    # Audit
    AuditSink,
)

# Re-export audit models
from rolegate_core.audit import (
    AuditOutcome,
    AuditRecord,
    OperationKind,
    ReasonCodes,
)

# Re-export errors
from rolegate_core.errors import (
    ClientError,
    ErrorKind,
    NotFound,
    PreconditionFailed,
    ServiceError,
)

# Re-export the policy engine
from rolegate_core.policy import OperationReporter, RoleAssignmentPolicy

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
    "AuditOutcome",
    "AuditRecord",
    "OperationKind",
    "ReasonCodes",
    # Errors
    "ErrorKind",
    "ServiceError",
    "PreconditionFailed",
    "ClientError",
    "NotFound",
    # Policy
    "RoleAssignmentPolicy",
    "OperationReporter",
]
