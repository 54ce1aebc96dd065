"""
Rolegate Core Policy - Role assignment rules.

Usage:
    from rolegate_core.policy import RoleAssignmentPolicy

    policy = RoleAssignmentPolicy(users, roles, membership, audit_sink)
    policy.assign_roles("alice", ["editor"], client_id="admin-console")

Architecture:
    - RoleAssignmentPolicy: Precondition checks and mutation orchestration
    - OperationReporter: One audit record per invocation
"""

from rolegate_core.policy.engine import RoleAssignmentPolicy
from rolegate_core.policy.reporting import Attempt, OperationReporter

__all__ = [
    "RoleAssignmentPolicy",
    "OperationReporter",
    "Attempt",
]
