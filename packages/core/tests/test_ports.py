"""
Tests for Core port definitions.

Verifies that:
1. All ports are importable
2. Core modules contain no forbidden imports (frameworks, drivers, product)
3. Membership result types behave as documented
"""

import ast
from pathlib import Path

import pytest

CORE_SRC = Path(__file__).parent.parent / "src" / "rolegate_core"


class TestPortsImportable:
    """Test that all port modules are importable."""

    def test_import_directory_ports(self) -> None:
        """Directory ports should be importable."""
        from rolegate_core.ports import directory

        assert hasattr(directory, "UserDirectory")
        assert hasattr(directory, "RoleCatalog")
        assert hasattr(directory, "UserNotFoundError")

    def test_import_membership_ports(self) -> None:
        """Membership ports should be importable."""
        from rolegate_core.ports import membership

        assert hasattr(membership, "RoleMembershipStore")
        assert hasattr(membership, "MembershipResult")
        assert hasattr(membership, "MembershipCondition")

    def test_import_all_from_ports(self) -> None:
        """All exports should be importable from ports module."""
        from rolegate_core import ports

        for name in ports.__all__:
            assert hasattr(ports, name), f"Missing export: {name}"

    def test_import_all_from_root(self) -> None:
        """All root exports should be importable."""
        import rolegate_core

        for name in rolegate_core.__all__:
            assert hasattr(rolegate_core, name), f"Missing export: {name}"


class TestNoForbiddenImports:
    """Test that core modules don't contain forbidden imports."""

    FORBIDDEN_MODULES = [
        # Web frameworks
        "fastapi",
        "flask",
        "starlette",
        # Database drivers
        "sqlalchemy",
        "psycopg",
        "sqlite3",
        "redis",
        # Config file loading
        "yaml",
        "dotenv",
        # Product package
        "rolegate",
    ]

    def _get_imports_from_file(self, file_path: Path) -> set[str]:
        """Extract all imports from a Python file using AST."""
        source = file_path.read_text()
        tree = ast.parse(source)
        imports: set[str] = set()

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    imports.add(alias.name.split(".")[0])
            elif isinstance(node, ast.ImportFrom):
                if node.module:
                    imports.add(node.module.split(".")[0])

        return imports

    @pytest.mark.parametrize(
        "relative_path",
        sorted(str(p.relative_to(CORE_SRC)) for p in CORE_SRC.rglob("*.py")),
    )
    def test_core_module_has_no_forbidden_imports(self, relative_path: str) -> None:
        """Core modules must not import forbidden modules."""
        imports = self._get_imports_from_file(CORE_SRC / relative_path)

        for forbidden in self.FORBIDDEN_MODULES:
            assert forbidden not in imports, (
                f"Forbidden import {forbidden} in {relative_path}"
            )


class TestTypesAreDefined:
    """Test that port types are properly defined."""

    def test_user_is_frozen_dataclass(self) -> None:
        """User should be immutable."""
        from rolegate_core.ports import User

        user = User(id="u-1", username="alice")

        with pytest.raises(AttributeError):
            user.username = "bob"  # type: ignore

    def test_user_equality_ignores_attributes(self) -> None:
        """Users compare by id and username only."""
        from rolegate_core.ports import User

        assert User("u-1", "alice", {"a": 1}) == User("u-1", "alice")

    def test_user_not_found_carries_username(self) -> None:
        """UserNotFoundError should keep the missing username."""
        from rolegate_core.ports import UserNotFoundError

        error = UserNotFoundError("ghost")

        assert error.username == "ghost"
        assert "ghost" in str(error)
        assert isinstance(error, LookupError)

    def test_ports_are_abstract(self) -> None:
        """Ports should not be instantiable."""
        from rolegate_core.ports import (
            AuditSink,
            RoleCatalog,
            RoleMembershipStore,
            UserDirectory,
        )

        for port in (UserDirectory, RoleCatalog, RoleMembershipStore, AuditSink):
            with pytest.raises(TypeError):
                port()  # type: ignore


class TestMembershipResult:
    """Test membership result and failure types."""

    def test_success_is_ok(self) -> None:
        """success() should carry no failure."""
        from rolegate_core.ports import MembershipResult

        result = MembershipResult.success()

        assert result.ok is True
        assert result.failure is None

    def test_already_assigned_failure(self) -> None:
        """already_assigned() should be a tagged precondition failure."""
        from rolegate_core.errors import ErrorKind
        from rolegate_core.ports import MembershipCondition, MembershipFailure

        failure = MembershipFailure.already_assigned(["r-reader"])

        assert failure.kind == ErrorKind.PRECONDITION_FAILED
        assert failure.condition == MembershipCondition.ROLE_ALREADY_ASSIGNED
        assert failure.reason == "role already assigned: r-reader"
        assert failure.is_precondition(MembershipCondition.ROLE_ALREADY_ASSIGNED)
        assert not failure.is_precondition(MembershipCondition.ROLE_NOT_ASSIGNED)

    def test_not_assigned_failure(self) -> None:
        """not_assigned() should be a tagged precondition failure."""
        from rolegate_core.ports import MembershipCondition, MembershipFailure

        failure = MembershipFailure.not_assigned()

        assert failure.reason == "role not assigned"
        assert failure.is_precondition(MembershipCondition.ROLE_NOT_ASSIGNED)

    def test_condition_requires_precondition_kind(self) -> None:
        """A matching condition with another kind is not a precondition failure."""
        from rolegate_core.errors import ErrorKind
        from rolegate_core.ports import MembershipCondition, MembershipFailure

        failure = MembershipFailure(
            kind=ErrorKind.CONFLICT,
            reason="role already assigned",
            condition=MembershipCondition.ROLE_ALREADY_ASSIGNED,
        )

        assert not failure.is_precondition(MembershipCondition.ROLE_ALREADY_ASSIGNED)

    def test_failed_result(self) -> None:
        """failed() should wrap the failure."""
        from rolegate_core.errors import ErrorKind
        from rolegate_core.ports import MembershipFailure, MembershipResult

        failure = MembershipFailure(kind=ErrorKind.UNAVAILABLE, reason="Store Offline")
        result = MembershipResult.failed(failure)

        assert result.ok is False
        assert result.failure is failure

    def test_to_error_keeps_kind_and_message(self) -> None:
        """to_error() should not rewrite the store's failure."""
        from rolegate_core.errors import ErrorKind, ServiceError
        from rolegate_core.ports import MembershipFailure

        error = MembershipFailure(kind=ErrorKind.UNAVAILABLE, reason="Store Offline").to_error()

        assert type(error) is ServiceError
        assert error.kind == ErrorKind.UNAVAILABLE
        assert error.message == "Store Offline"
        assert error.audit_reason == "store offline"
