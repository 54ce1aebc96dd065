"""
Rolegate configuration management.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

AUDIT_SINKS = ("logging", "memory")
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""


@dataclass
class AuditConfig:
    """Audit sink configuration."""

    sink: str = "logging"  # logging, memory
    logger_name: str = "rolegate.audit"


@dataclass
class LoggingConfig:
    """Process logging configuration."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class DirectoryConfig:
    """
    Seed data for the in-memory directory adapters.

    users: username -> user id
    roles: role name -> role id
    assignments: username -> role names held at startup
    """

    users: dict[str, str] = field(default_factory=dict)
    roles: dict[str, str] = field(default_factory=dict)
    assignments: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class RolegateConfig:
    """
    Complete Rolegate configuration.

    Loaded from .rolegate/config.yaml.
    """

    version: str = "0.1.0"

    audit: AuditConfig = field(default_factory=AuditConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    directory: DirectoryConfig = field(default_factory=DirectoryConfig)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check configuration values.

        Raises:
            ConfigError: If a value is invalid.
        """
        if self.audit.sink not in AUDIT_SINKS:
            raise ConfigError(
                f"Unknown audit sink {self.audit.sink!r}; expected one of {AUDIT_SINKS}"
            )

        if not isinstance(logging.getLevelName(self.logging.level.upper()), int):
            raise ConfigError(f"Unknown log level {self.logging.level!r}")

        d = self.directory
        for username, role_names in d.assignments.items():
            if username not in d.users:
                raise ConfigError(f"Assignment for unknown user {username!r}")
            unknown = [name for name in role_names if name not in d.roles]
            if unknown:
                raise ConfigError(
                    f"Assignment for {username!r} names unknown roles: {', '.join(unknown)}"
                )

    @classmethod
    def from_file(cls, path: Path) -> "RolegateConfig":
        """Load configuration from YAML file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data.get("rolegate", data))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RolegateConfig":
        """Create config from dictionary."""
        audit = AuditConfig()
        log_config = LoggingConfig()
        directory = DirectoryConfig()

        if "audit" in data:
            a = data["audit"] or {}
            audit = AuditConfig(
                sink=a.get("sink", "logging"),
                logger_name=a.get("logger_name", "rolegate.audit"),
            )

        if "logging" in data:
            lg = data["logging"] or {}
            log_config = LoggingConfig(
                level=str(lg.get("level", "INFO")),
                format=lg.get("format", DEFAULT_LOG_FORMAT),
            )

        if "directory" in data:
            d = data["directory"] or {}
            directory = DirectoryConfig(
                users={str(k): str(v) for k, v in (d.get("users") or {}).items()},
                roles={str(k): str(v) for k, v in (d.get("roles") or {}).items()},
                assignments={
                    str(k): [str(name) for name in (v or [])]
                    for k, v in (d.get("assignments") or {}).items()
                },
            )

        return cls(
            version=str(data.get("version", "0.1.0")),
            audit=audit,
            logging=log_config,
            directory=directory,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rolegate": {
                "version": self.version,
                "audit": {
                    "sink": self.audit.sink,
                    "logger_name": self.audit.logger_name,
                },
                "logging": {
                    "level": self.logging.level,
                    "format": self.logging.format,
                },
                "directory": {
                    "users": dict(self.directory.users),
                    "roles": dict(self.directory.roles),
                    "assignments": {
                        k: list(v) for k, v in self.directory.assignments.items()
                    },
                },
            }
        }

    def save(self, path: Path) -> None:
        """Save configuration to YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)


# Global config instance
_config: RolegateConfig | None = None


def get_config(project_path: Path | None = None) -> RolegateConfig:
    """
    Get Rolegate configuration.

    Loads from .rolegate/config.yaml in project directory.
    Falls back to defaults if not found.
    """
    global _config

    if _config is not None:
        return _config

    if project_path is None:
        project_path = Path.cwd()

    config_path = project_path / ".rolegate" / "config.yaml"
    _config = RolegateConfig.from_file(config_path)

    return _config


def reset_config() -> None:
    """Clear the cached configuration."""
    global _config
    _config = None
