"""
Tests for Rolegate configuration loading.

Tests cover defaults, YAML loading, validation and the cached accessor.
"""

import pytest
import yaml

from rolegate.config import (
    DEFAULT_LOG_FORMAT,
    AuditConfig,
    ConfigError,
    DirectoryConfig,
    RolegateConfig,
    get_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    reset_config()
    yield
    reset_config()


SAMPLE = {
    "rolegate": {
        "audit": {"sink": "memory", "logger_name": "acme.audit"},
        "logging": {"level": "debug"},
        "directory": {
            "users": {"alice": "u-alice", "bob": "u-bob"},
            "roles": {"reader": "r-reader", "editor": "r-editor"},
            "assignments": {"alice": ["reader"]},
        },
    }
}


class TestDefaults:
    """Tests for default configuration."""

    def test_defaults(self):
        """Test default values."""
        config = RolegateConfig()
        assert config.audit.sink == "logging"
        assert config.audit.logger_name == "rolegate.audit"
        assert config.logging.level == "INFO"
        assert config.logging.format == DEFAULT_LOG_FORMAT
        assert config.directory.users == {}

    def test_missing_file_returns_defaults(self, tmp_path):
        """Test loading a missing file returns defaults."""
        config = RolegateConfig.from_file(tmp_path / "missing.yaml")
        assert config == RolegateConfig()


class TestFromDict:
    """Tests for building config from dictionaries."""

    def test_from_dict(self):
        """Test parsing every section."""
        config = RolegateConfig.from_dict(SAMPLE["rolegate"])
        assert config.audit.sink == "memory"
        assert config.audit.logger_name == "acme.audit"
        assert config.logging.level == "debug"
        assert config.directory.users["bob"] == "u-bob"
        assert config.directory.assignments == {"alice": ["reader"]}

    def test_empty_sections_use_defaults(self):
        """Test null sections fall back to defaults."""
        config = RolegateConfig.from_dict({"audit": None, "directory": None})
        assert config.audit == AuditConfig()
        assert config.directory == DirectoryConfig()

    def test_round_trip(self):
        """Test to_dict output loads back to the same config."""
        config = RolegateConfig.from_dict(SAMPLE["rolegate"])
        again = RolegateConfig.from_dict(config.to_dict()["rolegate"])
        assert again == config


class TestValidation:
    """Tests for configuration validation."""

    def test_unknown_sink(self):
        """Test an unknown audit sink is rejected."""
        with pytest.raises(ConfigError, match="Unknown audit sink"):
            RolegateConfig.from_dict({"audit": {"sink": "kafka"}})

    def test_unknown_log_level(self):
        """Test an unknown log level is rejected."""
        with pytest.raises(ConfigError, match="Unknown log level"):
            RolegateConfig.from_dict({"logging": {"level": "chatty"}})

    def test_assignment_for_unknown_user(self):
        """Test assignments must reference configured users."""
        with pytest.raises(ConfigError, match="unknown user"):
            RolegateConfig.from_dict(
                {"directory": {"roles": {"reader": "r1"}, "assignments": {"carol": ["reader"]}}}
            )

    def test_assignment_for_unknown_role(self):
        """Test assignments must reference configured roles."""
        with pytest.raises(ConfigError, match="unknown roles: ghost"):
            RolegateConfig.from_dict(
                {"directory": {"users": {"alice": "u1"}, "assignments": {"alice": ["ghost"]}}}
            )

    def test_config_error_is_value_error(self):
        """Test ConfigError can be caught as ValueError."""
        assert issubclass(ConfigError, ValueError)


class TestFiles:
    """Tests for reading and writing config files."""

    def test_from_file_with_root_key(self, tmp_path):
        """Test loading a file with a top-level rolegate key."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump(SAMPLE))
        config = RolegateConfig.from_file(path)
        assert config.audit.sink == "memory"

    def test_from_file_without_root_key(self, tmp_path):
        """Test loading a bare mapping."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump(SAMPLE["rolegate"]))
        config = RolegateConfig.from_file(path)
        assert config.directory.roles["editor"] == "r-editor"

    def test_empty_file(self, tmp_path):
        """Test an empty file yields defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert RolegateConfig.from_file(path) == RolegateConfig()

    def test_save_and_reload(self, tmp_path):
        """Test saving creates parent directories and reloads."""
        config = RolegateConfig.from_dict(SAMPLE["rolegate"])
        path = tmp_path / "nested" / "config.yaml"
        config.save(path)
        assert path.exists()
        assert RolegateConfig.from_file(path) == config

    def test_get_config_reads_project_dir(self, tmp_path):
        """Test get_config loads .rolegate/config.yaml and caches it."""
        config_dir = tmp_path / ".rolegate"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text(yaml.dump(SAMPLE))

        first = get_config(tmp_path)
        second = get_config(tmp_path / "elsewhere")

        assert first.audit.sink == "memory"
        assert second is first

    def test_reset_config(self, tmp_path):
        """Test reset_config clears the cache."""
        first = get_config(tmp_path)
        reset_config()
        assert get_config(tmp_path) is not first
