"""
Tests for Configuration Manager

Tests the ConfigManager class for hierarchical configuration loading,
validation, and CLI integration.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from searchfilter.core.config.manager import ConfigManager
from searchfilter.core.config.models import AppConfig, FilterConfig
from searchfilter.core.exceptions import ConfigurationError, ErrorCode
from searchfilter.filters.keyword import Feature


@pytest.fixture
def clean_env(monkeypatch):
    """Remove SEARCHFILTER_ environment variables."""
    for name in ("INCLUDE_KEYWORDS", "EXCLUDE_KEYWORDS", "FEATURE", "VERBOSE", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(f"SEARCHFILTER_{name}", raising=False)


class TestConfigManager:
    """Test ConfigManager basic functionality."""

    def test_init_default(self):
        manager = ConfigManager()
        assert manager.config_file is None
        assert len(manager._config_paths) > 0

    def test_init_with_config_file(self):
        manager = ConfigManager(config_file="custom.yaml")
        assert manager.config_file == Path("custom.yaml")

    def test_load_config_defaults_only(self):
        manager = ConfigManager()

        with patch.object(manager, '_load_config_file', return_value=None):
            with patch.object(manager, '_load_env_config', return_value={}):
                config = manager.load_config()

        assert isinstance(config, AppConfig)
        assert config.filters.include_keywords == []
        assert manager.validate_config() == []

    def test_load_config_with_cli_args(self):
        manager = ConfigManager()

        with patch.object(manager, '_load_config_file', return_value=None):
            with patch.object(manager, '_load_env_config', return_value={}):
                config = manager.load_config({
                    'include': ['pdf'],
                    'exclude': ['mp4'],
                    'verbose': True,
                    'debug': None,
                    'unknown_flag': 'ignored',
                })

        assert config.filters.include_keywords == ['pdf']
        assert config.filters.exclude_keywords == ['mp4']
        assert config.verbose is True
        assert config.debug is False

    def test_load_yaml_file(self, tmp_path, clean_env):
        config_file = tmp_path / "searchfilter.yaml"
        config_file.write_text(yaml.dump({
            'log_level': 'info',
            'filters': {'include_keywords': ['pdf'], 'feature': 'file_extension'},
        }))

        config = ConfigManager(config_file).load_config()

        assert config.log_level == "INFO"
        assert config.filters.include_keywords == ['pdf']
        assert config.filters.feature is Feature.FILE_EXTENSION

    def test_load_json_file(self, tmp_path, clean_env):
        config_file = tmp_path / "searchfilter.json"
        config_file.write_text(json.dumps({'filters': {'exclude_keywords': ['cam']}}))

        config = ConfigManager(config_file).load_config()

        assert config.filters.exclude_keywords == ['cam']

    def test_precedence(self, tmp_path, monkeypatch, clean_env):
        """Test CLI args override env vars which override the file."""
        config_file = tmp_path / "searchfilter.yaml"
        config_file.write_text(yaml.dump({
            'verbose': False,
            'filters': {'include_keywords': ['pdf'], 'exclude_keywords': ['cam']},
        }))
        monkeypatch.setenv("SEARCHFILTER_INCLUDE_KEYWORDS", "epub, txt")
        monkeypatch.setenv("SEARCHFILTER_VERBOSE", "yes")

        config = ConfigManager(config_file).load_config({'exclude': ['mp4']})

        assert config.filters.include_keywords == ['epub', 'txt']
        assert config.filters.exclude_keywords == ['mp4']
        assert config.verbose is True

    def test_missing_explicit_file(self, tmp_path):
        manager = ConfigManager(tmp_path / "missing.yaml")

        with pytest.raises(ConfigurationError) as exc_info:
            manager.load_config()

        assert exc_info.value.error_code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("filters: [unclosed")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(config_file).load_config()

        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID_FORMAT

    def test_non_mapping_file(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- pdf\n- epub\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            ConfigManager(config_file).load_config()

    def test_validation_failure_wrapped(self, tmp_path, clean_env):
        config_file = tmp_path / "searchfilter.yaml"
        config_file.write_text(yaml.dump({'filters': {'include_keywords': ['two words']}}))

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(config_file).load_config()

        assert exc_info.value.error_code == ErrorCode.CONFIG_SCHEMA_VALIDATION
        assert exc_info.value.cause is not None

    def test_default_search_paths(self, tmp_path, monkeypatch, clean_env):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "searchfilter.yml").write_text(yaml.dump({'debug': True}))

        manager = ConfigManager()
        manager._config_paths = [tmp_path / "searchfilter.yml"]

        assert manager.load_config().debug is True


class TestEnvironmentConfig:
    """Test environment variable parsing."""

    def test_env_mapping(self, monkeypatch, clean_env):
        monkeypatch.setenv("SEARCHFILTER_EXCLUDE_KEYWORDS", "mp4,,avi")
        monkeypatch.setenv("SEARCHFILTER_DEBUG", "0")
        monkeypatch.setenv("SEARCHFILTER_LOG_LEVEL", "error")

        env_config = ConfigManager()._load_env_config("SEARCHFILTER_")

        assert env_config == {
            'filters': {'exclude_keywords': ['mp4', 'avi']},
            'debug': False,
            'log_level': 'error',
        }

    def test_parse_bool(self):
        assert ConfigManager._parse_bool("on") is True
        assert ConfigManager._parse_bool("nope") is False
        assert ConfigManager._parse_bool(True) is True

    def test_parse_list(self):
        assert ConfigManager._parse_list(" a , b ,") == ["a", "b"]
        assert ConfigManager._parse_list(["x"]) == ["x"]

    def test_deep_merge(self):
        merged = ConfigManager()._deep_merge(
            {'filters': {'include_keywords': ['a'], 'exclude_keywords': ['b']}, 'debug': False},
            {'filters': {'include_keywords': ['c']}, 'debug': True},
        )
        assert merged == {
            'filters': {'include_keywords': ['c'], 'exclude_keywords': ['b']},
            'debug': True,
        }


class TestConfigUtilities:
    """Test validation, schema and example generation."""

    def test_validate_without_config(self):
        assert ConfigManager().validate_config() == ["No configuration loaded"]

    def test_validate_warnings(self):
        config = AppConfig(
            debug=True,
            filters=FilterConfig(include_keywords=['pdf', 'pdf'])
        )
        warnings = ConfigManager().validate_config(config)

        assert "include_keywords contains duplicates" in warnings
        assert any("debug is enabled" in w for w in warnings)

    def test_validate_feature_without_keywords(self):
        config = AppConfig(filters=FilterConfig(feature=Feature.FILE_NAME))
        assert ConfigManager().validate_config(config) == [
            "filters.feature is set but no keywords are configured"
        ]

    def test_generate_schema(self, tmp_path):
        output = tmp_path / "schema.json"
        schema = ConfigManager().generate_schema(output)

        assert "filters" in schema["properties"]
        assert json.loads(output.read_text()) == schema

    @pytest.mark.parametrize("profile", ["default", "documents", "no-video"])
    def test_example_config_round_trip(self, tmp_path, clean_env, profile):
        output = tmp_path / f"{profile}.yaml"
        ConfigManager().create_example_config(output, profile=profile)

        config = ConfigManager(output).load_config()

        assert isinstance(config, AppConfig)
        if profile == "documents":
            assert config.filters.feature is Feature.FILE_EXTENSION
            assert "pdf" in config.filters.include_keywords
        elif profile == "no-video":
            assert "mp4" in config.filters.exclude_keywords
