"""
Unit tests for ConfigLoader class.

This module contains tests for configuration loading, shared-section merging,
validation, and error handling.
"""

import json
import tempfile
from pathlib import Path

import pytest

from src.config import ConfigLoader
from src.exceptions import FieldOpsConfigurationError, FieldOpsValidationError


REPO_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


class TestConfigLoader:
    """Test suite for ConfigLoader class."""

    @pytest.fixture
    def temp_config_dir(self):
        """Create a temporary directory for configuration files."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yield Path(temp_dir)

    @pytest.fixture
    def valid_environment_config(self):
        """Valid environment configuration with a shared authorization section."""
        return {
            "shared": {
                "authorization": {
                    "bypass_roles": ["Supervisor"],
                    "boundary_fetch_attempts": 3
                }
            },
            "environments": {
                "development": {
                    "logging": {"level": "DEBUG", "format": "standard"},
                    "authorization": {"geometry_engine": "planar"}
                },
                "production": {
                    "logging": {"level": "INFO", "format": "json"},
                    "authorization": {
                        "geometry_engine": "shapely",
                        "boundary_fetch_attempts": 5
                    }
                }
            },
            "validation": {
                "supported_environments": ["development", "production"]
            }
        }

    def _write_config(self, config_dir: Path, data) -> ConfigLoader:
        with open(config_dir / "environment_config.json", "w") as f:
            json.dump(data, f)
        return ConfigLoader(str(config_dir))

    def test_default_config_dir(self):
        """Test that the loader defaults to the config/ directory."""
        loader = ConfigLoader()

        assert loader.config_dir == Path("config")

    def test_load_development_config(self, temp_config_dir, valid_environment_config):
        """Test loading an environment merges shared defaults."""
        loader = self._write_config(temp_config_dir, valid_environment_config)

        config = loader.load_environment_config("development")

        assert config["logging"]["level"] == "DEBUG"
        assert config["authorization"] == {
            "geometry_engine": "planar",
            "bypass_roles": ["Supervisor"],
            "boundary_fetch_attempts": 3
        }
        assert config["_validation"]["supported_environments"] == ["development", "production"]

    def test_environment_values_override_shared(self, temp_config_dir, valid_environment_config):
        """Test that environment-specific keys win over shared keys."""
        loader = self._write_config(temp_config_dir, valid_environment_config)

        authorization = loader.get_section("production", "authorization")

        assert authorization["boundary_fetch_attempts"] == 5
        assert authorization["geometry_engine"] == "shapely"
        assert authorization["bypass_roles"] == ["Supervisor"]

    def test_shared_section_fills_missing_environment_section(self, temp_config_dir, valid_environment_config):
        """Test that a section only present in shared is still available."""
        del valid_environment_config["environments"]["development"]["authorization"]
        loader = self._write_config(temp_config_dir, valid_environment_config)

        authorization = loader.get_section("development", "authorization")

        assert authorization["boundary_fetch_attempts"] == 3

    def test_shared_config_is_not_mutated_between_environments(self, temp_config_dir, valid_environment_config):
        """Test that merging for one environment does not leak into another."""
        loader = self._write_config(temp_config_dir, valid_environment_config)

        loader.load_environment_config("production")
        development = loader.get_section("development", "authorization")

        assert development["boundary_fetch_attempts"] == 3
        assert development["geometry_engine"] == "planar"

    def test_get_logging_config(self, temp_config_dir, valid_environment_config):
        """Test retrieving the logging section."""
        loader = self._write_config(temp_config_dir, valid_environment_config)

        assert loader.get_logging_config("production") == {"level": "INFO", "format": "json"}

    def test_missing_section(self, temp_config_dir, valid_environment_config):
        """Test that asking for an unknown section raises a configuration error."""
        loader = self._write_config(temp_config_dir, valid_environment_config)

        with pytest.raises(FieldOpsConfigurationError, match="Section 'storage' not found"):
            loader.get_section("development", "storage")

    def test_missing_config_file(self, temp_config_dir):
        """Test error when the configuration file does not exist."""
        loader = ConfigLoader(str(temp_config_dir))

        with pytest.raises(FieldOpsConfigurationError, match="Environment configuration file not found"):
            loader.load_environment_config("development")

    def test_invalid_json(self, temp_config_dir):
        """Test error when the configuration file is not valid JSON."""
        (temp_config_dir / "environment_config.json").write_text("{ invalid json")
        loader = ConfigLoader(str(temp_config_dir))

        with pytest.raises(FieldOpsConfigurationError, match="Invalid JSON"):
            loader.load_environment_config("development")

    def test_missing_environments_key(self, temp_config_dir):
        """Test validation error when 'environments' is absent."""
        loader = self._write_config(temp_config_dir, {"shared": {}})

        with pytest.raises(FieldOpsValidationError, match="Missing 'environments' key"):
            loader.load_environment_config("development")

    def test_unknown_environment(self, temp_config_dir, valid_environment_config):
        """Test validation error for an environment that is not configured."""
        loader = self._write_config(temp_config_dir, valid_environment_config)

        with pytest.raises(FieldOpsValidationError, match="Environment 'staging' not found"):
            loader.load_environment_config("staging")

    def test_unsupported_environment(self, temp_config_dir, valid_environment_config):
        """Test validation error for a configured but unsupported environment."""
        valid_environment_config["environments"]["sandbox"] = valid_environment_config["environments"]["development"]
        loader = self._write_config(temp_config_dir, valid_environment_config)

        with pytest.raises(FieldOpsValidationError, match="not a supported environment"):
            loader.load_environment_config("sandbox")

    def test_missing_required_key(self, temp_config_dir, valid_environment_config):
        """Test validation error when a required section is missing everywhere."""
        del valid_environment_config["environments"]["development"]["logging"]
        loader = self._write_config(temp_config_dir, valid_environment_config)

        with pytest.raises(FieldOpsValidationError, match="Missing required key 'logging'"):
            loader.load_environment_config("development")

    def test_caching_and_clear_cache(self, temp_config_dir, valid_environment_config):
        """Test that loaded configuration is cached until clear_cache is called."""
        loader = self._write_config(temp_config_dir, valid_environment_config)
        first = loader.load_environment_config("development")

        valid_environment_config["environments"]["development"]["logging"]["level"] = "ERROR"
        self._write_config(temp_config_dir, valid_environment_config)

        assert loader.load_environment_config("development") is first

        loader.clear_cache()

        assert loader.load_environment_config("development")["logging"]["level"] == "ERROR"

    def test_repository_config_is_valid(self):
        """Test that the shipped configuration loads for every environment."""
        loader = ConfigLoader(str(REPO_CONFIG_DIR))

        for environment in ("development", "production"):
            config = loader.load_environment_config(environment)
            assert config["authorization"]["geometry_engine"] == "planar"
            assert "level" in config["logging"]
