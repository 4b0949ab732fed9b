"""
Configuration loader for the Field Operations Geofence system.

This module provides the ConfigLoader class that handles loading and validating
JSON configuration files for multi-environment deployments.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional
from functools import lru_cache

from ..exceptions import FieldOpsConfigurationError, FieldOpsValidationError
from ..utils import get_logger


REQUIRED_ENVIRONMENT_KEYS = ["logging", "authorization"]


class ConfigLoader:
    """
    Configuration loader and validator for the field operations system.
    
    This class handles loading environment-specific configuration from JSON files,
    merging shared sections and validating required keys.
    """
    
    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the configuration loader.
        
        Args:
            config_dir: Directory containing configuration files (defaults to 'config/')
        """
        self.logger = get_logger(__name__)
        self.config_dir = Path(config_dir) if config_dir else Path("config")
    
    @lru_cache(maxsize=2)
    def load_environment_config(self, environment: str) -> Dict[str, Any]:
        """
        Load configuration for a specific environment.
        
        Args:
            environment: Environment name (development/production)
            
        Returns:
            Dictionary containing environment-specific configuration merged with shared config
            
        Raises:
            FieldOpsConfigurationError: If configuration cannot be loaded
            FieldOpsValidationError: If the configuration structure is invalid
        """
        env_config_path = self.config_dir / "environment_config.json"
        
        if not env_config_path.exists():
            raise FieldOpsConfigurationError(
                f"Environment configuration file not found: {env_config_path}"
            )
        
        try:
            with open(env_config_path, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise FieldOpsConfigurationError(
                f"Invalid JSON in environment configuration: {str(e)}",
                {"path": str(env_config_path)}
            )
        
        self._validate_environment_config(config_data, environment)
        
        env_config = {
            key: (value.copy() if isinstance(value, dict) else value)
            for key, value in config_data["environments"][environment].items()
        }
        
        # Shared sections are defaults; environment-specific keys win
        for key, value in config_data.get("shared", {}).items():
            if isinstance(value, dict) and isinstance(env_config.get(key), dict):
                merged = value.copy()
                merged.update(env_config[key])
                env_config[key] = merged
            elif key not in env_config:
                env_config[key] = value.copy() if isinstance(value, dict) else value
        
        env_config["_validation"] = config_data.get("validation", {})
        
        self.logger.info(f"Loaded configuration for environment: {environment}")
        return env_config
    
    def get_section(self, environment: str, section: str) -> Dict[str, Any]:
        """
        Get a named section of the merged environment configuration.
        
        Args:
            environment: Environment name
            section: Section key (e.g. 'logging', 'authorization')
            
        Returns:
            Copy of the section dictionary
            
        Raises:
            FieldOpsConfigurationError: If the section is not present
        """
        env_config = self.load_environment_config(environment)
        
        if section not in env_config:
            raise FieldOpsConfigurationError(
                f"Section '{section}' not found in {environment} configuration"
            )
        
        return dict(env_config[section])
    
    def get_logging_config(self, environment: str) -> Dict[str, Any]:
        """Get the logging section for an environment."""
        return self.get_section(environment, "logging")
    
    def _validate_environment_config(self, config_data: Dict[str, Any], environment: str) -> None:
        """
        Validate environment configuration structure.
        
        Args:
            config_data: Configuration data to validate
            environment: Environment name to validate
            
        Raises:
            FieldOpsValidationError: If configuration is invalid
        """
        if "environments" not in config_data:
            raise FieldOpsValidationError("Missing 'environments' key in configuration")
        
        if environment not in config_data["environments"]:
            available_envs = list(config_data["environments"].keys())
            raise FieldOpsValidationError(
                f"Environment '{environment}' not found. Available: {available_envs}"
            )
        
        supported = config_data.get("validation", {}).get("supported_environments")
        if supported and environment not in supported:
            raise FieldOpsValidationError(
                f"Environment '{environment}' is not a supported environment",
                {"supported": supported}
            )
        
        env_config = config_data["environments"][environment]
        shared_config = config_data.get("shared", {})
        
        for key in REQUIRED_ENVIRONMENT_KEYS:
            if key not in env_config and key not in shared_config:
                raise FieldOpsValidationError(
                    f"Missing required key '{key}' in {environment} configuration"
                )
    
    def clear_cache(self) -> None:
        """Clear the configuration cache."""
        self.load_environment_config.cache_clear()
