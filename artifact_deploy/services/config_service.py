"""Configuration loading service"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Any, Union

import jsonschema
import yaml

from ..api.exceptions import ConfigurationError
from ..constants import DEFAULT_CONFIG_FILE, ENV_CONFIG_PATH
from ..models.config import DeployConfig
from ..plugins.base import HookPoint

logger = logging.getLogger(__name__)

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "artifact_location", "version", "deploy_to"],
    "additionalProperties": False,
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "artifact_location": {"type": "string", "minLength": 1},
        "version": {"type": "string", "minLength": 1},
        "checksum": {"type": ["string", "null"]},
        "checksum_algorithm": {"type": "string"},
        "deploy_to": {"type": "string", "minLength": 1},
        "current_path": {"type": ["string", "null"]},
        "shared_path": {"type": ["string", "null"]},
        "cache_root": {"type": ["string", "null"]},
        "owner": {"type": ["string", "null"]},
        "group": {"type": ["string", "null"]},
        "keep": {"type": "integer", "minimum": 0},
        "force": {"type": "boolean"},
        "is_tarball": {"type": "boolean"},
        "should_migrate": {"type": "boolean"},
        "symlinks": {
            "type": "object",
            "additionalProperties": {"type": "string"}
        },
        "shared_directories": {
            "type": "array",
            "items": {"type": "string"}
        },
        "hooks": {
            "type": "object",
            "propertyNames": {"enum": [hp.value for hp in HookPoint]},
            "additionalProperties": {"type": ["string", "null"]}
        },
        "repository": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "url": {"type": "string"},
                "repository": {"type": "string"},
                "username": {"type": ["string", "null"]},
                "password": {"type": ["string", "null"]},
                "timeout": {"type": "number", "exclusiveMinimum": 0}
            }
        },
        "http": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "timeout": {"type": "number", "exclusiveMinimum": 0},
                "headers": {
                    "type": "object",
                    "additionalProperties": {"type": "string"}
                }
            }
        },
        "lock": {"type": "boolean"},
        "lock_timeout": {"type": "number", "minimum": 0}
    }
}


class ConfigService:
    """Service for loading the deployment configuration"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize config service

        Args:
            config_path: Configuration file; falls back to
                $ARTIFACT_DEPLOY_CONFIG, then ./artifact-deploy.yaml
        """
        self.config_path = self.find_config_path(config_path)

    @staticmethod
    def find_config_path(config_path: Optional[Union[str, Path]] = None) -> Path:
        if config_path:
            return Path(config_path)
        env_path = os.environ.get(ENV_CONFIG_PATH)
        if env_path:
            return Path(env_path)
        return Path.cwd() / DEFAULT_CONFIG_FILE

    def read(self) -> Dict[str, Any]:
        """Raw configuration mapping, environment variables expanded

        A missing file yields an empty mapping so that every value can come
        from overrides.
        """
        if not self.config_path.exists():
            logger.debug(f"No configuration file at {self.config_path}")
            return {}

        try:
            with open(self.config_path, 'r') as f:
                content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration {self.config_path}: {e}") from e

        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration {self.config_path} must be a mapping")

        return data

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> DeployConfig:
        """Load, merge and validate the configuration

        Args:
            overrides: Values that replace file values (None entries ignored)

        Returns:
            Validated deployment configuration

        Raises:
            ConfigurationError: If the file is invalid or a required key is missing
        """
        data = self.read()
        for key, value in (overrides or {}).items():
            if value is not None:
                data[key] = value

        self.validate(data)
        logger.debug(f"Loaded configuration for {data['name']}")
        return DeployConfig.from_dict(data)

    @staticmethod
    def validate(data: Dict[str, Any]) -> None:
        """
        Raises:
            ConfigurationError: If ``data`` does not match the schema
        """
        try:
            jsonschema.validate(data, CONFIG_SCHEMA)
        except jsonschema.ValidationError as e:
            location = ".".join(str(p) for p in e.absolute_path) or "configuration"
            if list(e.absolute_path) == ["version"] and e.validator == "type":
                raise ConfigurationError(
                    f"Invalid version: {e.instance!r} is not a string, quote it in YAML (version: \"2.10\")"
                ) from e
            raise ConfigurationError(f"Invalid {location}: {e.message}") from e

    def save_config(self, config: DeployConfig) -> Path:
        """Write a configuration file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
        logger.info(f"Configuration saved to {self.config_path}")
        return self.config_path
