"""Configuration management for the resource handlers."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from qbusiness_resources.config.schemas import AppConfig, BackoffPolicyConfig
from qbusiness_resources.config.utils.env_expansion import expand_config_env_vars
from qbusiness_resources.domain.base.ports import ResourceDefinitionPort
from qbusiness_resources.domain.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "QBR_CONFIG_FILE"
LOG_LEVEL_ENV = "QBR_LOG_LEVEL"
REGION_ENV = "AWS_REGION"


class ConfigurationManager:
    """
    Single source of configuration for the resource handlers.

    Configuration is read from an optional JSON or YAML file, environment
    variables referenced in it are expanded, and a few environment overrides
    are applied on top before validation. Loading is lazy.
    """

    def __init__(self, config_file: Optional[str] = None):
        self._config_file = config_file or os.environ.get(CONFIG_FILE_ENV)
        self._app_config: Optional[AppConfig] = None
        self.logging_configured = False

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        config_data = self._load_file(self._config_file) if self._config_file else {}
        config_data = expand_config_env_vars(config_data)
        config_data = self._apply_environment_overrides(config_data)

        try:
            return AppConfig(**config_data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _load_file(self, config_file: str) -> Dict[str, Any]:
        """
        Load configuration data from a JSON or YAML file.

        Raises:
            ConfigurationError: If the file is missing or cannot be parsed
        """
        path = Path(config_file)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_file}")

        try:
            with path.open() as f:
                if path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse configuration file {config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_file} must contain a mapping")

        logger.debug("Loaded configuration from %s", config_file)
        return data

    def _apply_environment_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        config_data = dict(config_data)
        if os.environ.get(LOG_LEVEL_ENV):
            config_data["logging"] = dict(config_data.get("logging") or {})
            config_data["logging"]["level"] = os.environ[LOG_LEVEL_ENV]
        if os.environ.get(REGION_ENV):
            config_data["aws"] = dict(config_data.get("aws") or {})
            config_data["aws"]["region"] = os.environ[REGION_ENV]
        return config_data

    def resolve_definition(self, definition: ResourceDefinitionPort) -> ResourceDefinitionPort:
        """
        Apply configured backoff overrides to a resource definition.

        Operations without an override keep the definition's defaults. An
        operation the resource type never stabilizes cannot gain a policy.
        """
        overrides = self.app_config.backoff.get(definition.type_name)
        if overrides is None:
            return definition

        def _policy(config: Optional[BackoffPolicyConfig], default):
            if config is None or default is None:
                return None
            try:
                return config.to_policy()
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid backoff configuration for {definition.type_name}: {e}"
                ) from e

        return definition.with_policies(
            create_policy=_policy(overrides.create, definition.create_policy),
            update_policy=_policy(overrides.update, definition.update_policy),
            delete_policy=_policy(overrides.delete, definition.delete_policy),
        )

    def reload(self) -> None:
        """Reload configuration from sources on next access."""
        self._app_config = None
        self.logging_configured = False
