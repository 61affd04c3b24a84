"""Environment variable expansion for configuration values."""

import os
import re
from typing import Any, Dict

# ${VAR:default} is handled first; os.path.expandvars covers $VAR and ${VAR}.
_DEFAULT_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*):([^}]*)\}")


def _expand_string(value: str) -> str:
    value = _DEFAULT_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(2)), value)
    return os.path.expandvars(value)


def expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Unset variables without a default are left as written.

    Args:
        value: String, dict, list or any other configuration value

    Returns:
        Value with environment variables expanded
    """
    if isinstance(value, str):
        return _expand_string(value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(v) for v in value]
    return value


def expand_config_env_vars(config: Dict[str, Any]) -> Dict[str, Any]:
    """Expand environment variables throughout a configuration dictionary."""
    return expand_env_vars(config)
