"""
Configuration management for the Fictioneers SDK.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax, and
FICTIONEERS_* environment variables that override values from the file.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from fictioneers.exceptions import InvalidConfigurationError
from fictioneers.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_API_VERSION = "1"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "FICTIONEERS_API_KEY": ("api", "api_key"),
    "FICTIONEERS_USER_ID": ("api", "user_id"),
    "FICTIONEERS_API_VERSION": ("api", "api_version"),
    "FICTIONEERS_BASE_URL": ("api", "base_url"),
}


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Examples:
        "${FICTIONEERS_SECRET}" -> value of FICTIONEERS_SECRET env var
        "${API_VERSION:1}" -> value of API_VERSION or "1" if not set
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class ApiConfig:
    """Remote API connection settings."""

    api_key: Optional[str] = None
    user_id: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    base_url: Optional[str] = None  # derived from api_version when unset
    timeout: float = DEFAULT_TIMEOUT_SECONDS


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    format: str = "console"  # "console" or "json"


@dataclass
class FictioneersConfig:
    """Main SDK configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.fictioneers/config.yaml")


def get_default_config() -> FictioneersConfig:
    """Get default configuration with sensible defaults."""
    return FictioneersConfig(api=ApiConfig(), logging=LoggingConfig())


def apply_env_overrides(config: FictioneersConfig) -> FictioneersConfig:
    """
    Apply FICTIONEERS_* environment variables on top of a loaded configuration.

    Args:
        config: Configuration to update in place

    Returns:
        The same configuration object, for chaining
    """
    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            setattr(getattr(config, section), key, value)
            logger.debug(f"Applied {env_var} override to {section}.{key}")
    return config


def load_config(config_path: Optional[str] = None) -> FictioneersConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration (with
    environment overrides applied). If config file is malformed or invalid,
    raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        FictioneersConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(str(config_path))

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        config = apply_env_overrides(get_default_config())
        _validate_config(config)
        return config

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        )

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        config_data = {}

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at the top level"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = apply_env_overrides(_build_config_from_dict(config_data))
        _validate_config(config)
    except InvalidConfigurationError:
        raise
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _build_config_from_dict(config_data: Dict[str, Any]) -> FictioneersConfig:
    """
    Build FictioneersConfig from dictionary loaded from YAML.

    Merges user configuration with defaults. Empty strings produced by
    unset ${ENV_VAR} references are treated as missing values.
    """
    default_config = get_default_config()

    api_data = config_data.get('api') or {}
    logging_data = config_data.get('logging') or {}

    api = ApiConfig(
        api_key=api_data.get('api_key') or default_config.api.api_key,
        user_id=api_data.get('user_id') or default_config.api.user_id,
        api_version=str(api_data.get('api_version') or default_config.api.api_version),
        base_url=api_data.get('base_url') or default_config.api.base_url,
        timeout=float(api_data.get('timeout', default_config.api.timeout)),
    )

    logging_config = LoggingConfig(
        level=logging_data.get('level', default_config.logging.level),
        file=logging_data.get('file', default_config.logging.file) or "",
        format=logging_data.get('format', default_config.logging.format),
    )

    return FictioneersConfig(api=api, logging=logging_config)


def _validate_config(config: FictioneersConfig) -> None:
    """
    Validate configuration values.

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if not str(config.api.api_version).strip():
        raise InvalidConfigurationError("api_version cannot be empty")

    if config.api.timeout <= 0:
        raise InvalidConfigurationError(
            f"timeout must be positive, got {config.api.timeout}"
        )

    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.logging.level.upper() not in valid_log_levels:
        raise InvalidConfigurationError(
            f"logging level must be one of {valid_log_levels}, "
            f"got '{config.logging.level}'"
        )

    valid_formats = ["console", "json"]
    if config.logging.format not in valid_formats:
        raise InvalidConfigurationError(
            f"logging format must be one of {valid_formats}, "
            f"got '{config.logging.format}'"
        )
