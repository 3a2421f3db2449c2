"""
Configuration management for the Fictioneers SDK.

Handles loading and validation of configuration files.
"""

from fictioneers.config.settings import (
    ApiConfig,
    FictioneersConfig,
    LoggingConfig,
    apply_env_overrides,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "ApiConfig",
    "FictioneersConfig",
    "LoggingConfig",
    "apply_env_overrides",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
