"""
Config Module - Black Box Interface

Purpose: Server configuration management
Interface: load_config(), ServerConfig
Hidden: Config sources, validation logic, environment parsing
"""

from .provider import (
    DEFAULT_IDLE_TIMEOUT_SECONDS,
    LOG_LEVELS,
    EnvConfigProvider,
    ServerConfig,
    load_config,
)

__all__ = [
    "ServerConfig",
    "EnvConfigProvider",
    "load_config",
    "DEFAULT_IDLE_TIMEOUT_SECONDS",
    "LOG_LEVELS",
]
