"""
Runtime Configuration Module

Provides configuration loading and management for the verifier service.
"""

from .runtime import (
    KeyConfig,
    RuntimeConfig,
    ServerConfig,
    get_default_config_template,
    load_runtime_config,
)

__all__ = [
    "KeyConfig",
    "RuntimeConfig",
    "ServerConfig",
    "get_default_config_template",
    "load_runtime_config",
]
