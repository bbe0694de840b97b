"""
Runtime Configuration

Central configuration for key loading, the HTTP server and logging.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

ENV_PREFIX = "SMS_VERIFIER_"

DEFAULT_CONFIG_PATHS = (
    Path("sms_verifier.json"),
    Path(".sms_verifier.json"),
    Path.home() / ".config" / "sms_verifier" / "config.json",
)


@dataclass
class KeyConfig:
    """Where to find the verification public key."""
    public_key_path: Optional[str] = "keys/public_key.pem"
    public_key_pem: Optional[str] = None  # inline PEM, wins over the path


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""
    host: str = "0.0.0.0"
    port: int = 8081


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the verifier service.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    keys: KeyConfig = field(default_factory=KeyConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - SMS_VERIFIER_PUBLIC_KEY_PATH: Path to the PEM public key
        - SMS_VERIFIER_PUBLIC_KEY: Inline PEM public key
        - SMS_VERIFIER_HOST: Bind host
        - SMS_VERIFIER_PORT: Bind port
        - SMS_VERIFIER_LOG_LEVEL: Log level
        - SMS_VERIFIER_LOG_FILE: Log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}PUBLIC_KEY_PATH"):
            overrides.setdefault("keys", {})["public_key_path"] = os.getenv(f"{ENV_PREFIX}PUBLIC_KEY_PATH")
        if os.getenv(f"{ENV_PREFIX}PUBLIC_KEY"):
            overrides.setdefault("keys", {})["public_key_pem"] = os.getenv(f"{ENV_PREFIX}PUBLIC_KEY")

        if os.getenv(f"{ENV_PREFIX}HOST"):
            overrides.setdefault("server", {})["host"] = os.getenv(f"{ENV_PREFIX}HOST")
        if os.getenv(f"{ENV_PREFIX}PORT"):
            overrides.setdefault("server", {})["port"] = int(os.getenv(f"{ENV_PREFIX}PORT", "8081"))

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load from a .yaml/.yml or JSON file, by extension."""
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        keys_data = data.get("keys", {})
        server_data = data.get("server", {})

        keys = KeyConfig(**keys_data) if keys_data else KeyConfig()
        server = ServerConfig(**server_data) if server_data else ServerConfig()

        return cls(
            keys=keys,
            server=server,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("keys", {}).items():
            setattr(new_config.keys, key, value)
        for key, value in overrides.get("server", {}).items():
            setattr(new_config.server, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary. Inline PEM is masked."""
        return {
            "keys": {
                "public_key_path": self.keys.public_key_path,
                "public_key_pem": "(inline)" if self.keys.public_key_pem else None,
            },
            "server": {
                "host": self.server.host,
                "port": self.server.port,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    Search order when no path is given:
      1. ./sms_verifier.json
      2. ./.sms_verifier.json
      3. ~/.config/sms_verifier/config.json

    Environment variables ALWAYS override config file values.
    """
    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
        logger.info(f"Loaded config from {config_path}")
        return config.with_env_overrides()

    config: RuntimeConfig | None = None
    for path in DEFAULT_CONFIG_PATHS:
        if path.exists():
            try:
                config = RuntimeConfig.from_json(path)
                logger.info(f"Loaded config from {path}")
                break
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "keys": {
    "public_key_path": "keys/public_key.pem"
  },
  "server": {
    "host": "0.0.0.0",
    "port": 8081
  },
  "log_level": "INFO",
  "log_file": null
}
"""
