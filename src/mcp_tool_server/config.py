"""Server configuration loader.

Loads server settings from a YAML file. Every setting has a default, so
the server also runs without a configuration file.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from mcp_tool_server.protocol.jsonrpc import MAX_MESSAGE_SIZE
from mcp_tool_server.protocol.lifecycle import MCP_PROTOCOL_VERSION

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigLoadError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


def expand_env_vars(value: str) -> str:
    """Expand environment variables in a string.

    Supports ${VAR_NAME} syntax. Unknown variables are left unchanged.

    Args:
        value: String potentially containing environment variable references.

    Returns:
        String with known environment variables expanded.
    """
    pattern = re.compile(r"\$\{([^}]+)\}")

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        if var_name == "HOME":
            return os.path.expanduser("~")
        return match.group(0)

    return pattern.sub(replacer, value)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigLoadError(f"'{name}' must be a mapping")
    return section


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration.

    Immutable settings loaded from config.yaml.
    """

    version: str = "1"

    # Identity reported by initialize
    server_name: str = "mcp-tool-server"
    server_version: str = "1.0.0"

    # Protocol settings
    protocol_version: str = MCP_PROTOCOL_VERSION
    max_message_size: int = MAX_MESSAGE_SIZE

    # Logging settings
    log_level: str = "INFO"
    audit_log_file: str = ""

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> ServerConfig:
        """Create a ServerConfig from a configuration dictionary.

        Args:
            config: Dictionary parsed from YAML configuration.

        Returns:
            ServerConfig instance with all settings populated.

        Raises:
            ConfigLoadError: If a setting has the wrong shape.
        """
        server = _section(config, "server")
        protocol = _section(config, "protocol")
        logging_cfg = _section(config, "logging")
        audit = _section(config, "audit")

        log_level = str(logging_cfg.get("level", cls.log_level)).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigLoadError(f"Unknown log level: {log_level}")

        max_message_size = protocol.get("max_message_size", cls.max_message_size)
        if isinstance(max_message_size, bool) or not isinstance(max_message_size, int):
            raise ConfigLoadError("protocol.max_message_size must be an integer")
        if max_message_size <= 0:
            raise ConfigLoadError("protocol.max_message_size must be positive")

        return cls(
            version=str(config.get("version", cls.version)),
            server_name=str(server.get("name", cls.server_name)),
            server_version=str(server.get("version", cls.server_version)),
            protocol_version=str(protocol.get("version", cls.protocol_version)),
            max_message_size=max_message_size,
            log_level=log_level,
            audit_log_file=expand_env_vars(str(audit.get("log_file", ""))),
        )

    @property
    def server_info(self) -> dict[str, str]:
        """Server identity in MCP serverInfo format."""
        return {"name": self.server_name, "version": self.server_version}


def load_config(path: Path) -> ServerConfig:
    """Load server configuration from a YAML file.

    Args:
        path: Path to the configuration YAML file.

    Returns:
        ServerConfig instance.

    Raises:
        ConfigLoadError: If the file cannot be found, parsed, or validated.
    """
    if not path.exists():
        raise ConfigLoadError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Failed to parse config YAML: {e}") from e

    if not isinstance(config, dict):
        raise ConfigLoadError("Config must be a YAML mapping")

    if "version" not in config:
        raise ConfigLoadError("Config must include 'version' field")

    return ServerConfig.from_dict(config)
