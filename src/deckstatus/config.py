"""Configuration loading for deckstatus."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_FILE = "deckstatus.yaml"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class ServerConfig:
    """HTTP bridge settings."""

    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class HttpConfig:
    """Outbound REST settings.

    Attributes:
        timeout: Upper bound in seconds on each status fetch. None disables it.
    """

    timeout: float | None = 30.0


@dataclass
class LoggingConfig:
    """Logging settings (see deckstatus.logging.setup_logging)."""

    dir: str | None = None
    level: str | None = None
    console: bool = True


@dataclass
class ButtonConfig:
    """A button attached at startup."""

    context: str
    action: str
    settings: dict[str, Any] = field(default_factory=dict)


@dataclass
class DeckStatusConfig:
    """Top-level deckstatus configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    buttons: list[ButtonConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeckStatusConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a section has the wrong shape.
        """
        server_data = _section(data, "server")
        http_data = _section(data, "http")
        logging_data = _section(data, "logging")

        try:
            server = ServerConfig(
                host=str(server_data.get("host", "127.0.0.1")),
                port=int(server_data.get("port", 8765)),
            )
            timeout = http_data.get("timeout", 30.0)
            http = HttpConfig(timeout=float(timeout) if timeout is not None else None)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in configuration: {e}") from e

        logging_config = LoggingConfig(
            dir=logging_data.get("dir"),
            level=logging_data.get("level"),
            console=bool(logging_data.get("console", True)),
        )

        buttons_data = data.get("buttons") or []
        if not isinstance(buttons_data, list):
            raise ConfigError("'buttons' must be a list")

        buttons = []
        seen: set[str] = set()
        for i, entry in enumerate(buttons_data):
            if not isinstance(entry, dict):
                raise ConfigError(f"Button #{i + 1} must be a mapping")
            missing = [f for f in ("context", "action") if not entry.get(f)]
            if missing:
                raise ConfigError(f"Button #{i + 1} missing required fields: {', '.join(missing)}")
            context = str(entry["context"])
            if context in seen:
                raise ConfigError(f"Duplicate button context: {context}")
            seen.add(context)
            settings = entry.get("settings") or {}
            if not isinstance(settings, dict):
                raise ConfigError(f"Button {context}: 'settings' must be a mapping")
            buttons.append(
                ButtonConfig(context=context, action=str(entry["action"]), settings=settings)
            )

        return cls(server=server, http=http, logging=logging_config, buttons=buttons)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return value


def load_config(config_path: Path | str) -> DeckStatusConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to deckstatus.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return DeckStatusConfig.from_dict(data)


def resolve_config_path(config_path: Path | str | None = None) -> Path | None:
    """Pick the configuration file to load.

    An explicit path wins, then DECKSTATUS_CONFIG, then deckstatus.yaml in
    the current directory. Returns None when nothing is found.
    """
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get("DECKSTATUS_CONFIG")
    if env_path:
        return Path(env_path)
    default = Path.cwd() / DEFAULT_CONFIG_FILE
    return default if default.exists() else None
