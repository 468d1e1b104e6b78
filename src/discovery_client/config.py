"""Client configuration with precedence resolution.

A :class:`ClientConfig` gathers the settings that are not part of a
discovery document: the application name reported to servers, an optional
developer key, the server URL services are rooted at, and HTTP transport
settings.

:func:`load_config` merges settings from several layers. Highest precedence
first:

1. Keyword overrides passed by the caller.
2. ``DISCOVERY_CLIENT_*`` environment variables.
3. A JSON config file (``path`` argument, else ``$DISCOVERY_CLIENT_CONFIG``).
4. Model defaults.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from discovery_client.exceptions import ConfigError
from discovery_client.models import (
    DEFAULT_APP_NAME,
    DEFAULT_SERVER_URL,
    FactoryParameters,
    Representation,
)

ENV_PREFIX = "DISCOVERY_CLIENT_"
CONFIG_PATH_ENV = f"{ENV_PREFIX}CONFIG"

_ENV_FIELDS = {
    "APP_NAME": "app_name",
    "DEVELOPER_KEY": "developer_key",
    "REPRESENTATION": "representation",
    "SERVER_URL": "server_url",
    "GZIP": "gzip_enabled",
    "TIMEOUT": "timeout",
    "VERIFY_SSL": "verify_ssl",
}


class ClientConfig(BaseModel):
    """Settings shared by every request a client sends."""

    app_name: str = Field(default=DEFAULT_APP_NAME, description="Reported in User-Agent")
    developer_key: Optional[str] = Field(default=None, description="API key sent as key=")
    representation: Representation = Representation.JSON
    server_url: str = DEFAULT_SERVER_URL
    gzip_enabled: bool = Field(default=True, description="Compress bodies, accept gzip")
    timeout: float = Field(default=30.0, description="Transport timeout in seconds")
    verify_ssl: bool = True
    follow_redirects: bool = True

    def factory_parameters(self, base_path: Optional[str] = None) -> FactoryParameters:
        """Return the :class:`FactoryParameters` matching this configuration."""
        return FactoryParameters(
            server_url=self.server_url,
            base_path=base_path,
            gzip_enabled=self.gzip_enabled,
        )


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> ClientConfig:
    """Resolve the effective :class:`ClientConfig`.

    Args:
        path: Optional JSON config file. Falls back to
            ``$DISCOVERY_CLIENT_CONFIG`` when not given.
        **overrides: Field values that win over every other layer. ``None``
            values are ignored.

    Returns:
        The merged configuration.

    Raises:
        ConfigError: If the config file cannot be read or a value is invalid.
    """
    merged: dict[str, Any] = {}

    file_path = path or os.environ.get(CONFIG_PATH_ENV)
    if file_path:
        merged.update(_read_config_file(Path(file_path)))

    merged.update(_read_env())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ClientConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def _read_env() -> dict[str, str]:
    values: dict[str, str] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        value = os.environ.get(ENV_PREFIX + suffix)
        if value is not None and value != "":
            values[field_name] = value
    return values
