"""Server configuration — pydantic models loaded from YAML.

Example ``toolrpc.yaml``::

    port: 8080
    path: /mcp
    request_timeout: 60
    service:
      url: https://services.gisblox.com/v1
      key: ${GISBLOX_SERVICE_KEY}
    telemetry:
      enabled: false
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from toolrpc.errors import ConfigError
from toolrpc.rpc.dispatcher import DEFAULT_PROTOCOL_VERSION
from toolrpc.rpc.models import ServerInfo
from toolrpc.services.client import DEFAULT_SERVICE_URL

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ServiceSettings(BaseModel):
    """Upstream GIS web-service connection."""

    url: str = DEFAULT_SERVICE_URL
    key: str = ""
    timeout: float = 30.0


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    console: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    """Top-level server configuration."""

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    path: str = "/mcp"
    environment: str = "production"
    protocol_version: str = DEFAULT_PROTOCOL_VERSION
    server: ServerInfo = Field(default_factory=ServerInfo)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    request_timeout: float | None = Field(default=None, gt=0)
    log_level: str = "INFO"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("path")
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        if not value.startswith("/"):
            value = "/" + value
        if len(value) > 1 and value.endswith("/"):
            value = value[:-1]
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"log_level must be one of {sorted(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level


class ConfigLoader:
    """Load and validate a YAML config file into a :class:`ServerConfig`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerConfig:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  An empty file
        yields the defaults.

        Raises:
            ConfigError: On read errors, YAML parse errors or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")

        try:
            return ServerConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_config(path: str | Path | None = None) -> ServerConfig:
    """Load *path* when given, otherwise return the defaults."""
    if path is None:
        return ServerConfig()
    return ConfigLoader(Path(path)).load()
