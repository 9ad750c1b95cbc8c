"""Settings for a sync run and the YAML loader that produces them."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from blocksync.catalog.naming import vendor_of
from blocksync.runtime.errors import ConfigError


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class SyncSettings(BaseModel):
    """Everything a sync run needs besides the catalog and the blocks.

    The defaults describe the AWS Bedrock block collection; a settings file
    only has to name what differs.
    """

    blocks_dir: Path = Path("blocks/public")
    region: str = "us-east-1"
    vendor_prefixes: list[str] = Field(
        default_factory=lambda: ["anthropic.claude", "openai.gpt-oss"]
    )
    provider: str = "bedrock"
    schema_version: str = "v1"
    env: dict[str, str] = Field(
        default_factory=lambda: {
            "region": "BEDROCK_AWS_REGION",
            "profile": "BEDROCK_AWS_PROFILE",
        }
    )
    roles: list[str] = Field(default_factory=lambda: ["chat", "apply", "edit"])
    capability: str = "tool_use"
    aws_command: str = "aws"
    catalog_timeout: float | None = None
    version_file: Path | None = None
    commit: bool = True
    telemetry: TelemetrySettings | None = None

    @field_validator("vendor_prefixes", "roles")
    @classmethod
    def _not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            msg = "must list at least one entry"
            raise ValueError(msg)
        return value

    @property
    def vendors(self) -> tuple[str, ...]:
        """Vendor namespaces of the allow-list (``anthropic.claude`` -> ``anthropic``)."""
        seen: dict[str, None] = {}
        for prefix in self.vendor_prefixes:
            seen[vendor_of(prefix)] = None
        return tuple(seen)


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`SyncSettings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path

    def load(self, **overrides: Any) -> SyncSettings:
        """Read YAML, interpolate env vars, apply overrides, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  Overrides whose
        value is ``None`` are ignored, so unset CLI options keep the file value.

        Raises:
            ConfigError: On read errors, YAML parse errors or validation failures.
        """
        data: dict[str, Any] = {}
        if self._path is not None:
            data = self._read()

        data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return SyncSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

    def _read(self) -> dict[str, Any]:
        assert self._path is not None
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
            return {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")
        return data
