"""Configuration management for the Lyf exporter."""

from __future__ import annotations

import logging
import re
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

API_BASE_URL = "https://api.lyf.eu/public/api/kitties/"

# Nanoseconds per unit, following Go's time.ParseDuration.
_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_DURATION_SEGMENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class ConfigError(ValueError):
    """Raised when the environment holds an unusable setting."""


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as ``66s``, ``1m30s`` or ``1.5h``.

    Every number needs a unit suffix; ``"66"`` is rejected rather than guessed.
    The only unitless value accepted is ``"0"``.
    """

    text = value.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        if text[0] == "-":
            sign = -1
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    nanoseconds = 0.0
    position = 0
    while position < len(text):
        match = _DURATION_SEGMENT.match(text, position)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        nanoseconds += float(number) * _DURATION_UNITS[unit]
        position = match.end()

    try:
        return timedelta(microseconds=sign * nanoseconds / 1_000)
    except OverflowError as exc:
        raise ValueError(f"invalid duration {value!r}") from exc


class Settings(BaseSettings):
    """Exporter settings read from ``LYF_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LYF_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    kitty_uuid: str = Field("", description="Identifier of the kitty to watch")
    delay: timedelta = Field(timedelta(seconds=60), description="Delay between two polls")
    port: int = Field(8080, ge=1, le=65535, description="Listen port for /metrics and /debug")
    host: str = Field("0.0.0.0", description="Listen address")

    log_level: str = Field("INFO", description="Python logging level")
    log_file: Optional[Path] = Field(None, description="Optional rotating log file")

    @field_validator("delay", mode="before")
    @classmethod
    def _parse_delay(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_duration(value)
        return value

    @field_validator("delay")
    @classmethod
    def _check_delay(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("delay must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def url(self) -> str:
        return API_BASE_URL + self.kitty_uuid


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(item) for item in error["loc"])
        env_name = f"LYF_{field.upper()}"
        parts.append(f"error parsing {env_name} {error.get('input')!r}: {error['msg']}")
    return "; ".join(parts)


def resolve_settings(env_file: Optional[str] = ".env", **overrides: Any) -> Settings:
    """Build validated settings from the environment.

    ``overrides`` take precedence over the environment and are mostly useful
    from the CLI and in tests.
    """

    try:
        return Settings(_env_file=env_file, **overrides)
    except ValidationError as exc:
        raise ConfigError(_describe(exc)) from exc


__all__ = ["API_BASE_URL", "ConfigError", "Settings", "parse_duration", "resolve_settings"]
