"""Settings loading and validation.

Configuration lives in a YAML file with two sections:

- ``search``: listing database location and pagination limits
- ``observability``: log level and request tracing

Missing or mistyped fields raise :class:`SettingsError` naming the field path.
Loading has no side effects; the database and log files are opened by their
owners.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


class SettingsError(ValueError):
    """Raised when settings are missing or invalid."""


@dataclass(frozen=True)
class SearchSettings:
    db_path: str
    default_limit: int
    max_limit: int


@dataclass(frozen=True)
class ObservabilitySettings:
    log_level: str
    trace_enabled: bool
    trace_file: str


@dataclass(frozen=True)
class Settings:
    search: SearchSettings
    observability: ObservabilitySettings


def _require_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None or not isinstance(value, Mapping):
        raise SettingsError(f"Missing required section: {key}")
    return value


def _require(raw: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in raw:
        raise SettingsError(f"Missing required field: {path}")
    return raw[key]


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"Invalid value for {path}: expected non-empty string")
    return value


def _as_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"Invalid value for {path}: expected int")
    return value


def _as_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"Invalid value for {path}: expected bool")
    return value


def validate_settings(settings: Settings) -> None:
    """Check cross-field invariants the per-field parsers cannot see."""

    search = settings.search
    if search.default_limit <= 0:
        raise SettingsError("Invalid value for search.default_limit: must be positive")
    if search.max_limit < search.default_limit:
        raise SettingsError(
            "Invalid value for search.max_limit: must be >= search.default_limit"
        )
    if settings.observability.log_level.upper() not in {
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
        "CRITICAL",
    }:
        raise SettingsError(
            f"Invalid value for observability.log_level: {settings.observability.log_level}"
        )


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML file."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path}")

    try:
        raw_obj = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file: {settings_path}") from e

    if raw_obj is None or not isinstance(raw_obj, Mapping):
        raise SettingsError(f"Invalid settings root: expected mapping in {settings_path}")

    search_raw = _require_section(raw_obj, "search")
    observability_raw = _require_section(raw_obj, "observability")

    search = SearchSettings(
        db_path=_as_str(_require(search_raw, "db_path", "search.db_path"), "search.db_path"),
        default_limit=_as_int(search_raw.get("default_limit", 10), "search.default_limit"),
        max_limit=_as_int(search_raw.get("max_limit", 100), "search.max_limit"),
    )

    observability = ObservabilitySettings(
        log_level=_as_str(
            _require(observability_raw, "log_level", "observability.log_level"),
            "observability.log_level",
        ),
        trace_enabled=_as_bool(
            _require(observability_raw, "trace_enabled", "observability.trace_enabled"),
            "observability.trace_enabled",
        ),
        trace_file=_as_str(
            _require(observability_raw, "trace_file", "observability.trace_file"),
            "observability.trace_file",
        ),
    )

    settings = Settings(search=search, observability=observability)
    validate_settings(settings)
    return settings
