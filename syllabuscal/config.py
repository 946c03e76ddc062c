"""
Settings for an extraction run.

Settings can come from an optional YAML file:

    timezone: Asia/Singapore
    reference_year: 2025
    start_hour: 9

Every key is optional. The CLI fills in the current year when no
reference_year is configured; the parsing core never reads the clock.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml


DEFAULT_TIMEZONE = "Asia/Singapore"
DEFAULT_START_HOUR = 9

_KNOWN_KEYS = {"timezone", "reference_year", "start_hour"}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    timezone: str = DEFAULT_TIMEZONE
    reference_year: Optional[int] = None
    start_hour: int = DEFAULT_START_HOUR

    def tzinfo(self) -> ZoneInfo:
        return resolve_timezone(self.timezone)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """
        Copy with the given fields replaced; None values are ignored.
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        settings = replace(self, **values)
        validate_settings(settings)
        return settings


def resolve_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {name!r}") from e


def validate_settings(settings: Settings) -> None:
    """
    Raise ConfigError if any field is out of range.
    """
    if not isinstance(settings.timezone, str) or not settings.timezone.strip():
        raise ConfigError("timezone must be a non-empty string")
    resolve_timezone(settings.timezone)

    year = settings.reference_year
    if year is not None and (isinstance(year, bool) or not isinstance(year, int) or not 1 <= year < 9999):
        raise ConfigError(f"reference_year must be an integer between 1 and 9998, got {year!r}")

    hour = settings.start_hour
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise ConfigError(f"start_hour must be an integer between 0 and 23, got {hour!r}")


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    unknown = sorted(str(k) for k in set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

    settings = Settings(**data)
    validate_settings(settings)
    return settings


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load settings from a YAML file, or return the defaults when path is None.
    """
    if path is None:
        return Settings()

    config_path = Path(path)
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"config file {config_path} must contain a mapping")

    return settings_from_dict(data)
