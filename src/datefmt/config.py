"""Package configuration for datefmt.

Configuration is a single dataclass read from environment variables on first
access. Explicit settings always win over the environment.

Environment:
    DATEFMT_LOCALE             Default locale (else Babel's LC_TIME default, else en_US)
    DATEFMT_TIMEZONE           Default IANA time zone (else UTC)
    DATEFMT_LENIENT            Default calendar leniency (true/false)
    DATEFMT_FALLBACK_PATTERN   Pattern used when locale data is missing
    DATEFMT_TWO_DIGIT_YEAR_WINDOW  Years before "now" where two-digit years start
    DATEFMT_RELATIVE_DAY_RANGE     Days from today that get relative phrases

Usage:
    >>> from datefmt.config import get_config, config_override
    >>> get_config().default_locale
    'en_US'
    >>> with config_override(default_time_zone="Asia/Seoul"):
    ...     ...
"""

from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Iterator

from babel.core import default_locale


ENV_PREFIX = "DATEFMT"

# Last-resort pattern used when locale data is absent altogether
FALLBACK_PATTERN = "M/d/yy h:mm a"


@dataclass(frozen=True)
class DateFormatConfig:
    """Settings shared by every formatter created after they take effect.

    Attributes:
        default_locale: Locale used when a factory gets no locale
        default_time_zone: IANA zone name for new calendars
        lenient: Leniency of new calendars
        fallback_pattern: Pattern used when locale data is missing
        two_digit_year_window: Years before "now" where two-digit years start
        relative_day_range: Largest day offset rendered as a relative phrase
    """
    default_locale: str = "en_US"
    default_time_zone: str = "UTC"
    lenient: bool = True
    fallback_pattern: str = FALLBACK_PATTERN
    two_digit_year_window: int = 80
    relative_day_range: int = 1

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "DateFormatConfig":
        """Build configuration from ``DATEFMT_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            DateFormatConfig
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        locale = env.get(f"{ENV_PREFIX}_LOCALE")
        if not locale:
            locale = default_locale("LC_TIME")
        if locale:
            values["default_locale"] = locale

        zone = env.get(f"{ENV_PREFIX}_TIMEZONE")
        if zone:
            values["default_time_zone"] = zone

        lenient = _parse_value(env.get(f"{ENV_PREFIX}_LENIENT", ""))
        if isinstance(lenient, bool):
            values["lenient"] = lenient

        pattern = env.get(f"{ENV_PREFIX}_FALLBACK_PATTERN")
        if pattern:
            values["fallback_pattern"] = pattern

        window = _parse_value(env.get(f"{ENV_PREFIX}_TWO_DIGIT_YEAR_WINDOW", ""))
        if isinstance(window, int) and not isinstance(window, bool):
            values["two_digit_year_window"] = window

        day_range = _parse_value(env.get(f"{ENV_PREFIX}_RELATIVE_DAY_RANGE", ""))
        if isinstance(day_range, int) and not isinstance(day_range, bool):
            values["relative_day_range"] = day_range

        return cls(**values)


def _parse_value(value: str) -> Any:
    """Parse string value to appropriate type."""
    # Boolean
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False

    # None
    if value.lower() in ("null", "none", ""):
        return None

    # Number
    try:
        return int(value)
    except ValueError:
        pass

    return value


_lock = threading.Lock()
_config: DateFormatConfig | None = None


def get_config() -> DateFormatConfig:
    """Get the global configuration, reading the environment on first use."""
    global _config

    with _lock:
        if _config is None:
            _config = DateFormatConfig.from_env()
        return _config


def set_config(config: DateFormatConfig) -> None:
    """Replace the global configuration."""
    global _config

    with _lock:
        _config = config


def reset_config() -> None:
    """Drop the global configuration so the environment is read again."""
    global _config

    with _lock:
        _config = None


@contextmanager
def config_override(**changes: Any) -> Iterator[DateFormatConfig]:
    """Temporarily replace selected configuration values.

    Example:
        with config_override(lenient=False):
            fmt = get_date_instance(SHORT)
    """
    previous = get_config()
    updated = replace(previous, **changes)
    set_config(updated)
    try:
        yield updated
    finally:
        set_config(previous)


__all__ = [
    "DateFormatConfig",
    "FALLBACK_PATTERN",
    "get_config",
    "set_config",
    "reset_config",
    "config_override",
]
