"""
Settings for dayfilter.

Values come from environment variables. A .env file can seed them through
load_settings(env_file=...); variables already present in the environment win.

    DAYFILTER_TIMEZONE           Time zone all day arithmetic is anchored to
    DAYFILTER_HOLIDAY_API_URL    Base URL of the holiday calendar API
    DAYFILTER_MAX_LOOKBACK_DAYS  Cap on the backward business day search
    DAYFILTER_HTTP_TIMEOUT       Seconds before a holiday lookup times out (unset = none)
"""

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Optional, Union

import pytz
from dotenv import load_dotenv

from .errors import ConfigurationError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "Asia/Jakarta"
DEFAULT_HOLIDAY_API_URL = "https://dayoffapi.vercel.app/api"
DEFAULT_MAX_LOOKBACK_DAYS = 31

_settings: Optional["Settings"] = None


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    timezone: str = DEFAULT_TIMEZONE
    holiday_api_url: str = DEFAULT_HOLIDAY_API_URL
    max_lookback_days: int = DEFAULT_MAX_LOOKBACK_DAYS
    http_timeout: Optional[float] = None

    @property
    def tz(self) -> tzinfo:
        """The configured zone as a pytz timezone."""
        return get_timezone(self.timezone)


def get_timezone(name: Union[str, tzinfo]) -> tzinfo:
    """
    Look up a pytz timezone by name.

    Raises:
        ConfigurationError: If the zone name is unknown
    """
    if isinstance(name, tzinfo):
        return name
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ConfigurationError(f"Unknown time zone: {name}") from e


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigurationError(f"{key} must be at least 1, got {value}")
    return value


def _float_env(key: str) -> Optional[float]:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value}")
    return value


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Build settings from the environment.

    Args:
        env_file: Optional .env file loaded before reading variables

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If any value is invalid
    """
    if env_file is not None:
        load_dotenv(env_file)

    settings = Settings(
        timezone=os.getenv("DAYFILTER_TIMEZONE", DEFAULT_TIMEZONE),
        holiday_api_url=os.getenv("DAYFILTER_HOLIDAY_API_URL", DEFAULT_HOLIDAY_API_URL),
        max_lookback_days=_int_env("DAYFILTER_MAX_LOOKBACK_DAYS", DEFAULT_MAX_LOOKBACK_DAYS),
        http_timeout=_float_env("DAYFILTER_HTTP_TIMEOUT"),
    )

    # Fail on a bad zone name here rather than at first use
    get_timezone(settings.timezone)

    logger.debug(
        "Loaded settings",
        extra={
            'timezone': settings.timezone,
            'holiday_api_url': settings.holiday_api_url,
            'max_lookback_days': settings.max_lookback_days,
        }
    )
    return settings


def get_settings() -> Settings:
    """Get cached settings, loading them from the environment on first call."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def clear_settings_cache() -> None:
    """Clear cached settings (useful for testing or after changing env vars)."""
    global _settings
    _settings = None
