from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_API_URL = "https://csfpiot.csfp.io/csfpiot/v1/api/waterlevel/get"

_API_URL_ENV = "WATER_LEVEL_API_URL"
_TIMEOUT_ENV = "WATER_LEVEL_TIMEOUT"
_TIMEZONE_ENV = "DISPLAY_TIMEZONE"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    api_url: str
    request_timeout: float
    display_timezone: str
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_timeout(default: float) -> float:
    value = os.getenv(_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        api_url=_read_str_env(_API_URL_ENV, DEFAULT_API_URL),
        request_timeout=_read_timeout(30.0),
        display_timezone=_read_str_env(_TIMEZONE_ENV, "UTC"),
        log_level=_read_log_level("INFO"),
    )
