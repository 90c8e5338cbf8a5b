from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from settings import DEFAULT_API_URL, get_settings

DEFAULT_TIMEOUT = 30.0
DEFAULT_TIMEZONE = "UTC"


@dataclass(frozen=True)
class CLIConfig:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    timezone: str = DEFAULT_TIMEZONE


def load_config(
    api_url: Optional[str] = None,
    timeout: Optional[float] = None,
    timezone: Optional[str] = None,
) -> CLIConfig:
    settings = get_settings()
    if timeout is None or timeout <= 0:
        timeout = settings.request_timeout
    return CLIConfig(
        api_url=(api_url or settings.api_url).strip(),
        timeout=timeout,
        timezone=timezone or settings.display_timezone,
    )
