from __future__ import annotations

from typing import Any, Callable, Dict, Iterator

import httpx
import pytest

from services.dashboard import build_default_dashboard
from settings import get_settings


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    get_settings.cache_clear()
    build_default_dashboard.cache_clear()
    yield
    get_settings.cache_clear()
    build_default_dashboard.cache_clear()


@pytest.fixture()
def api_url() -> str:
    return "https://water.example.test/api/waterlevel/get"


@pytest.fixture()
def sample_payload() -> Dict[str, Dict[str, Any]]:
    """Three readings on one day; the last one reports a different location."""

    return {
        "r1": {"Time": "2024-05-01T08:00:00Z", "Level": 1.2, "Location": "Dock A"},
        "r2": {"Time": "2024-05-01T13:30:15Z", "Level": 2.4, "Location": "Dock A"},
        "r3": {"Time": "2024-05-01T23:59:59Z", "Level": 3.1, "Location": "Dock B"},
    }


@pytest.fixture()
def json_transport() -> Callable[..., httpx.MockTransport]:
    def factory(payload: Any, status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=payload)

        return httpx.MockTransport(handler)

    return factory


@pytest.fixture()
def failing_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)
