from typing import Any, Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from services.chart import ChartRenderer
from services.dashboard import DashboardService
from services.extractor import SeriesExtractor
from services.fetcher import DataFetcher

ClientFactory = Callable[[httpx.MockTransport], TestClient]


@pytest.fixture
def make_client(monkeypatch, api_url) -> Iterator[ClientFactory]:
    clients: list[TestClient] = []

    def factory(transport: httpx.MockTransport) -> TestClient:
        dashboard = DashboardService(
            url=api_url,
            fetcher=DataFetcher(transport=transport),
            extractor=SeriesExtractor(),
            renderer=ChartRenderer(),
        )

        def build_test_dashboard() -> DashboardService:
            return dashboard

        build_test_dashboard.cache_clear = lambda: None  # type: ignore[attr-defined]

        monkeypatch.setattr("app.main.build_default_dashboard", build_test_dashboard)
        monkeypatch.setattr("app.api.build_default_dashboard", build_test_dashboard)
        monkeypatch.setattr("app.web.build_default_dashboard", build_test_dashboard)

        client = TestClient(create_app())
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


def test_water_level_endpoint_returns_series(make_client: ClientFactory, json_transport, sample_payload) -> None:
    client = make_client(json_transport(sample_payload))

    response = client.get("/api/waterlevel")

    assert response.status_code == 200
    body: dict[str, Any] = response.json()
    assert body["status"] == "rendered"
    assert body["message"] is None
    assert body["date"] == "5/1/2024"
    assert body["location"] == "Dock B"
    assert body["total_points"] == 3
    assert body["labels"] == ["8:00:00 AM", "1:30:15 PM", "11:59:59 PM"]
    assert body["levels"] == [1.2, 2.4, 3.1]
    assert body["chart"]["type"] == "line"
    assert body["chart"]["tooltipLabels"][0] == "Water Level: 1"


def test_water_level_endpoint_reports_empty_payload(make_client: ClientFactory, json_transport) -> None:
    client = make_client(json_transport({}))

    response = client.get("/api/waterlevel")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "empty"
    assert body["message"] == "No data available"
    assert body["total_points"] == 0
    assert body["chart"] is None


def test_water_level_endpoint_reports_upstream_failure(make_client: ClientFactory, json_transport) -> None:
    client = make_client(json_transport({"detail": "boom"}, status_code=500))

    response = client.get("/api/waterlevel")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "failed"
    assert body["message"] == "Failed to fetch data from the API"
    assert body["labels"] == []


def test_dashboard_page_renders_chart(make_client: ClientFactory, json_transport, sample_payload) -> None:
    client = make_client(json_transport(sample_payload))

    response = client.get("/ui")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Dock B" in response.text
    assert "5/1/2024" in response.text
    assert "waterLevelChart" in response.text


def test_dashboard_page_shows_failure_without_chart(make_client: ClientFactory, failing_transport) -> None:
    client = make_client(failing_transport)

    response = client.get("/ui")

    assert response.status_code == 200
    assert "Failed to fetch data from the API" in response.text
    assert "waterLevelChart" not in response.text


def test_health_endpoints(make_client: ClientFactory, json_transport) -> None:
    client = make_client(json_transport([]))

    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "ok"
