"""Top-level orchestration: fetch, extract and render one dashboard view."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional

from models.readings import Series
from services.chart import ChartPayload, ChartRenderError, ChartRenderer
from services.extractor import (
    EmptyDataError,
    MalformedPayloadError,
    SeriesExtractor,
    resolve_timezone,
)
from services.fetcher import DataFetcher, FetchError
from settings import get_settings

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch data from the API"
NO_DATA_MESSAGE = "No data available"


class DashboardStatus(str, Enum):
    """Terminal states of a single dashboard load."""

    rendered = "rendered"
    empty = "empty"
    failed = "failed"


@dataclass(frozen=True)
class DashboardView:
    """Everything the display layer needs after one load."""

    status: DashboardStatus
    message: Optional[str] = None
    series: Optional[Series] = None
    chart: Optional[ChartPayload] = None

    @property
    def date(self) -> Optional[str]:
        return self.series.date if self.series else None

    @property
    def location(self) -> Optional[str]:
        return self.series.location if self.series else None

    @property
    def total_points(self) -> int:
        return self.series.count if self.series else 0


class DashboardService:
    """Runs the fetch -> extract -> render pipeline once per call."""

    def __init__(
        self,
        url: str,
        fetcher: DataFetcher,
        extractor: SeriesExtractor,
        renderer: ChartRenderer,
    ) -> None:
        self.url = url
        self.fetcher = fetcher
        self.extractor = extractor
        self.renderer = renderer

    async def load(self) -> DashboardView:
        start_time = time.perf_counter()
        try:
            payload = await self.fetcher.fetch(self.url)
            series = self.extractor.extract(payload)
            chart = self.renderer.render(series)
        except EmptyDataError:
            logger.info("Water level API returned no readings", extra={"url": self.url})
            return DashboardView(status=DashboardStatus.empty, message=NO_DATA_MESSAGE)
        except (FetchError, MalformedPayloadError, ChartRenderError) as exc:
            logger.warning(
                "Failed to load water level data",
                extra={"url": self.url, "reason": str(exc)},
            )
            return DashboardView(status=DashboardStatus.failed, message=FETCH_FAILED_MESSAGE)

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Rendered water level dashboard",
            extra={
                "point_count": series.count,
                "location": series.location,
                "elapsed_ms": elapsed_ms,
            },
        )
        return DashboardView(status=DashboardStatus.rendered, series=series, chart=chart)


def build_dashboard(
    url: str,
    timeout: float,
    timezone_name: Optional[str],
) -> DashboardService:
    return DashboardService(
        url=url,
        fetcher=DataFetcher(timeout=timeout),
        extractor=SeriesExtractor(display_tz=resolve_timezone(timezone_name)),
        renderer=ChartRenderer(),
    )


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires the dashboard from environment settings."""
    settings = get_settings()
    return build_dashboard(
        url=settings.api_url,
        timeout=settings.request_timeout,
        timezone_name=settings.display_timezone,
    )
