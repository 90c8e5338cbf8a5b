"""Chart.js payload generation for a water-level series."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypedDict

from models.readings import Series
from services.formatter import NumberFormatter

ValueFormatter = Callable[[Any], str]

_NICE_MULTIPLIERS = (1.0, 2.0, 2.5, 5.0, 10.0)


@dataclass(frozen=True)
class ChartStyle:
    """Visual configuration handed to the renderer at construction time."""

    font_family: str = (
        'Nunito, -apple-system, system-ui, BlinkMacSystemFont, "Segoe UI", '
        'Roboto, "Helvetica Neue", Arial, sans-serif'
    )
    font_color: str = "#858796"
    dataset_label: str = "Water Level"
    border_color: str = "rgba(75, 192, 192, 1)"
    background_color: str = "rgba(75, 192, 192, 0.2)"
    point_color: str = "rgba(78, 115, 223, 1)"
    point_radius: int = 3
    point_hit_radius: int = 10
    point_border_width: int = 2
    tension: float = 0.1
    fill: bool = True
    padding: dict[str, int] = field(
        default_factory=lambda: {"left": 10, "right": 25, "top": 25, "bottom": 0}
    )
    max_x_ticks: int = 7
    max_y_ticks: int = 5
    grid_color: str = "rgb(234, 236, 244)"
    tooltip_background: str = "rgb(255,255,255)"
    tooltip_title_color: str = "#6e707e"
    tooltip_border_color: str = "#dddfeb"


class ChartTick(TypedDict):
    value: float
    label: str


class ChartDataset(TypedDict):
    label: str
    data: list[float]
    borderColor: str
    backgroundColor: str
    pointRadius: int
    pointBackgroundColor: str
    pointBorderColor: str
    pointHoverRadius: int
    pointHoverBackgroundColor: str
    pointHoverBorderColor: str
    pointHitRadius: int
    pointBorderWidth: int
    fill: bool
    tension: float


class ChartData(TypedDict):
    labels: list[str]
    datasets: list[ChartDataset]


class ChartPayload(TypedDict):
    """Line chart configuration plus values pre-formatted for display."""

    type: str
    data: ChartData
    options: dict[str, Any]
    yTicks: list[ChartTick]
    tooltipLabels: list[str]


class ChartRenderError(ValueError):
    """Raised when a series cannot be laid out on a chart axis."""


def nice_ticks(values: list[float] | tuple[float, ...], max_ticks: int = 5) -> list[float]:
    """Evenly spaced round tick values covering zero and every value."""
    if max_ticks < 2:
        raise ValueError("max_ticks must be at least 2")
    low = min([0.0, *values])
    high = max([0.0, *values])
    if low == high:
        high = low + 1.0

    # Divide before subtracting so ranges near the float limit stay finite.
    raw_step = high / (max_ticks - 1) - low / (max_ticks - 1)
    if not math.isfinite(raw_step):
        raise ValueError("Tick range is not finite")
    magnitude = 10.0 ** math.floor(math.log10(raw_step))
    while math.isfinite(magnitude):
        for multiplier in _NICE_MULTIPLIERS:
            step = multiplier * magnitude
            if step < raw_step:
                continue
            first = math.floor(low / step)
            last = math.ceil(high / step)
            if last - first + 1 > max_ticks:
                continue
            ticks = [round(index * step, 10) for index in range(first, last + 1)]
            if all(math.isfinite(tick) for tick in ticks):
                return ticks
        magnitude *= 10
    raise ValueError("Tick range is not finite")


class ChartRenderer:
    """Builds a Chart.js line chart payload from a :class:`Series`."""

    def __init__(
        self,
        style: Optional[ChartStyle] = None,
        formatter: Optional[ValueFormatter] = None,
    ) -> None:
        self.style = style or ChartStyle()
        self.formatter = formatter or NumberFormatter()

    def render(self, series: Series) -> ChartPayload:
        style = self.style
        levels = list(series.levels)
        dataset: ChartDataset = {
            "label": style.dataset_label,
            "data": levels,
            "borderColor": style.border_color,
            "backgroundColor": style.background_color,
            "pointRadius": style.point_radius,
            "pointBackgroundColor": style.point_color,
            "pointBorderColor": style.point_color,
            "pointHoverRadius": style.point_radius,
            "pointHoverBackgroundColor": style.point_color,
            "pointHoverBorderColor": style.point_color,
            "pointHitRadius": style.point_hit_radius,
            "pointBorderWidth": style.point_border_width,
            "fill": style.fill,
            "tension": style.tension,
        }
        try:
            ticks = nice_ticks(levels, style.max_y_ticks)
        except ValueError as exc:
            raise ChartRenderError(f"Cannot lay out the level axis: {exc}") from exc
        return {
            "type": "line",
            "data": {"labels": list(series.labels), "datasets": [dataset]},
            "options": self._options(ticks),
            "yTicks": [{"value": value, "label": self.formatter(value)} for value in ticks],
            "tooltipLabels": [
                f"{style.dataset_label}: {self.formatter(level)}" for level in levels
            ],
        }

    def _options(self, ticks: list[float]) -> dict[str, Any]:
        style = self.style
        font = {"family": style.font_family}
        return {
            "maintainAspectRatio": False,
            "color": style.font_color,
            "font": font,
            "layout": {"padding": dict(style.padding)},
            "scales": {
                "x": {
                    "grid": {"display": False, "drawBorder": False},
                    "ticks": {"maxTicksLimit": style.max_x_ticks, "color": style.font_color, "font": font},
                },
                "y": {
                    "beginAtZero": True,
                    "min": ticks[0],
                    "max": ticks[-1],
                    "ticks": {
                        "maxTicksLimit": style.max_y_ticks,
                        "padding": 10,
                        "color": style.font_color,
                        "font": font,
                    },
                    "grid": {"color": style.grid_color, "drawBorder": False},
                    "border": {"dash": [2]},
                },
            },
            "plugins": {
                "legend": {"display": False},
                "tooltip": {
                    "backgroundColor": style.tooltip_background,
                    "bodyColor": style.font_color,
                    "titleColor": style.tooltip_title_color,
                    "titleMarginBottom": 10,
                    "titleFont": {"size": 14, "family": style.font_family},
                    "borderColor": style.tooltip_border_color,
                    "borderWidth": 1,
                    "padding": 15,
                    "displayColors": False,
                    "intersect": False,
                    "mode": "index",
                    "caretPadding": 10,
                },
            },
        }
