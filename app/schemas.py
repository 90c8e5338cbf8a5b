"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from services.dashboard import DashboardStatus, DashboardView


class DashboardResponse(BaseModel):
    """Summary fields and series for the water-level dashboard."""

    status: DashboardStatus
    message: Optional[str] = Field(
        default=None, description="User-facing status text when no chart is available."
    )
    date: Optional[str] = Field(default=None, description="Calendar date of the first reading.")
    location: Optional[str] = None
    total_points: int = Field(0, ge=0)
    labels: List[str] = Field(default_factory=list)
    levels: List[float] = Field(default_factory=list)
    chart: Optional[Dict[str, Any]] = None

    @classmethod
    def from_view(cls, view: DashboardView) -> "DashboardResponse":
        series = view.series
        return cls(
            status=view.status,
            message=view.message,
            date=view.date,
            location=view.location,
            total_points=view.total_points,
            labels=list(series.labels) if series else [],
            levels=list(series.levels) if series else [],
            chart=dict(view.chart) if view.chart else None,
        )
