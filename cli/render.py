from __future__ import annotations

from typing import Any, Iterable

import typer

from models.readings import FormatOptions, Series
from services.dashboard import DashboardStatus, DashboardView
from services.formatter import format_number


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def echo_failure(view: DashboardView) -> None:
    typer.secho(view.message or "Unknown error", fg=typer.colors.RED, err=True)


def render_summary(view: DashboardView) -> None:
    echo_heading("Water Level")
    if view.status is not DashboardStatus.rendered:
        echo_failure(view)
        return
    echo_key_values(
        [
            ("date", view.date),
            ("location", view.location),
            ("total_data_points", view.total_points),
        ]
    )


def render_points(series: Series, options: FormatOptions) -> None:
    echo_heading(f"{series.location} ({series.date})")
    for label, level in zip(series.labels, series.levels):
        typer.echo(f"  {label:>11}  {format_number(level, options)}")
