from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import echo_failure, render_points, render_summary
from logging_config import configure_logging
from models.readings import FormatOptions
from services.dashboard import DashboardService, DashboardStatus, DashboardView, build_dashboard
from services.formatter import MAX_DECIMALS, format_number


@dataclass
class CLIState:
    config: CLIConfig
    dashboard: DashboardService


app = typer.Typer(
    help="Fetch, summarize and chart water level readings.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


def _load_view(state: CLIState) -> DashboardView:
    view = asyncio.run(state.dashboard.load())
    if view.status is not DashboardStatus.rendered:
        echo_failure(view)
        raise typer.Exit(code=1)
    return view


@app.callback()
def main(
    ctx: typer.Context,
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        "-u",
        help="Water level API URL (defaults to WATER_LEVEL_API_URL env or the public endpoint).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the API before giving up.",
    ),
    timezone: Optional[str] = typer.Option(
        None,
        "--timezone",
        "--tz",
        help="IANA time zone used for time and date labels (defaults to DISPLAY_TIMEZONE env or UTC).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    config = load_config(api_url=api_url, timeout=timeout, timezone=timezone)
    dashboard = build_dashboard(
        url=config.api_url,
        timeout=config.timeout,
        timezone_name=config.timezone,
    )
    ctx.obj = CLIState(config=config, dashboard=dashboard)


@app.command("summary")
def summary_command(ctx: typer.Context) -> None:
    """Show the date, location and number of data points."""
    state = _get_state(ctx)
    view = asyncio.run(state.dashboard.load())
    render_summary(view)
    if view.status is not DashboardStatus.rendered:
        raise typer.Exit(code=1)


@app.command("points")
def points_command(
    ctx: typer.Context,
    decimals: int = typer.Option(
        2, "--decimals", "-d", min=0, max=MAX_DECIMALS, help="Fractional digits per level."
    ),
) -> None:
    """List every reading as a time label and formatted level."""
    state = _get_state(ctx)
    view = _load_view(state)
    assert view.series is not None
    render_points(view.series, FormatOptions(decimals=decimals))


@app.command("chart")
def chart_command(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        writable=True,
        help="Write the Chart.js payload to this file instead of stdout.",
    ),
) -> None:
    """Emit the Chart.js line chart payload as JSON."""
    state = _get_state(ctx)
    view = _load_view(state)
    document = json.dumps(view.chart, indent=2)
    if output is None:
        typer.echo(document)
        return
    output.write_text(document + "\n", encoding="utf-8")
    typer.secho(f"Chart written to {output}", fg=typer.colors.GREEN)


@app.command("format")
def format_command(
    value: str = typer.Argument(..., help="Number to format; thousands separators are allowed."),
    decimals: int = typer.Option(
        0, "--decimals", "-d", min=-MAX_DECIMALS, max=MAX_DECIMALS, help="Fractional digits."
    ),
    decimal_point: str = typer.Option(".", "--decimal-point", help="Decimal separator."),
    thousands_sep: str = typer.Option(",", "--thousands-sep", help="Thousands separator."),
) -> None:
    """Format a number the way chart ticks and tooltips display it."""
    options = FormatOptions(
        decimals=decimals,
        decimal_point=decimal_point,
        thousands_separator=thousands_sep,
    )
    typer.echo(format_number(value, options))


@app.command("serve")
def serve_command(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on."),
) -> None:
    """Serve the dashboard page and JSON API."""
    import uvicorn

    from app import api, web
    from app.main import create_app

    state = _get_state(ctx)
    server_app = create_app()
    server_app.dependency_overrides[api.get_dashboard] = lambda: state.dashboard
    server_app.dependency_overrides[web.get_dashboard] = lambda: state.dashboard
    typer.echo(f"Serving {state.config.api_url} data on http://{host}:{port}/ui")
    uvicorn.run(server_app, host=host, port=port, access_log=False)
