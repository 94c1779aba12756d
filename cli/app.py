from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from app.schemas import AssessmentResponse, NoDataResponse
from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_summary, render_trends
from models.errors import AgroVistaError
from services.dashboard import EmptyDataset, assess_latest
from settings import get_settings
from storage.csv_source import CsvReadingSource


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for querying AgroVista field insights.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="AgroVista API base URL (defaults to API_BASE_URL env or http://localhost:4000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for an API response.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("summary")
def summary_command(ctx: typer.Context) -> None:
    """Fetch the assessment of the latest reading from the server."""
    state = _get_state(ctx)
    render_summary(state.client.get_summary())


@app.command("trends")
def trends_command(ctx: typer.Context) -> None:
    """Fetch every reading in file order from the server."""
    state = _get_state(ctx)
    render_trends(state.client.get_trends())


@app.command("assess")
def assess_command(
    file: Path = typer.Argument(..., dir_okay=False, help="Path to a readings CSV."),
) -> None:
    """Assess the last row of a local CSV without a running server."""
    try:
        outcome = assess_latest(CsvReadingSource(file).load())
    except AgroVistaError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if isinstance(outcome, EmptyDataset):
        payload = NoDataResponse.from_empty(outcome)
    else:
        payload = AssessmentResponse.from_assessment(outcome)
    render_summary(payload.model_dump(mode="json", by_alias=True))


@app.command("serve")
def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload/--no-reload", help="Restart on code changes."),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )
