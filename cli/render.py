from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import typer

SEVERITY_COLORS = {
    "Good": typer.colors.GREEN,
    "Caution": typer.colors.YELLOW,
    "Bad": typer.colors.RED,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _echo_card(title: str, label: Any, detail: Any, severity: Any) -> None:
    color = SEVERITY_COLORS.get(severity)
    typer.echo(f"{title}: ", nl=False)
    typer.secho(str(label), fg=color, bold=True, nl=False)
    typer.echo(f" ({detail})")


def render_summary(payload: Dict[str, Any]) -> None:
    if "error" in payload:
        typer.secho(str(payload["error"]), fg=typer.colors.YELLOW)
        return

    crop = payload.get("cropHealth") or {}
    soil = payload.get("soil") or {}
    pest = payload.get("pest") or {}
    weather = payload.get("weather") or {}
    recommendations = payload.get("recommendations") or {}

    echo_heading("Overview")
    _echo_card("Crop Health", crop.get("status"), crop.get("displayScore"), crop.get("severity"))
    _echo_card("Soil", soil.get("health"), soil.get("displaySummary"), soil.get("severity"))
    _echo_card("Pest Risk", pest.get("risk"), pest.get("displayProbability"), pest.get("severity"))
    typer.echo(f"Weather: {weather.get('temperature')}°C ({weather.get('description')})")

    typer.echo()
    echo_heading("Recommendations")
    echo_key_values(
        [
            ("Irrigation", recommendations.get("irrigation")),
            ("Fertilization", recommendations.get("fertilization")),
            ("Pest Management", recommendations.get("pestAction")),
        ]
    )


def render_trends(rows: Sequence[Dict[str, Any]]) -> None:
    echo_heading("Sensor Trends")
    if not rows:
        typer.echo("No readings recorded.")
        return
    typer.echo(f"{'date':<20} {'moisture':>9} {'ph':>6} {'pest %':>7} {'temp':>6} {'ndvi':>6}")
    for row in rows:
        pest_percent = float(row.get("pest_prob", 0.0)) * 100
        typer.echo(
            f"{str(row.get('date')):<20} {str(row.get('moisture')):>9} {str(row.get('ph')):>6} "
            f"{pest_percent:>7.0f} {str(row.get('temp')):>6} {str(row.get('ndvi')):>6}"
        )
    typer.echo(f"{len(rows)} readings")
