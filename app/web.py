from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.schemas import AssessmentResponse, TrendSeriesResponse
from models.errors import InvalidReadingError, SourceUnavailable
from services.dashboard import (
    DashboardService,
    EmptyDataset,
    assess_latest,
    build_default_dashboard,
    build_trend_series,
)


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

SEVERITY_COLORS = {"Good": "green", "Caution": "yellow", "Bad": "red"}
templates.env.filters["severity_color"] = lambda severity: SEVERITY_COLORS.get(
    getattr(severity, "value", severity), "slate"
)


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


router = APIRouter(include_in_schema=False)


@router.get("/", name="home", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "ui/home.html", {})


@router.get("/ui", name="ui_dashboard", response_class=HTMLResponse)
async def ui_dashboard(
    request: Request,
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    try:
        readings = dashboard.trends()
        outcome = assess_latest(readings)
    except InvalidReadingError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except SourceUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    summary: Optional[AssessmentResponse] = None
    empty_message: Optional[str] = None
    if isinstance(outcome, EmptyDataset):
        empty_message = outcome.message
    else:
        summary = AssessmentResponse.from_assessment(outcome)

    series = TrendSeriesResponse.from_series(build_trend_series(readings))
    return templates.TemplateResponse(
        request,
        "ui/dashboard.html",
        {
            "summary": summary,
            "empty_message": empty_message,
            "series": series.model_dump(by_alias=True),
        },
    )
