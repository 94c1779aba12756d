"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import (
    AssessmentResponse,
    NoDataResponse,
    TrendReading,
    TrendSeriesResponse,
)
from models.errors import InvalidReadingError, SourceUnavailable
from services.dashboard import DashboardService, EmptyDataset, build_default_dashboard

router = APIRouter()

UNPROCESSABLE_READING = 422


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, InvalidReadingError):
        return HTTPException(
            status_code=UNPROCESSABLE_READING,
            detail=str(exc),
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


@router.get(
    "/api/summary",
    response_model=Union[AssessmentResponse, NoDataResponse],
    summary="Assess the most recent sensor reading.",
)
async def get_summary(
    dashboard: DashboardService = Depends(get_dashboard),
) -> Union[AssessmentResponse, NoDataResponse]:
    try:
        outcome = dashboard.summary()
    except (InvalidReadingError, SourceUnavailable) as exc:
        raise _to_http_error(exc) from exc
    if isinstance(outcome, EmptyDataset):
        return NoDataResponse.from_empty(outcome)
    return AssessmentResponse.from_assessment(outcome)


@router.get(
    "/api/trends",
    response_model=List[TrendReading],
    summary="Return every reading in file order for charting.",
)
async def get_trends(
    dashboard: DashboardService = Depends(get_dashboard),
) -> List[TrendReading]:
    try:
        readings = dashboard.trends()
    except (InvalidReadingError, SourceUnavailable) as exc:
        raise _to_http_error(exc) from exc
    return [TrendReading.from_reading(reading) for reading in readings]


@router.get(
    "/api/trends/series",
    response_model=TrendSeriesResponse,
    summary="Return chart-ready series aligned by index.",
)
async def get_trend_series(
    dashboard: DashboardService = Depends(get_dashboard),
) -> TrendSeriesResponse:
    try:
        series = dashboard.trend_series()
    except (InvalidReadingError, SourceUnavailable) as exc:
        raise _to_http_error(exc) from exc
    return TrendSeriesResponse.from_series(series)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
