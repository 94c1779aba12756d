"""Per-request orchestration of the summary and trend views."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Sequence, Union

from models.records import SensorReading
from services.insights import Assessment, derive_assessment
from storage.csv_source import ReadingSource, build_default_source

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data in CSV"


@dataclass(frozen=True)
class EmptyDataset:
    """Outcome of a summary request when the source holds no readings."""

    message: str = NO_DATA_MESSAGE


@dataclass
class TrendSeries:
    """Chart-ready parallel series, aligned by index."""

    labels: List[str] = field(default_factory=list)
    moisture: List[float] = field(default_factory=list)
    ph: List[float] = field(default_factory=list)
    pest_percent: List[float] = field(default_factory=list)


def build_trend_series(readings: Sequence[SensorReading]) -> TrendSeries:
    series = TrendSeries()
    for reading in readings:
        series.labels.append(reading.timestamp)
        series.moisture.append(reading.moisture)
        series.ph.append(reading.ph)
        series.pest_percent.append(reading.pest_probability * 100)
    return series


class DashboardService:
    """Loads readings fresh from the source for every call; holds no state."""

    def __init__(self, source: ReadingSource) -> None:
        self.source = source

    def summary(self) -> Union[Assessment, EmptyDataset]:
        return assess_latest(self.source.load())

    def trends(self) -> List[SensorReading]:
        return self.source.load()

    def trend_series(self) -> TrendSeries:
        return build_trend_series(self.source.load())


def assess_latest(readings: Sequence[SensorReading]) -> Union[Assessment, EmptyDataset]:
    """Assess the last reading in file order, or report an empty dataset."""
    if not readings:
        logger.info("No readings to assess", extra={"row_count": 0})
        return EmptyDataset()
    return derive_assessment(readings[-1])


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires the dashboard to the configured CSV file."""
    return DashboardService(source=build_default_source())
