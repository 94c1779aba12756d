from __future__ import annotations

import pytest

from models.errors import InvalidReadingError
from models.records import SensorReading
from services.dashboard import DashboardService, EmptyDataset, build_trend_series
from services.insights import Assessment, CropStatus
from storage.csv_source import InMemoryReadingSource


def _reading(timestamp: str, moisture: float, pest_probability: float = 0.2) -> SensorReading:
    return SensorReading(
        timestamp=timestamp,
        moisture=moisture,
        ph=6.5,
        pest_probability=pest_probability,
        temperature=28.0,
        ndvi="0.7",
    )


def test_summary_of_empty_source_is_empty_dataset() -> None:
    service = DashboardService(InMemoryReadingSource([]))

    outcome = service.summary()

    assert isinstance(outcome, EmptyDataset)
    assert outcome.message == "No data in CSV"


def test_summary_assesses_the_last_reading() -> None:
    service = DashboardService(
        InMemoryReadingSource([_reading("t1", 40.0), _reading("t2", 10.0)])
    )

    outcome = service.summary()

    assert isinstance(outcome, Assessment)
    assert outcome.crop_health.status is CropStatus.stressed


def test_summary_propagates_invalid_latest_reading() -> None:
    service = DashboardService(InMemoryReadingSource([_reading("t1", float("nan"))]))

    with pytest.raises(InvalidReadingError):
        service.summary()


def test_trends_preserve_count_and_order() -> None:
    readings = [_reading(f"t{index}", 20.0 + index) for index in range(5)]
    service = DashboardService(InMemoryReadingSource(readings))

    assert service.trends() == readings
    assert DashboardService(InMemoryReadingSource([])).trends() == []


def test_trend_series_is_aligned_by_index() -> None:
    readings = [_reading("t1", 30.0, 0.25), _reading("t2", 22.5, 0.5)]

    series = build_trend_series(readings)

    assert series.labels == ["t1", "t2"]
    assert series.moisture == [30.0, 22.5]
    assert series.ph == [6.5, 6.5]
    assert series.pest_percent == [25.0, 50.0]
