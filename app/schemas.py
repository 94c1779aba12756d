"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from models.records import SensorReading
from services.dashboard import EmptyDataset, TrendSeries
from services.insights import (
    Assessment,
    CropStatus,
    PestRisk,
    Severity,
    SoilHealth,
    WeatherDescription,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CropHealthCard(CamelModel):
    status: CropStatus
    display_score: str = Field(..., alias="displayScore")
    severity: Severity


class SoilCard(CamelModel):
    health: SoilHealth
    display_summary: str = Field(..., alias="displaySummary")
    severity: Severity


class PestCard(CamelModel):
    risk: PestRisk
    display_probability: str = Field(..., alias="displayProbability")
    severity: Severity


class WeatherCard(CamelModel):
    temperature: float
    description: WeatherDescription


class RecommendationSet(CamelModel):
    irrigation: str
    fertilization: str
    pest_action: str = Field(..., alias="pestAction")


class AssessmentResponse(CamelModel):
    """Status cards and recommendations derived from the latest reading."""

    crop_health: CropHealthCard = Field(..., alias="cropHealth")
    soil: SoilCard
    pest: PestCard
    weather: WeatherCard
    recommendations: RecommendationSet

    @classmethod
    def from_assessment(cls, assessment: Assessment) -> "AssessmentResponse":
        crop, soil, pest = assessment.crop_health, assessment.soil, assessment.pest
        recs = assessment.recommendations
        return cls(
            crop_health=CropHealthCard(
                status=crop.status,
                display_score=crop.display_score,
                severity=crop.severity,
            ),
            soil=SoilCard(
                health=soil.health,
                display_summary=soil.display_summary,
                severity=soil.severity,
            ),
            pest=PestCard(
                risk=pest.risk,
                display_probability=pest.display_probability,
                severity=pest.severity,
            ),
            weather=WeatherCard(
                temperature=assessment.weather.temperature,
                description=assessment.weather.description,
            ),
            recommendations=RecommendationSet(
                irrigation=recs.irrigation,
                fertilization=recs.fertilization,
                pest_action=recs.pest_action,
            ),
        )


class NoDataResponse(BaseModel):
    """Payload returned by the summary endpoint when no readings exist."""

    error: str

    @classmethod
    def from_empty(cls, empty: EmptyDataset) -> "NoDataResponse":
        return cls(error=empty.message)


class TrendReading(BaseModel):
    """One CSV row as exposed for charting, keyed by the CSV column names."""

    date: str
    moisture: float
    ph: float
    pest_prob: float
    temp: float
    ndvi: str

    @classmethod
    def from_reading(cls, reading: SensorReading) -> "TrendReading":
        return cls(
            date=reading.timestamp,
            moisture=reading.moisture,
            ph=reading.ph,
            pest_prob=reading.pest_probability,
            temp=reading.temperature,
            ndvi=reading.ndvi,
        )


class TrendSeriesResponse(CamelModel):
    labels: List[str] = Field(default_factory=list)
    moisture: List[float] = Field(default_factory=list)
    ph: List[float] = Field(default_factory=list)
    pest_percent: List[float] = Field(default_factory=list, alias="pestPercent")

    @classmethod
    def from_series(cls, series: TrendSeries) -> "TrendSeriesResponse":
        return cls(
            labels=series.labels,
            moisture=series.moisture,
            ph=series.ph,
            pest_percent=series.pest_percent,
        )
