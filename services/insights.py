"""Derivation of field status labels and recommendations from one reading."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum

from models.errors import InvalidReadingError
from models.records import SensorReading

MOISTURE_HEALTHY_ABOVE = 25.0
MOISTURE_IRRIGATE_BELOW = 25.0
PH_MIN = 6.0
PH_MAX = 7.0
PEST_HIGH_ABOVE = 0.5
PEST_MEDIUM_ABOVE = 0.3
TEMPERATURE_HOT_ABOVE = 33.0
TEMPERATURE_COOL_BELOW = 25.0

_NUMERIC_FIELDS = ("moisture", "ph", "pest_probability", "temperature")


class Severity(str, Enum):
    """Display severity of a status card (green, yellow, red)."""

    good = "Good"
    caution = "Caution"
    bad = "Bad"


class CropStatus(str, Enum):
    healthy = "Healthy"
    stressed = "Stressed"


class SoilHealth(str, Enum):
    good = "Good"
    poor = "Poor"


class PestRisk(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


class WeatherDescription(str, Enum):
    cool = "Cool"
    normal = "Normal"
    hot = "Hot"


@dataclass(frozen=True)
class CropHealthInsight:
    status: CropStatus
    display_score: str
    severity: Severity


@dataclass(frozen=True)
class SoilInsight:
    health: SoilHealth
    display_summary: str
    severity: Severity


@dataclass(frozen=True)
class PestInsight:
    risk: PestRisk
    display_probability: str
    severity: Severity


@dataclass(frozen=True)
class WeatherInsight:
    temperature: float
    description: WeatherDescription


@dataclass(frozen=True)
class Recommendations:
    irrigation: str
    fertilization: str
    pest_action: str


@dataclass(frozen=True)
class Assessment:
    """Human-facing categorization of the most recent reading."""

    crop_health: CropHealthInsight
    soil: SoilInsight
    pest: PestInsight
    weather: WeatherInsight
    recommendations: Recommendations


def format_measurement(value: float) -> str:
    """Render a number at source precision, dropping a trailing ``.0``."""
    value = float(value)
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def format_percentage(fraction: float) -> str:
    """Render a fraction as a whole-number percentage, rounding halves up.

    Any finite fraction is accepted; a zero result is printed without a sign.
    """
    product = fraction * 100
    with localcontext() as ctx:
        # The exact value of any finite float fits in 400 digits.
        ctx.prec = 400
        exact = Decimal(product) if math.isfinite(product) else Decimal(fraction) * 100
        percent = exact.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    if percent.is_zero():
        percent = percent.copy_abs()
    return f"{percent}%"


def validate_reading(reading: SensorReading) -> None:
    """Raise :class:`InvalidReadingError` unless every numeric field is finite."""
    for field in _NUMERIC_FIELDS:
        value = getattr(reading, field, None)
        if value is None:
            raise InvalidReadingError(field, value, reason="missing")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidReadingError(field, value, reason="not a number")
        if not math.isfinite(value):
            raise InvalidReadingError(field, value)


def assess_crop_health(reading: SensorReading) -> CropHealthInsight:
    score = f"NDVI {reading.ndvi}"
    if reading.moisture > MOISTURE_HEALTHY_ABOVE:
        return CropHealthInsight(CropStatus.healthy, score, Severity.good)
    return CropHealthInsight(CropStatus.stressed, score, Severity.bad)


def assess_soil(reading: SensorReading) -> SoilInsight:
    summary = (
        f"Moisture {format_measurement(reading.moisture)}%, "
        f"pH {format_measurement(reading.ph)}"
    )
    if PH_MIN <= reading.ph <= PH_MAX:
        return SoilInsight(SoilHealth.good, summary, Severity.good)
    return SoilInsight(SoilHealth.poor, summary, Severity.caution)


def assess_pest(reading: SensorReading) -> PestInsight:
    probability = reading.pest_probability
    display = format_percentage(probability)
    if probability > PEST_HIGH_ABOVE:
        return PestInsight(PestRisk.high, display, Severity.bad)
    if probability > PEST_MEDIUM_ABOVE:
        return PestInsight(PestRisk.medium, display, Severity.caution)
    return PestInsight(PestRisk.low, display, Severity.good)


def assess_weather(reading: SensorReading) -> WeatherInsight:
    temperature = reading.temperature
    if temperature > TEMPERATURE_HOT_ABOVE:
        description = WeatherDescription.hot
    elif temperature < TEMPERATURE_COOL_BELOW:
        description = WeatherDescription.cool
    else:
        description = WeatherDescription.normal
    return WeatherInsight(temperature=temperature, description=description)


def recommend(reading: SensorReading) -> Recommendations:
    # Irrigation triggers strictly below 25, so a reading of exactly 25 is
    # Stressed yet needs no irrigation.
    if reading.moisture < MOISTURE_IRRIGATE_BELOW:
        irrigation = "irrigation recommended"
    else:
        irrigation = "no irrigation needed"

    if reading.ph < PH_MIN:
        fertilization = "apply lime (raise pH)"
    elif reading.ph > PH_MAX:
        fertilization = "apply sulfur (lower pH)"
    else:
        fertilization = "balanced"

    if reading.pest_probability > PEST_HIGH_ABOVE:
        pest_action = "take immediate action"
    else:
        pest_action = "scout weekly"

    return Recommendations(
        irrigation=irrigation,
        fertilization=fertilization,
        pest_action=pest_action,
    )


def derive_assessment(reading: SensorReading) -> Assessment:
    """Map one sensor reading to status cards and recommendations.

    Pure and deterministic. Raises :class:`InvalidReadingError` when moisture,
    pH, pest probability or temperature is missing or not finite; NDVI is
    display text and is never checked.
    """
    validate_reading(reading)
    return Assessment(
        crop_health=assess_crop_health(reading),
        soil=assess_soil(reading),
        pest=assess_pest(reading),
        weather=assess_weather(reading),
        recommendations=recommend(reading),
    )
