"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SensorReading:
    """A single field observation parsed from the readings CSV."""

    timestamp: str
    moisture: float
    ph: float
    pest_probability: float
    temperature: float
    ndvi: str = ""
