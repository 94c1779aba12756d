from __future__ import annotations

import csv
import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, TextIO

from models.errors import InvalidReadingError, SourceUnavailable
from models.records import SensorReading
from settings import get_settings

logger = logging.getLogger(__name__)

# Canonical column -> accepted header spellings (compared lower-cased).
COLUMN_ALIASES: Dict[str, tuple[str, ...]] = {
    "date": ("date", "timestamp"),
    "moisture": ("moisture",),
    "ph": ("ph",),
    "pest_prob": ("pest_prob", "pest_probability", "pestprobability"),
    "temp": ("temp", "temperature"),
    "ndvi": ("ndvi",),
}
REQUIRED_COLUMNS = ("date", "moisture", "ph", "pest_prob", "temp")


class ReadingSource(Protocol):
    def load(self) -> List[SensorReading]:
        ...


class InMemoryReadingSource:
    """Reading source backed by an injected sequence, used in tests and tools."""

    def __init__(self, readings: Iterable[SensorReading] = ()) -> None:
        self._readings = tuple(readings)

    def load(self) -> List[SensorReading]:
        return list(self._readings)


class CsvReadingSource:
    """Reads the full readings file from disk on every ``load`` call."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> List[SensorReading]:
        try:
            with self.path.open("r", encoding="utf-8", newline="") as handle:
                readings = parse_readings(handle)
        except FileNotFoundError as exc:
            logger.error(
                "Readings file not found",
                extra={"source_path": str(self.path), "reason": "missing"},
            )
            raise SourceUnavailable(str(self.path), "file not found") from exc
        except (OSError, UnicodeDecodeError) as exc:
            logger.error(
                "Readings file could not be read",
                extra={"source_path": str(self.path), "reason": str(exc)},
            )
            raise SourceUnavailable(str(self.path), str(exc)) from exc

        logger.debug(
            "Loaded readings",
            extra={"source_path": str(self.path), "row_count": len(readings)},
        )
        return readings


def parse_readings(stream: TextIO) -> List[SensorReading]:
    """Parse CSV text into readings, preserving file order.

    The header is row 1. Any unparsable numeric cell aborts the whole load
    with :class:`InvalidReadingError`.
    """
    reader = csv.DictReader(stream)
    if not reader.fieldnames:
        return []

    columns = resolve_columns(reader.fieldnames)
    readings: List[SensorReading] = []
    for row_number, row in enumerate(reader, start=2):
        readings.append(_parse_row(row, columns, row_number))
    return readings


def resolve_columns(fieldnames: Sequence[str]) -> Dict[str, Optional[str]]:
    """Map canonical column names to the header spelling used in the file."""
    normalized = {name.strip().lower(): name for name in fieldnames if name}
    columns: Dict[str, Optional[str]] = {}
    for canonical, aliases in COLUMN_ALIASES.items():
        columns[canonical] = next(
            (normalized[alias] for alias in aliases if alias in normalized), None
        )

    missing = [name for name in REQUIRED_COLUMNS if columns[name] is None]
    if missing:
        raise InvalidReadingError(
            ", ".join(missing),
            row_number=1,
            reason="missing from the CSV header",
        )
    return columns


def _parse_row(
    row: Mapping[str, Optional[str]],
    columns: Mapping[str, Optional[str]],
    row_number: int,
) -> SensorReading:
    def cell(canonical: str) -> str:
        header = columns[canonical]
        if header is None:
            return ""
        return (row.get(header) or "").strip()

    return SensorReading(
        timestamp=cell("date"),
        moisture=_parse_number("moisture", cell("moisture"), row_number),
        ph=_parse_number("ph", cell("ph"), row_number),
        pest_probability=_parse_number("pest_prob", cell("pest_prob"), row_number),
        temperature=_parse_number("temp", cell("temp"), row_number),
        ndvi=cell("ndvi"),
    )


def _parse_number(field: str, raw: str, row_number: int) -> float:
    if not raw:
        logger.warning(
            "Missing numeric value",
            extra={"row_number": row_number, "field": field},
        )
        raise InvalidReadingError(field, raw, row_number=row_number, reason="missing")
    try:
        value = float(raw)
    except ValueError as exc:
        logger.warning(
            "Invalid numeric value",
            extra={"row_number": row_number, "field": field, "invalid_value": raw},
        )
        raise InvalidReadingError(
            field, raw, row_number=row_number, reason="not a number"
        ) from exc
    if not math.isfinite(value):
        logger.warning(
            "Non-finite numeric value",
            extra={"row_number": row_number, "field": field, "invalid_value": raw},
        )
        raise InvalidReadingError(field, raw, row_number=row_number)
    return value


@lru_cache
def build_default_source(path: Optional[str] = None) -> CsvReadingSource:
    data_path = get_settings().data_path if path is None else path
    return CsvReadingSource(Path(data_path))
