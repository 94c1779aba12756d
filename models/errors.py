"""Exceptions raised while loading and assessing sensor readings."""

from __future__ import annotations

from typing import Optional


class AgroVistaError(Exception):
    """Base class for domain errors reported at the response boundary."""


class InvalidReadingError(AgroVistaError, ValueError):
    """A reading carries a numeric field that is missing or not a finite number."""

    def __init__(
        self,
        field: str,
        value: object = None,
        row_number: Optional[int] = None,
        reason: str = "not a finite number",
    ) -> None:
        self.field = field
        self.value = value
        self.row_number = row_number
        self.reason = reason
        location = f"row {row_number}: " if row_number is not None else ""
        super().__init__(f"{location}field {field!r} is {reason} (got {value!r})")


class SourceUnavailable(AgroVistaError):
    """The readings file is missing or cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Readings source {path!r} is unavailable: {reason}")
