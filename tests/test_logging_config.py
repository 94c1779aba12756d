from __future__ import annotations

import logging

from logging_config import ReadingContextFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="storage.csv_source",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Invalid numeric value",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context() -> None:
    formatter = ReadingContextFormatter(fmt="%(message)s")

    message = formatter.format(_record(row_number=3, field="ph", invalid_value="acid"))

    assert message == "Invalid numeric value | row_number=3 field=ph invalid_value=acid"


def test_formatter_skips_unknown_and_empty_context() -> None:
    formatter = ReadingContextFormatter(fmt="%(message)s")

    message = formatter.format(_record(unrelated="x", field=None))

    assert message == "Invalid numeric value"
