from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.fetcher",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Water level API returned an error status",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    message = formatter.format(_record(url="https://water.example.test", status_code=503, other="x"))

    assert message == (
        "Water level API returned an error status | url=https://water.example.test status_code=503"
    )


def test_formatter_skips_missing_and_none_values() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["point_count", "location"])

    assert formatter.format(_record(location=None)) == "Water level API returned an error status"
