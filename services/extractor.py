"""Validation and reshaping of raw API payloads into chart-ready series."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone, tzinfo
from typing import Any, Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError

from models.readings import RawReading, Series

logger = logging.getLogger(__name__)


class EmptyDataError(Exception):
    """Raised when a payload is present but carries no readings."""


class MalformedPayloadError(ValueError):
    """Raised when a payload or one of its entries has an unexpected shape."""


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Return the tzinfo for an IANA zone name, falling back to UTC."""
    candidate = (name or "").strip()
    if not candidate or candidate.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(candidate)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown display timezone, using UTC", extra={"reason": candidate})
        return timezone.utc


def format_time_label(moment: datetime) -> str:
    """Time of day in the en-US style, e.g. ``3:04:05 PM``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"


def format_date_label(moment: datetime) -> str:
    """Calendar date in the en-US style, e.g. ``10/19/2026``."""
    return f"{moment.month}/{moment.day}/{moment.year}"


class SeriesExtractor:
    """Turns a decoded payload into a :class:`Series`."""

    def __init__(self, display_tz: Optional[tzinfo] = None) -> None:
        self.display_tz = display_tz or timezone.utc

    def extract(self, payload: Any) -> Series:
        entries = self._entries(payload)

        labels: list[str] = []
        levels: list[float] = []
        location = ""
        date = ""

        for key, entry in entries:
            reading = self._validate(key, entry)
            moment = self._localize(reading.time)

            labels.append(format_time_label(moment))
            levels.append(reading.level)
            # Assumes a single-location feed: the last entry wins.
            location = reading.location
            if not date:
                date = format_date_label(moment)

        if not labels:
            raise EmptyDataError("No data available")

        series = Series(
            labels=tuple(labels),
            levels=tuple(levels),
            location=location,
            date=date,
            count=len(labels),
        )
        logger.debug(
            "Extracted series",
            extra={"point_count": series.count, "location": series.location},
        )
        return series

    @staticmethod
    def _entries(payload: Any) -> Iterable[tuple[Any, Any]]:
        if payload is None:
            raise EmptyDataError("No data available")
        if isinstance(payload, Mapping):
            return list(payload.items())
        if isinstance(payload, (list, tuple)):
            return list(enumerate(payload))
        raise MalformedPayloadError(
            f"Expected a mapping or list of readings, got {type(payload).__name__}."
        )

    @staticmethod
    def _validate(key: Any, entry: Any) -> RawReading:
        try:
            return RawReading.model_validate(entry)
        except ValidationError as exc:
            logger.warning(
                "Rejecting malformed reading",
                extra={"entry_key": key, "reason": f"{exc.error_count()} validation errors"},
            )
            raise MalformedPayloadError(f"Reading {key!r} is malformed: {exc}") from exc

    def _localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self.display_tz)
        return moment.astimezone(self.display_tz)
