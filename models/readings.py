"""Domain models for water-level readings and chart-ready series."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RawReading(BaseModel):
    """A single reading as delivered by the water-level API."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    time: datetime = Field(..., alias="Time")
    level: float = Field(..., alias="Level", allow_inf_nan=False)
    location: str = Field(..., alias="Location")


@dataclass(frozen=True, slots=True)
class Series:
    """Chart-ready shape of a batch of readings."""

    labels: tuple[str, ...]
    levels: tuple[float, ...]
    location: str
    date: str
    count: int

    def __post_init__(self) -> None:
        if not (len(self.labels) == len(self.levels) == self.count):
            raise ValueError(
                f"Series is misaligned: {len(self.labels)} labels, "
                f"{len(self.levels)} levels, count={self.count}"
            )


@dataclass(frozen=True, slots=True)
class FormatOptions:
    decimals: int = 0
    decimal_point: str = "."
    thousands_separator: str = ","
