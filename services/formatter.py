"""Display formatting for numeric chart values."""

from __future__ import annotations

import math
from typing import Any, Optional

from models.readings import FormatOptions

DEFAULT_OPTIONS = FormatOptions()
MAX_DECIMALS = 20


def _coerce_number(value: Any) -> float:
    text = str(value).replace(",", "").replace(" ", "")
    try:
        number = float(text)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _coerce_decimals(decimals: Any) -> int:
    try:
        parsed = float(decimals)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(parsed):
        return 0
    return min(abs(int(parsed)), MAX_DECIMALS)


def _round_half_away_from_zero(number: float, decimals: int) -> int:
    # Operates on the scaled float, so inputs like 1.005 may land on the low side.
    scaled = number * 10**decimals
    if not math.isfinite(scaled):
        # Too large to carry a fraction; scale exactly in integers.
        return int(number) * 10**decimals
    whole = math.floor(abs(scaled))
    magnitude = whole + 1 if abs(scaled) - whole >= 0.5 else whole
    return -magnitude if scaled < 0 else magnitude


def format_number(value: Any, options: Optional[FormatOptions] = None) -> str:
    """Format ``value`` with grouped thousands and a fixed number of decimals.

    ``value`` may be a number or a string; embedded thousands separators and
    spaces are stripped before parsing and anything unparsable counts as 0.
    """
    opts = options or DEFAULT_OPTIONS
    decimals = _coerce_decimals(opts.decimals)
    number = _coerce_number(value)

    scaled = _round_half_away_from_zero(number, decimals)
    sign = "-" if scaled < 0 else ""
    whole, fraction = divmod(abs(scaled), 10**decimals)

    integer_part = f"{whole:,}".replace(",", opts.thousands_separator)
    if not decimals:
        return f"{sign}{integer_part}"
    return f"{sign}{integer_part}{opts.decimal_point}{fraction:0{decimals}d}"


class NumberFormatter:
    """Callable formatter bound to a fixed set of options."""

    def __init__(self, options: Optional[FormatOptions] = None) -> None:
        self.options = options or DEFAULT_OPTIONS

    def format(self, value: Any) -> str:
        return format_number(value, self.options)

    def __call__(self, value: Any) -> str:
        return self.format(value)
