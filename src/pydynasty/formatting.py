"""Averaging, rounding and number rendering shared by the report builders."""

from __future__ import annotations

import math
from statistics import fmean
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (``round`` would go to even)."""

    return int(math.floor(value + 0.5))


def round_tenth(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def format_number(value: float) -> str:
    """Render integral floats without a trailing ``.0`` (``29.0`` -> ``29``)."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def mean_or_zero(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return fmean(values)
