"""
trend.py

What this file does:
  - Ordinary least-squares line (y = intercept + slope * x) for chart annotation.
  - Replaces zero durations with a small floor so a log axis can show them.

Degenerate input (fewer than 2 points, or every x equal) has no defined slope:
fit_trend returns None and the chart simply omits the trend line.

This file does NOT:
  - Render anything
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

# Hours plotted in place of a zero duration. Tunable (SLEEP_STATS_ZERO_FLOOR).
ZERO_FLOOR_HOURS = 0.01

_EPS = 1e-12


@dataclass(frozen=True)
class TrendLine:
    intercept: float
    slope: float

    def at(self, x: float) -> float:
        return self.intercept + self.slope * x

    def evaluate(self, xs: Sequence[float]) -> List[float]:
        return [self.at(x) for x in xs]


def fit_trend(xs: Sequence[float], ys: Sequence[float]) -> Optional[TrendLine]:
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys differ in length ({len(xs)} != {len(ys)})")
    n = len(xs)
    if n < 2:
        return None

    mean_x = sum(xs) / n
    mean_y = sum(ys) / n
    sxx = sum((x - mean_x) ** 2 for x in xs)
    if sxx < _EPS:
        return None
    sxy = sum((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys))

    slope = sxy / sxx
    return TrendLine(intercept=mean_y - slope * mean_x, slope=slope)


def apply_floor(values: Sequence[float], floor: float = ZERO_FLOOR_HOURS) -> List[float]:
    """Swap exact zeros for floor; everything else passes through."""
    if floor <= 0:
        raise ValueError(f"floor must be positive, got {floor}")
    return [floor if v == 0 else float(v) for v in values]
