"""
report.py

What this file does:
  - Two read-only views over NightStats, both sorted ascending by night:
      * stage_series(): per-stage hours lists, ready for plotting
      * summary_lines(): one tab-separated text line per night

This file does NOT:
  - Touch matplotlib (see chart_summary.py)
  - Print anything
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from .aggregate import NightStats
from .time_utils import format_duration
from .trend import TrendLine, apply_floor, fit_trend


@dataclass(frozen=True)
class Stage:
    label: str  # value as it appears in the export
    name: str
    color: str


# Order here is the column order of the text summary.
STAGES: List[Stage] = [
    Stage("inBed", "Bed", "#FF0000"),
    Stage("asleepCore", "Core", "#00FF00"),
    Stage("asleepREM", "REM", "#FF00FF"),
    Stage("asleepDeep", "Deep", "#007A7A"),
    Stage("awake", "Awake", "#808080"),
]

CHART_STAGES: List[Stage] = [s for s in STAGES if s.label != "inBed"]

SESSION_SERIES_NAME = "Sessions"
SESSION_SERIES_COLOR = "#FF9B9C"


@dataclass(frozen=True)
class StageSeries:
    nights: List[date]
    hours: Dict[str, List[float]]  # keyed by Stage.label
    session_counts: List[int]

    @property
    def positions(self) -> List[float]:
        """Ordinal night index, the x used for trend fitting."""
        return [float(i) for i in range(len(self.nights))]

    def __len__(self) -> int:
        return len(self.nights)


def stage_series(
    stats: NightStats,
    stages: Sequence[Stage] = CHART_STAGES,
    *,
    floor: Optional[float] = None,
) -> StageSeries:
    """
    Hours per stage per night. With floor set, zero durations become floor
    (a log axis cannot show 0).
    """
    nights = stats.nights()
    hours: Dict[str, List[float]] = {}
    for stage in stages:
        values = [stats.duration(n, stage.label).total_seconds() / 3600.0 for n in nights]
        hours[stage.label] = apply_floor(values, floor) if floor is not None else values
    return StageSeries(
        nights=nights,
        hours=hours,
        session_counts=[stats.session_count(n) for n in nights],
    )


def stage_trends(series: StageSeries) -> Dict[str, Optional[TrendLine]]:
    xs = series.positions
    return {label: fit_trend(xs, ys) for label, ys in series.hours.items()}


def summary_line(stats: NightStats, night: date, stages: Sequence[Stage] = STAGES) -> str:
    parts = [night.isoformat()]
    for stage in stages:
        parts.append(f"{stage.name}: {format_duration(stats.duration(night, stage.label).total_seconds())}")
    parts.append(f"{SESSION_SERIES_NAME}: {stats.session_count(night)}")
    return "\t".join(parts)


def summary_lines(stats: NightStats, stages: Sequence[Stage] = STAGES) -> List[str]:
    """Title line followed by one line per night, ascending."""
    lines = ["Sleep Statistics by Date:"]
    lines.extend(summary_line(stats, night, stages) for night in stats.nights())
    return lines


def stages_with(extra_bed: bool) -> Tuple[Stage, ...]:
    """Stages to chart; the in-bed series is opt-in."""
    return tuple(STAGES if extra_bed else CHART_STAGES)
