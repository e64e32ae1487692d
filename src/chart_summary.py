#!/usr/bin/env python3
"""
chart_summary.py

What this file does:
  - PURE rendering. Given a StageSeries (hours per stage per night, already
    sorted and floored) it writes a time-series chart:
      * one series per stage (lines or circle markers)
      * a least-squares trend line per stage in the same color
      * optional session-count series
  - Output format comes from the file suffix (.svg, .png, .pdf).

What this file does NOT do:
  - Read the export
  - Group or sum anything

Any matplotlib failure is fatal: a broken chart means the run failed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

import matplotlib
matplotlib.use("Agg")  # headless-safe

import matplotlib.dates as mdates
import matplotlib.pyplot as plt

from sleep_stats.errors import ChartRenderError
from sleep_stats.report import SESSION_SERIES_COLOR, SESSION_SERIES_NAME, Stage, StageSeries, stage_trends
from sleep_stats.trend import ZERO_FLOOR_HOURS, TrendLine, apply_floor, fit_trend

PAGE_SIZE_INCHES = (15, 8)
LINE_WIDTH = 2.0
MARKER_SIZE = 6.0  # points, ~3pt radius
TICK_FORMAT = "%Y-%m"


def _plot_series(ax, xs, ys, trend: Optional[TrendLine], positions, *, label: str, color: str, use_lines: bool) -> None:
    if use_lines:
        ax.plot(xs, ys, color=color, linewidth=LINE_WIDTH, label=label)
    else:
        ax.plot(xs, ys, linestyle="none", marker="o", markersize=MARKER_SIZE, color=color, label=label)

    if trend is not None:
        ax.plot(xs, trend.evaluate(positions), color=color, linewidth=LINE_WIDTH)


def render_stage_chart(
    series: StageSeries,
    stages: Sequence[Stage],
    output_path: str | Path,
    *,
    use_lines: bool = False,
    log_scale: bool = True,
    show_sessions: bool = False,
    floor: float = ZERO_FLOOR_HOURS,
    title: str = "Sleep Statistics Over Time",
) -> Path:
    """
    Public API: write the chart and return its path.

    Args:
      series: StageSeries from report.stage_series (pass floor there when log_scale)
      stages: which stages of series.hours to draw, in legend order
      output_path: destination; parent directories are created
    """
    output_path = Path(output_path)
    try:
        fig, ax = plt.subplots(figsize=PAGE_SIZE_INCHES)
        try:
            ax.set_title(title)
            ax.set_xlabel("Date")
            ax.set_ylabel("Duration (hours)")
            if log_scale:
                ax.set_yscale("log")

            xs = [mdates.date2num(datetime(n.year, n.month, n.day, tzinfo=timezone.utc)) for n in series.nights]
            positions = series.positions
            trends = stage_trends(series)

            for stage in stages:
                ys = series.hours.get(stage.label)
                if ys is None:
                    continue
                _plot_series(
                    ax, xs, ys, trends.get(stage.label), positions,
                    label=stage.name, color=stage.color, use_lines=use_lines,
                )

            if show_sessions:
                counts = [float(c) for c in series.session_counts]
                if log_scale and counts:
                    counts = apply_floor(counts, floor)
                _plot_series(
                    ax, xs, counts, fit_trend(positions, counts), positions,
                    label=SESSION_SERIES_NAME, color=SESSION_SERIES_COLOR, use_lines=use_lines,
                )

            ax.xaxis_date()
            ax.xaxis.set_major_locator(mdates.AutoDateLocator())
            ax.xaxis.set_major_formatter(mdates.DateFormatter(TICK_FORMAT))

            if ax.get_legend_handles_labels()[0]:
                ax.legend(loc="upper center", ncol=len(stages) + int(show_sessions), frameon=False)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_path, bbox_inches="tight")
        finally:
            plt.close(fig)
    except Exception as e:
        raise ChartRenderError(f"could not render chart to {output_path}: {e}") from e

    return output_path
