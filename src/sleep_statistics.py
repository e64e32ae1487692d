#!/usr/bin/env python3
"""
sleep_statistics.py

Entry-point script: sleep export CSV -> chart file + per-night text summary.

What it does:
  1) Reads the export, keeping only Watch rows inside the optional date range
  2) Buckets intervals into nights (boundary policy: as-is or shift-before-noon)
  3) Sums stage durations per night and counts in-bed segments
  4) Calls chart_summary.py (renderer) to write the chart
  5) Prints one summary line per night to stdout, oldest first

Any failure (bad flag, unreadable file, malformed timestamp, render error)
prints a diagnostic and exits 1 before the summary is printed.

Env vars (see sleep_stats/config.py) set the defaults for the flags below.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from sleep_stats import config
from sleep_stats.aggregate import NightStats, aggregate_nights
from sleep_stats.errors import SleepStatsError, UsageError
from sleep_stats.log import log
from sleep_stats.nights import BoundaryPolicy, group_by_night
from sleep_stats.records import read_sleep_export
from sleep_stats.report import stage_series, stages_with, summary_lines
from sleep_stats.time_utils import parse_date_utc
from sleep_stats.trend import ZERO_FLOOR_HOURS

from chart_summary import render_stage_chart


@dataclass(frozen=True)
class RunOptions:
    file: Path
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    use_lines: bool = False
    log_scale: bool = True
    boundary: BoundaryPolicy = BoundaryPolicy.AS_IS
    output: Path = Path(config.OUTPUT_PATH)
    device_prefix: str = config.DEVICE_PREFIX
    session_stage: str = config.SESSION_STAGE
    zero_floor: float = ZERO_FLOOR_HOURS
    show_bed: bool = False
    show_sessions: bool = False


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Chart and summarize per-night sleep stages from a sleep export CSV.")
    p.add_argument("--file", type=str, default="", help="CSV file containing sleep data.")
    p.add_argument("--start", type=str, default="", help="Start date (inclusive) in YYYY-MM-DD format.")
    p.add_argument("--end", type=str, default="", help="End date (inclusive) in YYYY-MM-DD format.")
    p.add_argument("--lines", action="store_true", help="Plot with lines; default is points.")
    p.add_argument("--linear", action="store_true", help="Linear duration axis; default is log.")
    p.add_argument(
        "--boundary",
        type=str,
        default=config.BOUNDARY_POLICY,
        help="Night boundary policy: as-is (UTC start date) or shift-before-noon.",
    )
    p.add_argument("--output", type=str, default=config.OUTPUT_PATH, help="Chart output path (.svg, .png, .pdf).")
    p.add_argument("--device-prefix", type=str, default=config.DEVICE_PREFIX, help="Keep rows whose productType starts with this.")
    p.add_argument("--session-stage", type=str, default=config.SESSION_STAGE, help="Stage counted per night.")
    p.add_argument("--show-bed", action="store_true", help="Also chart the in-bed series.")
    p.add_argument("--show-sessions", action="store_true", help="Also chart the per-night session count.")
    return p


def _parse_date_flag(name: str, value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parse_date_utc(value)
    except ValueError as e:
        raise UsageError(f"Invalid {name} date format: {e}") from e


def options_from_args(args: argparse.Namespace) -> RunOptions:
    if not args.file:
        raise UsageError("Please provide the CSV file with --file.")

    try:
        boundary = BoundaryPolicy.from_name(args.boundary)
    except ValueError as e:
        raise UsageError(str(e)) from e

    try:
        zero_floor = float(config.ZERO_FLOOR)
    except ValueError:
        raise UsageError(f"SLEEP_STATS_ZERO_FLOOR must be a number, got {config.ZERO_FLOOR!r}") from None
    if zero_floor <= 0:
        raise UsageError(f"SLEEP_STATS_ZERO_FLOOR must be positive, got {zero_floor}")

    return RunOptions(
        file=Path(args.file),
        start=_parse_date_flag("start", args.start),
        end=_parse_date_flag("end", args.end),
        use_lines=args.lines,
        log_scale=not args.linear,
        boundary=boundary,
        output=Path(args.output),
        device_prefix=args.device_prefix,
        session_stage=args.session_stage,
        zero_floor=zero_floor,
        show_bed=args.show_bed,
        show_sessions=args.show_sessions,
    )


def compute_stats(opts: RunOptions) -> NightStats:
    intervals = read_sleep_export(
        opts.file,
        start_filter=opts.start,
        end_filter=opts.end,
        device_prefix=opts.device_prefix,
    )
    log(f"Kept {len(intervals)} interval(s) from {opts.file}")

    buckets = group_by_night(intervals, opts.boundary)
    stats = aggregate_nights(buckets, session_stage=opts.session_stage)
    log(f"Aggregated {len(stats)} night(s) (boundary={opts.boundary.value})")
    return stats


def run_once(opts: RunOptions) -> List[str]:
    """
    Produce the chart and return the summary lines (not yet printed).

    Nothing is written unless the whole export parsed.
    """
    stats = compute_stats(opts)

    stages = stages_with(opts.show_bed)
    series = stage_series(stats, stages, floor=opts.zero_floor if opts.log_scale else None)

    out_path = render_stage_chart(
        series,
        stages,
        opts.output,
        use_lines=opts.use_lines,
        log_scale=opts.log_scale,
        show_sessions=opts.show_sessions,
        floor=opts.zero_floor,
    )
    log(f"Wrote: {out_path}")

    return summary_lines(stats)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        lines = run_once(options_from_args(args))
    except SleepStatsError as e:
        print(f"ERROR: {e}", file=sys.stderr, flush=True)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
