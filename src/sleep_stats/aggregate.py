"""
aggregate.py

What this file does:
  - Sums interval durations per night per stage label.
  - Counts, per night, how many intervals carry the "session" stage
    (inBed by default). More segments for the same time in bed means
    more interruptions.

Notes:
  - Each night is a fold: every step returns a fresh accumulator, so the
    result does not depend on the order intervals arrive in.
  - Duplicates are not removed; every interval counts.
  - A stage with no intervals on a night is simply absent (reads as zero).

This file does NOT:
  - Decide night boundaries
  - Format or plot anything
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from functools import reduce
from typing import Dict, Iterable, List, Mapping

from .nights import NightBuckets
from .records import SleepInterval

DEFAULT_SESSION_STAGE = "inBed"

ZERO = timedelta(0)


@dataclass(frozen=True)
class NightTotals:
    stages: Mapping[str, timedelta] = field(default_factory=dict)
    session_count: int = 0


@dataclass(frozen=True)
class NightStats:
    durations: Mapping[date, Mapping[str, timedelta]]
    session_counts: Mapping[date, int]

    def nights(self) -> List[date]:
        return sorted(self.durations)

    def duration(self, night: date, stage: str) -> timedelta:
        return self.durations.get(night, {}).get(stage, ZERO)

    def session_count(self, night: date) -> int:
        return self.session_counts.get(night, 0)

    def total(self, night: date) -> timedelta:
        return sum(self.durations.get(night, {}).values(), ZERO)

    def __len__(self) -> int:
        return len(self.durations)


def add_interval(totals: NightTotals, interval: SleepInterval, *, session_stage: str) -> NightTotals:
    stages = dict(totals.stages)
    stages[interval.stage] = stages.get(interval.stage, ZERO) + (interval.end - interval.start)
    count = totals.session_count + (1 if interval.stage == session_stage else 0)
    return NightTotals(stages=stages, session_count=count)


def summarize_night(
    intervals: Iterable[SleepInterval],
    *,
    session_stage: str = DEFAULT_SESSION_STAGE,
) -> NightTotals:
    return reduce(
        lambda acc, iv: add_interval(acc, iv, session_stage=session_stage),
        intervals,
        NightTotals(),
    )


def aggregate_nights(
    buckets: NightBuckets,
    *,
    session_stage: str = DEFAULT_SESSION_STAGE,
) -> NightStats:
    per_night: Dict[date, NightTotals] = {
        night: summarize_night(items, session_stage=session_stage)
        for night, items in buckets.items()
    }
    return NightStats(
        durations={night: dict(t.stages) for night, t in per_night.items()},
        session_counts={night: t.session_count for night, t in per_night.items()},
    )

