"""
nights.py

What this file does:
  - Decides which "night" (a calendar date) each SleepInterval belongs to.
  - Buckets intervals by that night.

Two boundary policies:
  - AS_IS: the night is the UTC calendar date of the interval start.
    Right when timestamps are already normalized to one zone (the parser does this).
  - SHIFT_BEFORE_NOON: starts before 12:00 count toward the previous date, so a
    session crossing midnight stays in one bucket. Meant for local-time input.

This file does NOT:
  - Read files
  - Sum durations
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from .records import SleepInterval

NOON_HOUR = 12


class BoundaryPolicy(str, Enum):
    AS_IS = "as-is"
    SHIFT_BEFORE_NOON = "shift-before-noon"

    @classmethod
    def from_name(cls, name: str) -> "BoundaryPolicy":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown boundary policy {name!r}. Use one of: {choices}") from None


NightBuckets = Dict[date, Tuple[SleepInterval, ...]]


def night_key(interval: SleepInterval, policy: BoundaryPolicy = BoundaryPolicy.AS_IS) -> date:
    start = interval.start
    if policy is BoundaryPolicy.SHIFT_BEFORE_NOON and start.hour < NOON_HOUR:
        return (start - timedelta(days=1)).date()
    return start.date()


def group_by_night(
    intervals: Iterable[SleepInterval],
    policy: BoundaryPolicy = BoundaryPolicy.AS_IS,
) -> NightBuckets:
    """Every interval ends up in exactly one bucket; nothing is dropped."""
    grouped: Dict[date, List[SleepInterval]] = {}
    for interval in intervals:
        grouped.setdefault(night_key(interval, policy), []).append(interval)
    return {night: tuple(items) for night, items in grouped.items()}
