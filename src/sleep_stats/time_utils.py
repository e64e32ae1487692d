"""
time_utils.py

What this file does:
  - Single place for parsing export timestamps into tz-aware UTC datetimes.
  - Parses the YYYY-MM-DD dates given on the command line.

This file does NOT:
  - Read files
  - Decide which night a timestamp belongs to
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

# e.g. "2024-01-01 23:00:00 -0500"
EXPORT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"
DATE_FORMAT = "%Y-%m-%d"

# %z alone would also take "+00:00" and "Z"
NUMERIC_OFFSET = re.compile(r" [+-]\d{4}$")


def parse_export_time(value: str) -> datetime:
    """Parse an export timestamp (numeric UTC offset) into a tz-aware UTC datetime."""
    value = value.strip()
    if not NUMERIC_OFFSET.search(value):
        raise ValueError(f"time data {value!r} does not end in a ±HHMM offset")
    dt = datetime.strptime(value, EXPORT_TIME_FORMAT)
    return dt.astimezone(timezone.utc)


def parse_date_utc(value: str) -> datetime:
    """Parse YYYY-MM-DD into midnight UTC of that day."""
    dt = datetime.strptime(value.strip(), DATE_FORMAT)
    return dt.replace(tzinfo=timezone.utc)


def format_duration(seconds: float) -> str:
    """7h30m0s style, rounded to the nearest second."""
    s = int(round(max(0.0, float(seconds))))
    h, rem = divmod(s, 3600)
    m, r = divmod(rem, 60)
    if h:
        return f"{h}h{m}m{r}s"
    if m:
        return f"{m}m{r}s"
    return f"{r}s"
