"""
records.py

What this file does:
  - Reads a sleep-analysis CSV export (optionally preceded by a "sep=" line).
  - Resolves the interesting columns by header name, once, up front.
  - Keeps only rows from one device class (e.g. "Watch", not "iPhone").
  - Parses timestamps and applies the optional inclusive date-range filter.
  - Returns a flat list of SleepInterval values.

Key idea:
  - Device filtering is a legitimate skip. A bad timestamp on a kept row is not:
    it aborts the whole read, so there are never partial results.

This file does NOT:
  - Group intervals into nights
  - Sum durations
  - Render anything
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, TextIO

from .errors import MalformedRecordError, MissingColumnsError, SourceReadError
from .log import log
from .time_utils import parse_export_time

SEP_PREFIX = "sep="
DEFAULT_DELIMITER = ","

DEFAULT_DEVICE_PREFIX = "Watch"
DEVICE_COLUMN = "productType"
START_COLUMN = "startDate"
END_COLUMN = "endDate"
STAGE_COLUMN = "value"


@dataclass(frozen=True)
class SleepInterval:
    start: datetime
    end: datetime
    stage: str

    @property
    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()


@dataclass(frozen=True)
class ColumnMap:
    """Positions of the required columns, resolved from the header row."""

    device: int
    start: int
    end: int
    stage: int

    @property
    def width(self) -> int:
        return max(self.device, self.start, self.end, self.stage) + 1

    @classmethod
    def from_header(
        cls,
        header: Sequence[str],
        *,
        device_col: str = DEVICE_COLUMN,
        start_col: str = START_COLUMN,
        end_col: str = END_COLUMN,
        stage_col: str = STAGE_COLUMN,
    ) -> "ColumnMap":
        # first occurrence wins if a name repeats
        positions = {}
        for i, name in enumerate(header):
            positions.setdefault(name.strip().lstrip("\ufeff"), i)

        wanted = {"device": device_col, "start": start_col, "end": end_col, "stage": stage_col}
        missing = [name for name in wanted.values() if name not in positions]
        if missing:
            raise MissingColumnsError(missing)

        return cls(**{field: positions[name] for field, name in wanted.items()})


def read_delimiter(first_line: str) -> Optional[str]:
    """Return the declared separator if the line is a "sep=" declaration, else None."""
    if first_line[: len(SEP_PREFIX)] != SEP_PREFIX:
        return None
    declared = first_line[len(SEP_PREFIX):].rstrip("\r\n")
    return declared[:1] or DEFAULT_DELIMITER


def is_device_row(row: Sequence[str], columns: ColumnMap, prefix: str) -> bool:
    return len(row) > columns.device and row[columns.device].startswith(prefix)


def filter_device_rows(
    rows: Iterable[Sequence[str]],
    columns: ColumnMap,
    prefix: str = DEFAULT_DEVICE_PREFIX,
) -> Iterator[Sequence[str]]:
    """Yield only the rows whose device-class field starts with prefix."""
    for row in rows:
        if is_device_row(row, columns, prefix):
            yield row


def in_date_range(
    interval: SleepInterval,
    start_filter: Optional[datetime] = None,
    end_filter: Optional[datetime] = None,
) -> bool:
    """Both bounds inclusive; a missing bound imposes nothing."""
    if start_filter is not None and interval.start < start_filter:
        return False
    if end_filter is not None and interval.end > end_filter:
        return False
    return True


def row_to_interval(row: Sequence[str], columns: ColumnMap, *, line: Optional[int] = None) -> SleepInterval:
    if len(row) < columns.width:
        raise MalformedRecordError(
            f"expected at least {columns.width} fields, got {len(row)}", line=line
        )

    try:
        start = parse_export_time(row[columns.start])
        end = parse_export_time(row[columns.end])
    except ValueError as e:
        raise MalformedRecordError(f"invalid timestamp: {e}", line=line) from e

    if end < start:
        raise MalformedRecordError(
            f"end {row[columns.end]!r} is before start {row[columns.start]!r}", line=line
        )

    return SleepInterval(start=start, end=end, stage=row[columns.stage])


def parse_sleep_rows(
    stream: TextIO,
    *,
    start_filter: Optional[datetime] = None,
    end_filter: Optional[datetime] = None,
    device_prefix: str = DEFAULT_DEVICE_PREFIX,
    device_col: str = DEVICE_COLUMN,
    start_col: str = START_COLUMN,
    end_col: str = END_COLUMN,
    stage_col: str = STAGE_COLUMN,
) -> List[SleepInterval]:
    """Parse an already-open text stream. See read_sleep_export for the file wrapper."""
    first = stream.readline()
    if not first:
        raise SourceReadError("export is empty (no header row)")

    delimiter = read_delimiter(first)
    if delimiter is None:
        lines: Iterable[str] = _prepend(first, stream)
        delimiter = DEFAULT_DELIMITER
        line_offset = 0
    else:
        lines = stream
        line_offset = 1

    reader = csv.reader(lines, delimiter=delimiter)
    try:
        header = next(reader)
    except StopIteration:
        raise SourceReadError("export has no header row after the separator line") from None
    except csv.Error as e:
        raise SourceReadError(f"unreadable header row: {e}") from e

    columns = ColumnMap.from_header(
        header,
        device_col=device_col,
        start_col=start_col,
        end_col=end_col,
        stage_col=stage_col,
    )
    log(
        f"columns: {device_col}={columns.device} {start_col}={columns.start} "
        f"{end_col}={columns.end} {stage_col}={columns.stage} (delimiter {delimiter!r})"
    )

    intervals: List[SleepInterval] = []
    try:
        for row in filter_device_rows(reader, columns, device_prefix):
            interval = row_to_interval(row, columns, line=reader.line_num + line_offset)
            if in_date_range(interval, start_filter, end_filter):
                intervals.append(interval)
    except csv.Error as e:
        raise SourceReadError(f"line {reader.line_num + line_offset}: {e}") from e

    return intervals


def read_sleep_export(
    path: str | Path,
    *,
    start_filter: Optional[datetime] = None,
    end_filter: Optional[datetime] = None,
    device_prefix: str = DEFAULT_DEVICE_PREFIX,
    **column_names: str,
) -> List[SleepInterval]:
    """
    Read a sleep export from disk.

    Raises:
      SourceReadError       -> file missing/unreadable, no header
      MissingColumnsError   -> header lacks a required column
      MalformedRecordError  -> a kept row has a bad timestamp or too few fields
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            return parse_sleep_rows(
                f,
                start_filter=start_filter,
                end_filter=end_filter,
                device_prefix=device_prefix,
                **column_names,
            )
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"could not read {path}: {e}") from e


def _prepend(first: str, rest: Iterable[str]) -> Iterator[str]:
    yield first
    yield from rest
