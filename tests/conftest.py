"""Shared test fixtures."""

import csv
import io
from datetime import datetime, timezone

import pytest

from sleep_stats.records import SleepInterval

HEADER = ["sourceName", "productType", "value", "startDate", "endDate", "creationDate"]


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def interval(start: datetime, end: datetime, stage: str) -> SleepInterval:
    return SleepInterval(start=start, end=end, stage=stage)


def csv_row(product: str, start: str, end: str, stage: str, *, delimiter: str = ",") -> str:
    """One export line in HEADER order; fields like "Watch6,1" get quoted."""
    buf = io.StringIO()
    csv.writer(buf, delimiter=delimiter, lineterminator="").writerow(["Health", product, stage, start, end, end])
    return buf.getvalue()


@pytest.fixture
def write_export(tmp_path):
    """Write a CSV export under tmp_path and return its path."""

    def _write(rows, *, header=HEADER, sep_line=None, name="export.csv"):
        lines = []
        if sep_line is not None:
            lines.append(sep_line)
        lines.append(",".join(header))
        lines.extend(rows)
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def scenario_rows():
    return [
        csv_row("Watch6,1", "2024-01-01 23:00:00 +0000", "2024-01-02 01:00:00 +0000", "asleepCore"),
        csv_row("Watch6,1", "2024-01-02 01:00:00 +0000", "2024-01-02 01:30:00 +0000", "awake"),
        csv_row("iPhone14,2", "2024-01-01 23:00:00 +0000", "2024-01-02 00:00:00 +0000", "inBed"),
    ]
