"""Tests for export timestamp and CLI date parsing."""

import pytest

from sleep_stats.time_utils import parse_date_utc, parse_export_time
from tests.conftest import utc


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-02 01:30:00 +0000", utc(2024, 1, 2, 1, 30)),
        ("2024-01-02 01:30:00 -0500", utc(2024, 1, 2, 6, 30)),
        ("2024-01-02 01:30:00 +0530", utc(2024, 1, 1, 20, 0)),
        ("  2024-01-02 01:30:00 +0000\n", utc(2024, 1, 2, 1, 30)),
    ],
)
def test_numeric_offsets(value, expected):
    assert parse_export_time(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        "2024-01-02 01:30:00 Z",
        "2024-01-02 01:30:00 +00:00",
        "2024-01-02 01:30:00 +000",
        "2024-01-02 01:30:00",
        "2024-01-02T01:30:00 +0000",
    ],
    ids=["zulu", "colon_offset", "short_offset", "no_offset", "iso_t_separator"],
)
def test_rejects_other_offset_forms(value):
    with pytest.raises(ValueError):
        parse_export_time(value)


def test_date_is_midnight_utc():
    assert parse_date_utc("2024-02-29") == utc(2024, 2, 29)


@pytest.mark.parametrize("value", ["2024-2-30", "02/01/2024", ""])
def test_bad_dates(value):
    with pytest.raises(ValueError):
        parse_date_utc(value)
