"""Tests for per-night stage totals and session counts."""

import random
from datetime import date, timedelta

import pytest

from sleep_stats.aggregate import NightStats, aggregate_nights, summarize_night
from sleep_stats.nights import group_by_night
from sleep_stats.records import read_sleep_export
from tests.conftest import interval, utc


@pytest.fixture
def night_intervals():
    return [
        interval(utc(2024, 1, 1, 22), utc(2024, 1, 2, 2), "inBed"),
        interval(utc(2024, 1, 2, 3), utc(2024, 1, 2, 6), "inBed"),
        interval(utc(2024, 1, 1, 22, 15), utc(2024, 1, 1, 23, 45), "asleepCore"),
        interval(utc(2024, 1, 1, 23, 45), utc(2024, 1, 2, 0, 10), "asleepREM"),
        interval(utc(2024, 1, 2, 0, 10), utc(2024, 1, 2, 0, 50), "asleepDeep"),
        interval(utc(2024, 1, 2, 0, 50), utc(2024, 1, 2, 0, 55), "awake"),
        interval(utc(2024, 1, 2, 0, 50), utc(2024, 1, 2, 0, 55), "awake"),
    ]


class TestSummarizeNight:
    def test_stage_totals(self, night_intervals):
        totals = summarize_night(night_intervals)
        assert totals.stages["inBed"] == timedelta(hours=7)
        assert totals.stages["asleepCore"] == timedelta(hours=1, minutes=30)
        assert totals.stages["asleepREM"] == timedelta(minutes=25)
        assert totals.stages["asleepDeep"] == timedelta(minutes=40)
        # duplicates are not removed
        assert totals.stages["awake"] == timedelta(minutes=10)

    def test_session_count(self, night_intervals):
        assert summarize_night(night_intervals).session_count == 2
        assert summarize_night(night_intervals, session_stage="awake").session_count == 2
        assert summarize_night(night_intervals, session_stage="asleepDeep").session_count == 1

    def test_order_independent(self, night_intervals):
        expected = summarize_night(night_intervals)
        rng = random.Random(7)
        for _ in range(10):
            shuffled = list(night_intervals)
            rng.shuffle(shuffled)
            assert summarize_night(shuffled) == expected

    def test_empty_night(self):
        totals = summarize_night([])
        assert dict(totals.stages) == {}
        assert totals.session_count == 0


class TestAggregateNights:
    def test_conservation(self, night_intervals):
        extra = [interval(utc(2024, 1, 5, 1), utc(2024, 1, 5, 4), "asleepCore")]
        buckets = group_by_night(night_intervals + extra)
        stats = aggregate_nights(buckets)
        for night, items in buckets.items():
            expected = sum((iv.end - iv.start for iv in items), timedelta(0))
            assert stats.total(night) == expected

    def test_absent_stage_reads_zero(self, night_intervals):
        stats = aggregate_nights(group_by_night(night_intervals))
        assert stats.duration(date(2024, 1, 1), "awake") == timedelta(0)
        assert stats.duration(date(2030, 1, 1), "inBed") == timedelta(0)
        assert stats.session_count(date(2030, 1, 1)) == 0

    def test_nights_sorted(self):
        buckets = group_by_night(
            [
                interval(utc(2024, 2, 3, 1), utc(2024, 2, 3, 2), "awake"),
                interval(utc(2023, 12, 31, 1), utc(2023, 12, 31, 2), "awake"),
                interval(utc(2024, 1, 15, 1), utc(2024, 1, 15, 2), "awake"),
            ]
        )
        stats = aggregate_nights(buckets)
        assert stats.nights() == [date(2023, 12, 31), date(2024, 1, 15), date(2024, 2, 3)]
        assert len(stats) == 3

    def test_empty(self):
        stats = aggregate_nights({})
        assert stats == NightStats(durations={}, session_counts={})
        assert stats.nights() == []


def test_watch_phone_scenario(write_export, scenario_rows):
    intervals = read_sleep_export(write_export(scenario_rows))
    stats = aggregate_nights(group_by_night(intervals))

    assert stats.nights() == [date(2024, 1, 1), date(2024, 1, 2)]
    assert dict(stats.durations[date(2024, 1, 1)]) == {"asleepCore": timedelta(hours=2)}
    assert dict(stats.durations[date(2024, 1, 2)]) == {"awake": timedelta(minutes=30)}
    assert stats.session_count(date(2024, 1, 1)) == 0
