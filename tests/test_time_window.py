"""
Tests for journey_analytics/core/time_window.py
"""

from datetime import timedelta

import pytest

from journey_analytics.core.time_window import (
    filter_journeys_in_window,
    in_window,
    trailing_windows,
)
from tests.conftest import NOW, make_journey


@pytest.fixture
def daily_journeys():
    """One journey per day for the last 20 days, newest first."""
    return [
        make_journey(f"d{k}", [(0.0, 0.0)], start_time=NOW - timedelta(days=k))
        for k in range(20)
    ]


class TestFilter:

    def test_half_open(self):
        start, end = NOW - timedelta(days=1), NOW
        assert in_window(make_journey(start_time=start), start, end) is True
        assert in_window(make_journey(start_time=end), start, end) is False

    def test_selects_range_in_input_order(self, daily_journeys):
        selected = filter_journeys_in_window(
            daily_journeys, NOW - timedelta(days=14), NOW - timedelta(days=7),
        )
        assert [j.id for j in selected] == [f"d{k}" for k in range(8, 15)]

    def test_empty_window(self, daily_journeys):
        assert filter_journeys_in_window(daily_journeys, NOW, NOW) == []

    def test_no_journeys(self):
        assert filter_journeys_in_window([], NOW - timedelta(days=1), NOW) == []

    def test_naive_window_against_aware_journeys(self, daily_journeys):
        naive_end = NOW.replace(tzinfo=None)
        selected = filter_journeys_in_window(daily_journeys, naive_end - timedelta(days=2), naive_end)
        assert [j.id for j in selected] == ['d1', 'd2']

    def test_naive_journey_against_aware_window(self):
        journey = make_journey(start_time=NOW.replace(tzinfo=None))
        assert in_window(journey, NOW, NOW + timedelta(hours=1)) is True

    def test_inverted_window_rejected(self, daily_journeys):
        with pytest.raises(ValueError):
            filter_journeys_in_window(daily_journeys, NOW, NOW - timedelta(days=1))


class TestTrailingWindows:

    def test_default_week(self):
        current, prior = trailing_windows(NOW)
        assert current == (NOW - timedelta(days=7), NOW)
        assert prior == (NOW - timedelta(days=14), NOW - timedelta(days=7))

    def test_windows_are_adjacent(self):
        current, prior = trailing_windows(NOW, days=3)
        assert prior[1] == current[0]

    def test_windows_partition_journeys(self, daily_journeys):
        current, prior = trailing_windows(NOW, days=5)
        a = filter_journeys_in_window(daily_journeys, *current)
        b = filter_journeys_in_window(daily_journeys, *prior)
        assert not {j.id for j in a} & {j.id for j in b}
        assert len(a) == len(b) == 5
