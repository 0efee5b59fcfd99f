"""
Tests for journey_analytics/core/stats.py

Validates totals, averages, anxiety-free share and the composed
furthest/safe-area figures.
"""

from dataclasses import replace

import pytest

from journey_analytics.core.models import (
    CumulativeStats,
    Feeling,
    FeelingCheckpoint,
    GeoPoint,
    PathSample,
)
from journey_analytics.core.stats import (
    all_path_points,
    anxiety_free_percentage,
    build_stats,
    compose_stats,
)
from tests.conftest import HOME, make_journey, offset


def _calm_week(feelings_of_last=('good',)):
    return [
        make_journey('a', [HOME], feelings=['great', 'okay'], distance=1000, duration=600),
        make_journey('b', [HOME], feelings=['good'], distance=2000, duration=900),
        make_journey('c', [HOME], feelings=[], distance=500, duration=301),
        make_journey('d', [HOME], feelings=list(feelings_of_last), distance=1500, duration=1200),
    ]


class TestAnxietyFree:

    def test_all_calm(self):
        assert anxiety_free_percentage(_calm_week()) == 100.0

    def test_one_panic_capitalised(self):
        assert anxiety_free_percentage(_calm_week(['good', 'Panic'])) == 75.0

    def test_anxious_any_case(self):
        assert anxiety_free_percentage(_calm_week(['ANXIOUS'])) == 75.0

    def test_multiple_anxious_in_one_journey_counts_once(self):
        assert anxiety_free_percentage(_calm_week(['anxious', 'panic', 'anxious'])) == 75.0

    def test_no_checkpoints_is_anxiety_free(self):
        assert anxiety_free_percentage([make_journey()]) == 100.0

    def test_empty(self):
        assert anxiety_free_percentage([]) == 0.0


class TestBuildStats:

    def test_totals(self):
        stats = build_stats(_calm_week(), furthest=None, safe_area=None)
        assert stats.total_journeys == 4
        assert stats.total_distance_meters == 5000.0
        assert stats.total_duration_seconds == 3001
        assert stats.avg_journey_duration_seconds == 750
        assert stats.furthest_distance_meters == 0.0
        assert stats.safe_area_square_meters == 0.0

    def test_hesitations_counted(self):
        journeys = [
            make_journey('a', [HOME], hesitations=[(*HOME, 10), (*HOME, 20)]),
            make_journey('b', [HOME], hesitations=[(*HOME, 5)]),
        ]
        assert build_stats(journeys, None, None).total_hesitations == 3

    def test_empty(self):
        assert build_stats([], None, None) == CumulativeStats()

    def test_average_speed(self):
        stats = build_stats(_calm_week(), None, None)
        assert stats.average_speed_mps == pytest.approx(5000 / 3001)
        assert CumulativeStats().average_speed_mps == 0.0


class TestComposeStats:

    def test_empty(self):
        stats = compose_stats([])
        assert stats == CumulativeStats()
        assert stats.anxiety_free_percentage == 0.0

    def test_single_sample(self):
        stats = compose_stats([make_journey(points=[HOME], distance=0, duration=60)])
        assert stats.total_journeys == 1
        assert stats.furthest_distance_meters == 0.0
        assert stats.safe_area_square_meters == 0.0

    def test_furthest_and_safe_area(self):
        side = 400.0
        corners = [offset(HOME, n, e) for n, e in [(0, 0), (0, side), (side, side), (side, 0)]]
        points = [c for c in corners for _ in range(10)]
        filler = [offset(HOME, n, e) for n, e in [
            (100, 200), (200, 100), (200, 300), (300, 200),
            (150, 150), (250, 250), (150, 250), (250, 150),
        ]]
        journeys = [make_journey('a', [HOME] + points + filler + [offset(HOME, 2000, 0)])]
        stats = compose_stats(journeys)
        assert stats.furthest_distance_meters == pytest.approx(2000, rel=0.01)
        assert stats.safe_area_square_meters == pytest.approx(side * side, rel=0.02)

    def test_malformed_coordinates_ignored(self):
        bad = make_journey('a', [HOME, offset(HOME, 100, 0)])
        bad = replace(bad, path_samples=bad.path_samples + (
            PathSample(GeoPoint(float('nan'), 0.0)),
            PathSample(GeoPoint(95.0, 0.0)),
        ))
        stats = compose_stats([bad])
        assert stats.furthest_distance_meters == pytest.approx(100, rel=0.01)


def test_all_path_points_in_order():
    journeys = [make_journey('a', [(1, 1), (2, 2)]), make_journey('b', [(3, 3)])]
    assert all_path_points(journeys) == [GeoPoint(1, 1), GeoPoint(2, 2), GeoPoint(3, 3)]


class TestMalformedCoordinatesKeepCounts:

    def test_panic_checkpoint_without_location_counts(self):
        journey = make_journey('a', [HOME])
        journey = replace(journey, checkpoints=(
            FeelingCheckpoint(GeoPoint(float('nan'), 0.0), Feeling.PANIC),
        ))
        calm = make_journey('b', [HOME], feelings=['calm'])
        assert compose_stats([journey, calm]).anxiety_free_percentage == 50.0

    def test_checkpoint_with_no_location(self):
        journey = replace(make_journey('a', [HOME]), checkpoints=(
            FeelingCheckpoint(None, Feeling.ANXIOUS),
        ))
        assert compose_stats([journey]).anxiety_free_percentage == 0.0

    def test_out_of_range_hesitation_still_counted(self):
        journey = make_journey('a', [HOME], hesitations=[(*HOME, 30), (200.0, 0.0, 15)])
        assert compose_stats([journey]).total_hesitations == 2

    def test_explicit_hesitation_total(self):
        assert build_stats([make_journey()], None, None, total_hesitations=4).total_hesitations == 4
