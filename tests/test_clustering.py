"""
Tests for journey_analytics/core/clustering.py

Validates greedy radius clustering: grouping, partitioning, centroid and
duration aggregation, and input-order dependence.
"""

import numpy as np
import pytest

from journey_analytics.core.clustering import cluster_hesitations
from journey_analytics.core.models import GeoPoint, HesitationEvent
from journey_analytics.utils.geo_utils import distance_meters
from tests.conftest import HOME, offset


def _events(specs):
    """specs: (north_m, east_m, seconds) relative to HOME."""
    return [
        HesitationEvent(location=offset(HOME, n, e), duration_seconds=d)
        for n, e, d in specs
    ]


@pytest.fixture
def two_groups():
    """Ten hesitations in two tight groups 500 m apart."""
    west = [(0, 0, 10), (5, 3, 20), (-4, 6, 30), (8, -5, 40), (2, -7, 50)]
    east = [(0, 500, 1), (6, 504, 2), (-3, 497, 3), (4, 495, 4), (-7, 502, 5)]
    # interleave so the groups are not contiguous in input order
    return _events([p for pair in zip(west, east) for p in pair])


class TestClusterHesitations:

    def test_empty(self):
        assert cluster_hesitations([]) == []

    def test_two_groups_500m_apart(self, two_groups):
        clusters = cluster_hesitations(two_groups, radius_meters=50)
        assert len(clusters) == 2
        assert [c.member_count for c in clusters] == [5, 5]
        assert clusters[0].total_duration_seconds == pytest.approx(150.0)
        assert clusters[1].total_duration_seconds == pytest.approx(15.0)

    def test_centroid_is_member_mean(self, two_groups):
        clusters = cluster_hesitations(two_groups, radius_meters=50)
        for cluster in clusters:
            members = [two_groups[i].location for i in cluster.member_indices]
            lat, lon = np.mean(members, axis=0)
            assert cluster.centroid.latitude == pytest.approx(lat, abs=1e-12)
            assert cluster.centroid.longitude == pytest.approx(lon, abs=1e-12)

    def test_partition(self, two_groups):
        clusters = cluster_hesitations(two_groups, radius_meters=50)
        members = sorted(i for c in clusters for i in c.member_indices)
        assert members == list(range(len(two_groups)))

    def test_partition_random(self):
        rng = np.random.default_rng(9)
        events = _events([(n, e, 1.0) for n, e in rng.uniform(-300, 300, size=(80, 2))])
        clusters = cluster_hesitations(events, radius_meters=60)
        members = [i for c in clusters for i in c.member_indices]
        assert sorted(members) == list(range(80))
        assert sum(c.member_count for c in clusters) == 80
        assert all(c.member_count >= 1 for c in clusters)

    def test_single_event(self):
        (cluster,) = cluster_hesitations(_events([(0, 0, 12.5)]))
        assert cluster.member_count == 1
        assert cluster.total_duration_seconds == 12.5
        assert cluster.centroid == offset(HOME, 0, 0)

    def test_zero_radius_merges_only_identical(self):
        events = _events([(0, 0, 1), (0, 0, 1), (1, 0, 1)])
        clusters = cluster_hesitations(events, radius_meters=0)
        assert [c.member_count for c in clusters] == [2, 1]

    def test_radius_is_inclusive(self):
        a = GeoPoint(0.0, 0.0)
        b = GeoPoint(0.0, 0.0004)
        d = distance_meters(a, b)
        events = [HesitationEvent(a, 1.0), HesitationEvent(b, 1.0)]
        assert len(cluster_hesitations(events, radius_meters=d)) == 1

    def test_negative_radius_rejected(self):
        with pytest.raises(ValueError):
            cluster_hesitations(_events([(0, 0, 1)]), radius_meters=-1)


class TestOrderDependence:
    """A chain of events 40 m apart with a 50 m radius."""

    @pytest.fixture
    def chain(self):
        return _events([(0, 0, 1), (0, 40, 1), (0, 80, 1)])

    def test_seed_at_end(self, chain):
        # seed 0 absorbs 40 m neighbour; 80 m one starts its own cluster
        clusters = cluster_hesitations(chain, radius_meters=50)
        assert [c.member_count for c in clusters] == [2, 1]

    def test_seed_in_middle(self, chain):
        middle_first = [chain[1], chain[0], chain[2]]
        clusters = cluster_hesitations(middle_first, radius_meters=50)
        assert [c.member_count for c in clusters] == [3]

    def test_deterministic(self, chain):
        assert cluster_hesitations(chain) == cluster_hesitations(chain)
