"""
Greedy radius clustering of hesitation events.
"""

import logging
from typing import List, Sequence

import numpy as np

from journey_analytics.core.models import GeoPoint, HesitationCluster, HesitationEvent
from journey_analytics.utils import config
from journey_analytics.utils.geo_utils import distance_meters

logger = logging.getLogger(__name__)


def cluster_hesitations(
    events: Sequence[HesitationEvent],
    radius_meters: float = config.CLUSTER_RADIUS_METERS,
) -> List[HesitationCluster]:
    """
    Single-pass greedy clustering, O(n^2).

    Events are visited in input order. Each unassigned event seeds a new
    cluster and absorbs every later unassigned event within `radius_meters`
    of the seed (not of the growing cluster). The result partitions the
    input, but depends on input order and is not the minimum number of
    clusters.

    Args:
        events: Hesitation events, in the order they should be visited.
        radius_meters: Absorption radius around each seed.

    Returns:
        Clusters in creation order; centroid is the mean member location,
        total duration the sum of member durations.
    """
    if radius_meters < 0:
        raise ValueError(f"radius_meters must be non-negative, got {radius_meters!r}")
    if not events:
        return []

    assigned = [False] * len(events)
    clusters: List[HesitationCluster] = []

    for i, seed in enumerate(events):
        if assigned[i]:
            continue
        assigned[i] = True
        members = [i]

        for k in range(i + 1, len(events)):
            if assigned[k]:
                continue
            if distance_meters(seed.location, events[k].location) <= radius_meters:
                assigned[k] = True
                members.append(k)

        coords = np.array([events[m].location for m in members], dtype=float)
        lat, lon = coords.mean(axis=0)
        clusters.append(HesitationCluster(
            centroid=GeoPoint(float(lat), float(lon)),
            member_count=len(members),
            total_duration_seconds=float(sum(events[m].duration_seconds for m in members)),
            member_indices=tuple(members),
        ))

    logger.debug("Clustered %d hesitations into %d clusters", len(events), len(clusters))
    return clusters
