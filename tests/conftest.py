"""
Shared fixtures for the journey analytics test suite.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from journey_analytics.core.models import (  # noqa: E402
    Feeling,
    FeelingCheckpoint,
    GeoPoint,
    HesitationEvent,
    Journey,
    PathSample,
)
from journey_analytics.utils.geo_utils import meters_per_degree  # noqa: E402

MANCHESTER_PICCADILLY = (53.4774, -2.2309)
MANCHESTER_CATHEDRAL = (53.4851, -2.2442)
MANCHESTER_OXFORD_RD = (53.4740, -2.2421)

HOME = (53.4794, -2.2453)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def offset(origin, north_m: float, east_m: float) -> GeoPoint:
    """Point `north_m` / `east_m` meters from `origin` on the local plane."""
    lat_scale, lon_scale = meters_per_degree(origin[0])
    return GeoPoint(origin[0] + north_m / lat_scale, origin[1] + east_m / lon_scale)


def make_journey(
    journey_id='j1',
    points=(),
    start_time=NOW,
    hesitations=(),
    feelings=(),
    distance=0.0,
    duration=0,
) -> Journey:
    """
    Build a Journey snapshot.

    points: (lat, lon) pairs; hesitations: (lat, lon, seconds);
    feelings: feeling names, checkpointed at the first path point (or 0,0).
    """
    anchor = GeoPoint(*points[0]) if points else GeoPoint(0.0, 0.0)
    return Journey(
        id=journey_id,
        start_time=start_time,
        end_time=start_time + timedelta(seconds=duration),
        distance_meters=distance,
        duration_seconds=duration,
        path_samples=tuple(PathSample(location=GeoPoint(*p)) for p in points),
        hesitations=tuple(
            HesitationEvent(location=GeoPoint(lat, lon), duration_seconds=d)
            for lat, lon, d in hesitations
        ),
        checkpoints=tuple(
            FeelingCheckpoint(location=anchor, feeling=Feeling.parse(f))
            for f in feelings
        ),
    )


@pytest.fixture
def triangle_journeys():
    """Three two-sample journeys tracing the corners of a ~111 m square."""
    return [
        make_journey('a', [(0.0, 0.0), (0.0, 0.001)]),
        make_journey('b', [(0.0, 0.001), (0.001, 0.001)]),
        make_journey('c', [(0.001, 0.001), (0.001, 0.0)]),
    ]


@pytest.fixture
def synthetic_journeys():
    from simulation.synthetic_journeys import generate_journeys
    return generate_journeys(count=25, seed=11, home=HOME, now=NOW)
