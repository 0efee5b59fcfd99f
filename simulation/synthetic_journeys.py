#!/usr/bin/env python3
"""Generate synthetic exposure journeys around a home location"""
import argparse
import json
import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

import numpy as np

from journey_analytics.core.models import (
    Feeling,
    FeelingCheckpoint,
    GeoPoint,
    HesitationEvent,
    Journey,
    PathSample,
)
from journey_analytics.core.records import journey_to_record
from journey_analytics.utils.geo_utils import haversine_distance, meters_per_degree

# Central Manchester, UK
DEFAULT_HOME = (53.4794, -2.2453)

# Weighted towards calm outcomes
FEELING_WEIGHTS = {
    Feeling.GREAT: 0.25,
    Feeling.GOOD: 0.30,
    Feeling.OKAY: 0.25,
    Feeling.ANXIOUS: 0.15,
    Feeling.PANIC: 0.05,
}


def _offset(origin: Tuple[float, float], north_m: float, east_m: float) -> GeoPoint:
    lat_scale, lon_scale = meters_per_degree(origin[0])
    return GeoPoint(origin[0] + north_m / lat_scale, origin[1] + east_m / lon_scale)


def generate_journey(
    rng: np.random.Generator,
    journey_id: str,
    start_time: datetime,
    home: Tuple[float, float] = DEFAULT_HOME,
    samples: int = 60,
    step_m: float = 25.0,
    hesitation_rate: float = 0.05,
    checkpoints: int = 2,
) -> Journey:
    """Out-and-back random walk starting within ~30 m of home."""
    start = _offset(home, *rng.normal(0.0, 15.0, size=2))
    heading = rng.uniform(0.0, 2 * math.pi)

    path = [start]
    half = samples // 2
    for i in range(1, samples):
        heading += rng.normal(0.0, 0.35)
        direction = 1.0 if i <= half else -1.0
        north = direction * step_m * math.cos(heading)
        east = direction * step_m * math.sin(heading)
        path.append(_offset(path[-1], north, east))

    interval = timedelta(seconds=float(step_m / 1.3))  # walking pace
    path_samples = tuple(
        PathSample(location=p, timestamp=start_time + i * interval)
        for i, p in enumerate(path)
    )

    hesitations = tuple(
        HesitationEvent(location=p, duration_seconds=float(rng.uniform(10.0, 120.0)))
        for p in path if rng.random() < hesitation_rate
    )

    feelings = list(FEELING_WEIGHTS)
    weights = np.array(list(FEELING_WEIGHTS.values()))
    picks = rng.choice(len(path), size=min(checkpoints, len(path)), replace=False)
    journey_checkpoints = tuple(
        FeelingCheckpoint(
            location=path[int(i)],
            feeling=feelings[int(rng.choice(len(feelings), p=weights / weights.sum()))],
            timestamp=start_time + int(i) * interval,
        )
        for i in sorted(picks)
    )

    distance = sum(
        haversine_distance(a[0], a[1], b[0], b[1]) for a, b in zip(path, path[1:])
    )
    duration = int(interval.total_seconds() * (len(path) - 1))

    return Journey(
        id=journey_id,
        start_time=start_time,
        end_time=start_time + timedelta(seconds=duration),
        distance_meters=distance,
        duration_seconds=duration,
        path_samples=path_samples,
        hesitations=hesitations,
        checkpoints=journey_checkpoints,
    )


def generate_journeys(
    count: int = 20,
    seed: int = 7,
    home: Tuple[float, float] = DEFAULT_HOME,
    now: Optional[datetime] = None,
    days: int = 21,
) -> List[Journey]:
    """`count` journeys spread evenly over the `days` before `now`."""
    rng = np.random.default_rng(seed)
    now = now or datetime.now(timezone.utc)
    journeys = []
    for i in range(count):
        start = now - timedelta(days=days) + i * timedelta(days=days) / max(count, 1)
        journeys.append(generate_journey(
            rng, f"journey-{i:03d}", start, home=home,
            samples=int(rng.integers(30, 90)),
        ))
    return journeys


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--count', type=int, default=20)
    parser.add_argument('--seed', type=int, default=7)
    parser.add_argument('--out', default='-', help="JSON output path ('-' for stdout)")
    args = parser.parse_args(argv)

    records = [journey_to_record(j) for j in generate_journeys(args.count, args.seed)]
    text = json.dumps(records, indent=2)
    if args.out == '-':
        print(text)
    else:
        with open(args.out, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f"Wrote {len(records)} journeys to {args.out}")


if __name__ == '__main__':
    main()
