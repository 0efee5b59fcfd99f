"""
Convex hull (Andrew's monotone chain) over geographic points.

Hulls are built in (longitude, latitude) space: x = longitude, y = latitude.
The same routine backs the all-time boundary, the prior-window boundary
and the safe-area polygon.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from journey_analytics.core.models import GeoPoint, HullPolygon, Journey
from journey_analytics.utils import config
from journey_analytics.utils.geo_utils import cross_product

logger = logging.getLogger(__name__)


def dedupe_points(points: Iterable, decimals: int = config.HULL_ROUNDING_DECIMALS) -> List[GeoPoint]:
    """
    Round points to `decimals` places and drop repeats, keeping first-seen order.
    """
    seen = set()
    unique: List[GeoPoint] = []
    for lat, lon in points:
        p = GeoPoint(round(lat, decimals), round(lon, decimals))
        if p not in seen:
            seen.add(p)
            unique.append(p)
    return unique


def convex_hull(points: Sequence) -> List[GeoPoint]:
    """
    Monotone-chain convex hull.

    Points are sorted by (longitude, latitude); collinear and clockwise
    turns (cross <= 0) are discarded, so the result is strictly convex and
    counter-clockwise. Exact duplicates are ignored. Returns the hull
    vertices without repeating the first one; fewer than 3 vertices means
    the input was degenerate (fewer than 3 distinct points, or collinear).
    """
    pts = sorted({GeoPoint(float(lat), float(lon)) for lat, lon in points},
                 key=lambda p: (p.longitude, p.latitude))
    if len(pts) < 3:
        return pts

    lower: List[GeoPoint] = []
    for p in pts:
        while len(lower) >= 2 and cross_product(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[GeoPoint] = []
    for p in reversed(pts):
        while len(upper) >= 2 and cross_product(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    # last point of each chain is the first point of the other
    return lower[:-1] + upper[:-1]


def build_hull_polygon(points: Sequence) -> Optional[HullPolygon]:
    """Hull as a polygon, or None when no valid hull exists."""
    hull = convex_hull(points)
    if len(hull) < 3:
        return None
    logger.debug("Hull over %d points has %d vertices", len(points), len(hull))
    return HullPolygon(vertices=tuple(hull))


def boundary_polygon(
    journeys: Sequence[Journey],
    decimals: int = config.HULL_ROUNDING_DECIMALS,
) -> Optional[HullPolygon]:
    """
    Travel boundary: hull over every path sample of `journeys`,
    deduplicated at `decimals` places.
    """
    unique = dedupe_points(
        (s.location for j in journeys for s in j.path_samples), decimals,
    )
    if len(unique) < 3:
        return None
    return build_hull_polygon(unique)
