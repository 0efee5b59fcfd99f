"""
GPS and geometric utility functions

Points are (latitude, longitude) pairs in decimal degrees. GeoPoint is a
NamedTuple, so it can be passed anywhere a pair is expected.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from journey_analytics.utils.config import (
    EARTH_RADIUS_M,
    METERS_PER_DEGREE_LAT,
    MIN_LON_SCALE,
)

logger = logging.getLogger(__name__)

LatLon = Tuple[float, float]


def haversine_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float,
) -> float:
    """
    Calculate distance between two GPS points (meters)

    Uses Haversine formula - standard in GPS/GIS applications
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (math.sin(delta_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2)
    # rounding can push a past 1.0 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def distance_meters(a: LatLon, b: LatLon) -> float:
    """
    Distance between two points in meters.

    Symmetric, and exactly 0.0 for identical points.
    """
    if a[0] == b[0] and a[1] == b[1]:
        return 0.0
    return haversine_distance(a[0], a[1], b[0], b[1])


def meters_per_degree(at_latitude: float) -> Tuple[float, float]:
    """
    Local (lat_scale, lon_scale) in meters per degree.

    lon_scale shrinks with cos(latitude) and is ~0 at the poles; callers
    check it with is_usable_lon_scale() before dividing by it.
    """
    lon_scale = METERS_PER_DEGREE_LAT * math.cos(math.radians(at_latitude))
    return METERS_PER_DEGREE_LAT, max(0.0, lon_scale)


def is_usable_lon_scale(lon_scale: float) -> bool:
    usable = math.isfinite(lon_scale) and lon_scale >= MIN_LON_SCALE
    if not usable:
        logger.warning("Longitude scale %.3g m/deg too small, skipping geometry", lon_scale)
    return usable


def is_valid_coordinate(lat, lon) -> bool:
    """True for finite latitude in [-90, 90] and longitude in [-180, 180]."""
    try:
        lat = float(lat)
        lon = float(lon)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def mean_point(points: Sequence[LatLon]) -> Optional[LatLon]:
    """Arithmetic mean of a set of points, or None when empty."""
    if not points:
        return None
    arr = np.asarray(points, dtype=float)
    lat, lon = arr.mean(axis=0)
    return float(lat), float(lon)


def cross_product(o: LatLon, a: LatLon, b: LatLon) -> float:
    """
    Z component of (a - o) x (b - o) with longitude as x and latitude as y.

    Positive for a counter-clockwise (left) turn o -> a -> b.
    """
    return ((a[1] - o[1]) * (b[0] - o[0])
            - (a[0] - o[0]) * (b[1] - o[1]))


def point_in_convex_polygon(
    point: LatLon,
    polygon: Sequence[LatLon],
    tolerance: float = 1e-12,
) -> bool:
    """
    Inside-or-on test for a counter-clockwise convex polygon.
    """
    n = len(polygon)
    if n < 3:
        return False
    for i in range(n):
        if cross_product(polygon[i], polygon[(i + 1) % n], point) < -tolerance:
            return False
    return True


def smooth_path(
    points: Sequence[LatLon],
    segments_per_point: int = 5,
) -> List[LatLon]:
    """
    Smooth a journey path with Catmull-Rom interpolation for display.

    Each input segment is replaced by `segments_per_point` interpolated
    points ending on the segment's far vertex. Paths of two points or
    fewer are returned unchanged.
    """
    if len(points) <= 2 or segments_per_point < 1:
        return [tuple(p) for p in points]

    pts = np.asarray(points, dtype=float)
    n = len(pts)
    t = np.arange(1, segments_per_point + 1, dtype=float) / segments_per_point
    t2 = t * t
    t3 = t2 * t

    smoothed: List[LatLon] = [(float(pts[0][0]), float(pts[0][1]))]
    for i in range(1, n):
        p0 = pts[max(0, i - 2)]
        p1 = pts[i - 1]
        p2 = pts[i]
        p3 = pts[min(n - 1, i + 1)]

        seg = 0.5 * (
            np.outer(np.ones_like(t), 2.0 * p1)
            + np.outer(t, -p0 + p2)
            + np.outer(t2, 2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3)
            + np.outer(t3, -p0 + 3.0 * p1 - 3.0 * p2 + p3)
        )
        smoothed.extend((float(lat), float(lon)) for lat, lon in seg)

    return smoothed

