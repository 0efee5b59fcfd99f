"""
Approximate polygon area on a locally flattened earth.

Shoelace area in degree space scaled by meters-per-degree at the
polygon centroid's latitude. Accurate for city-scale polygons only; error
grows with the polygon's north-south extent.
"""

from typing import Optional, Sequence

import numpy as np

from journey_analytics.utils.geo_utils import is_usable_lon_scale, meters_per_degree


def _signed_terms(arr: np.ndarray):
    lat = arr[:, 0]
    lon = arr[:, 1]
    next_lat = np.roll(lat, -1)
    next_lon = np.roll(lon, -1)
    return lat, next_lat, lon * next_lat - next_lon * lat


def shoelace_area(vertices: Sequence) -> float:
    """Unsigned planar area of a simple polygon, in the vertices' own units."""
    arr = np.asarray(vertices, dtype=float).reshape(-1, 2)
    _, _, cross = _signed_terms(arr)
    return float(abs(cross.sum()) / 2.0)


def centroid_latitude(vertices: Sequence) -> float:
    """
    Latitude of the polygon's area-weighted centroid.

    Falls back to the mean vertex latitude for zero-area input.
    """
    arr = np.asarray(vertices, dtype=float).reshape(-1, 2)
    lat, next_lat, cross = _signed_terms(arr)
    signed_area = cross.sum() / 2.0
    if signed_area == 0:
        return float(lat.mean())
    return float(((lat + next_lat) * cross).sum() / (6.0 * signed_area))


def polygon_area_m2(vertices: Optional[Sequence]) -> Optional[float]:
    """
    Area in square meters, or None for fewer than 3 vertices or an
    unusable longitude scale.
    """
    if vertices is None:
        return None
    vertices = list(vertices)
    if len(vertices) < 3:
        return None

    lat_scale, lon_scale = meters_per_degree(centroid_latitude(vertices))
    if not is_usable_lon_scale(lon_scale):
        return None
    return shoelace_area(vertices) * lat_scale * lon_scale
