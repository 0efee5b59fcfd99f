"""
Aggregate statistics over a journey collection.

Never raises on sparse data: anything that cannot be computed reads as 0.
"""

import logging
from typing import Optional, Sequence

from journey_analytics.core.area import polygon_area_m2
from journey_analytics.core.density import safe_area_polygon
from journey_analytics.core.furthest import furthest_point
from journey_analytics.core.models import (
    AnalyticsOptions,
    CumulativeStats,
    FurthestPoint,
    HullPolygon,
    Journey,
)
from journey_analytics.core.records import sanitize_journeys

logger = logging.getLogger(__name__)


def anxiety_free_percentage(journeys: Sequence[Journey]) -> float:
    """Share of journeys with no anxious/panic checkpoint, 0-100."""
    if not journeys:
        return 0.0
    calm = sum(1 for j in journeys if j.is_anxiety_free)
    return calm / len(journeys) * 100.0


def all_path_points(journeys: Sequence[Journey]):
    return [s.location for j in journeys for s in j.path_samples]


def hesitation_count(journeys: Sequence[Journey]) -> int:
    return sum(len(j.hesitations) for j in journeys)


def build_stats(
    journeys: Sequence[Journey],
    furthest: Optional[FurthestPoint],
    safe_area: Optional[HullPolygon],
    total_hesitations: Optional[int] = None,
) -> CumulativeStats:
    """
    Stats from already-computed furthest point and safe-area polygon.

    Pass `total_hesitations` when `journeys` have been sanitized, so that
    hesitations without usable coordinates are still counted.
    """
    if total_hesitations is None:
        total_hesitations = hesitation_count(journeys)
    total = len(journeys)
    total_distance = float(sum(j.distance_meters for j in journeys))
    total_duration = int(sum(j.duration_seconds for j in journeys))

    area = polygon_area_m2(safe_area.vertices) if safe_area is not None else None

    return CumulativeStats(
        total_journeys=total,
        total_distance_meters=total_distance,
        total_duration_seconds=total_duration,
        furthest_distance_meters=furthest.distance_meters if furthest else 0.0,
        safe_area_square_meters=area or 0.0,
        total_hesitations=total_hesitations,
        avg_journey_duration_seconds=total_duration // total if total else 0,
        anxiety_free_percentage=anxiety_free_percentage(journeys),
    )


def compose_stats(
    journeys: Sequence[Journey],
    options: Optional[AnalyticsOptions] = None,
) -> CumulativeStats:
    """
    Full CumulativeStats for `journeys`, including furthest distance and
    safe-area size. Malformed coordinates are ignored.
    """
    options = options or AnalyticsOptions()
    total_hesitations = hesitation_count(journeys)
    journeys, _ = sanitize_journeys(journeys)
    if not journeys:
        return CumulativeStats()

    furthest = furthest_point(journeys)
    safe_area = safe_area_polygon(all_path_points(journeys), options.safe_area_cell_meters)
    return build_stats(journeys, furthest, safe_area, total_hesitations)
