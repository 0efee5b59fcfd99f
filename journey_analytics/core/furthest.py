"""
Furthest distance travelled from "home".
"""

import logging
from typing import Optional, Sequence

from journey_analytics.core.models import FurthestPoint, GeoPoint, Journey
from journey_analytics.utils.geo_utils import distance_meters, mean_point

logger = logging.getLogger(__name__)


def home_reference(journeys: Sequence[Journey]) -> Optional[GeoPoint]:
    """Mean of each journey's first path sample; journeys without samples are skipped."""
    starts = [j.start_point for j in journeys if j.start_point is not None]
    home = mean_point(starts)
    return GeoPoint(*home) if home is not None else None


def furthest_point(journeys: Sequence[Journey]) -> Optional[FurthestPoint]:
    """
    Path sample with the greatest distance from the home reference.

    Ties keep the first sample encountered. With a single sample (or all
    samples at home) the result is that first sample at distance 0.
    """
    home = home_reference(journeys)
    if home is None:
        return None

    best: Optional[GeoPoint] = None
    best_distance = -1.0
    for journey in journeys:
        for sample in journey.path_samples:
            d = distance_meters(home, sample.location)
            if d > best_distance:
                best, best_distance = sample.location, d

    if best is None:
        return None
    logger.debug("Furthest point %.1f m from home", best_distance)
    return FurthestPoint(point=GeoPoint(*best), distance_meters=best_distance, home=home)
