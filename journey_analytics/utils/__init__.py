"""
Utility functions
"""

from journey_analytics.utils.geo_utils import (
    haversine_distance,
    distance_meters,
    meters_per_degree,
    is_valid_coordinate,
    mean_point,
    cross_product,
    point_in_convex_polygon,
    smooth_path,
)

from journey_analytics.utils.formatting import (
    format_distance,
    format_duration,
    format_pace,
    summarize_stats,
)

from journey_analytics.utils import config

__all__ = [
    'haversine_distance',
    'distance_meters',
    'meters_per_degree',
    'is_valid_coordinate',
    'mean_point',
    'cross_product',
    'point_in_convex_polygon',
    'smooth_path',
    'format_distance',
    'format_duration',
    'format_pace',
    'summarize_stats',
    'config',
]
