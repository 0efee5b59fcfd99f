"""
Cumulative journey geospatial analytics
"""

from journey_analytics.core import (
    AnalyticsOptions,
    AnalyticsResult,
    CumulativeAnalyticsEngine,
    CumulativeStats,
    GeoPoint,
    Journey,
    LatestResultSink,
    compute_cumulative_analytics,
)
from journey_analytics.core.records import journeys_from_records

__version__ = '0.1.0'

__all__ = [
    'AnalyticsOptions',
    'AnalyticsResult',
    'CumulativeAnalyticsEngine',
    'CumulativeStats',
    'GeoPoint',
    'Journey',
    'LatestResultSink',
    'compute_cumulative_analytics',
    'journeys_from_records',
]
