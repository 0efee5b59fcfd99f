"""
Core cumulative journey analytics components
"""

from journey_analytics.core.models import (
    AnalyticsOptions,
    AnalyticsResult,
    CumulativeStats,
    Feeling,
    FeelingCheckpoint,
    FurthestPoint,
    GeoPoint,
    HeatCell,
    HesitationCluster,
    HesitationEvent,
    HullPolygon,
    Journey,
    PathSample,
)
from journey_analytics.core.engine import (
    CumulativeAnalyticsEngine,
    LatestResultSink,
    compute_cumulative_analytics,
)

__all__ = [
    'AnalyticsOptions',
    'AnalyticsResult',
    'CumulativeStats',
    'Feeling',
    'FeelingCheckpoint',
    'FurthestPoint',
    'GeoPoint',
    'HeatCell',
    'HesitationCluster',
    'HesitationEvent',
    'HullPolygon',
    'Journey',
    'PathSample',
    'CumulativeAnalyticsEngine',
    'LatestResultSink',
    'compute_cumulative_analytics',
]
