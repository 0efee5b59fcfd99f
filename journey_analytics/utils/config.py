"""
Configuration constants
"""

import logging
import os

# Grid / clustering defaults (meters)
HEATMAP_CELL_METERS = float(os.getenv('HEATMAP_CELL_METERS', '100'))
SAFE_AREA_CELL_METERS = float(os.getenv('SAFE_AREA_CELL_METERS', '50'))
CLUSTER_RADIUS_METERS = float(os.getenv('CLUSTER_RADIUS_METERS', '50'))

# Boundary hull
HULL_ROUNDING_DECIMALS = int(os.getenv('HULL_ROUNDING_DECIMALS', '4'))

# Safe-area density threshold: max(MIN_CELL_COUNT, mean * DENSITY_FACTOR)
SAFE_AREA_MIN_CELL_COUNT = float(os.getenv('SAFE_AREA_MIN_CELL_COUNT', '3'))
SAFE_AREA_DENSITY_FACTOR = float(os.getenv('SAFE_AREA_DENSITY_FACTOR', '1.5'))

# Trend comparison
PRIOR_WINDOW_DAYS = int(os.getenv('PRIOR_WINDOW_DAYS', '7'))

# Fan-out workers for compute_cumulative_analytics(parallel=True)
ANALYTICS_MAX_WORKERS = int(os.getenv('ANALYTICS_MAX_WORKERS', '4'))

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# Earth model
METERS_PER_DEGREE_LAT = 111_320.0
EARTH_RADIUS_M = 6_371_000.0
# Longitude scale (m/deg) below which grids and areas are not computed
MIN_LON_SCALE = 1e-6

# Checkpoint feelings that disqualify a journey from being anxiety-free
ANXIOUS_FEELINGS = frozenset({'anxious', 'panic'})

METERS_PER_MILE = 1609.34


def configure_logging(level=None):
    """Apply LOG_LEVEL (or an explicit level) to the root logger."""
    level = level or LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
