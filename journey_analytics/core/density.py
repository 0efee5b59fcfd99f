"""
Density grid over path samples: heat map cells and safe-area candidates.

The grid is anchored at the south-west corner of the points' bounding box
and its cell size is given in meters, converted to degree steps at the
box's centre latitude.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from journey_analytics.core.hull import build_hull_polygon
from journey_analytics.core.models import GeoPoint, HeatCell, HullPolygon
from journey_analytics.utils import config
from journey_analytics.utils.geo_utils import is_usable_lon_scale, meters_per_degree

logger = logging.getLogger(__name__)


class DensityGrid:
    """
    Points binned into uniform cells.

    Build with DensityGrid.from_points(); returns None for empty input or
    when the longitude scale at the box's latitude is unusable (poles).
    """

    def __init__(
        self,
        points: np.ndarray,
        origin: Tuple[float, float],
        step: Tuple[float, float],
        cell_keys: np.ndarray,
        cell_of_point: np.ndarray,
        counts: np.ndarray,
    ):
        self.points = points
        self.min_lat, self.min_lon = origin
        self.d_lat, self.d_lon = step
        self.cell_keys = cell_keys          # (k, 2) int (lat_index, lon_index), sorted
        self.cell_of_point = cell_of_point  # (n,) index into cell_keys
        self.counts = counts                # (k,) points per cell

    @classmethod
    def from_points(cls, points: Sequence, cell_meters: float) -> Optional['DensityGrid']:
        if cell_meters <= 0:
            raise ValueError(f"cell_meters must be positive, got {cell_meters!r}")
        if len(points) == 0:
            return None

        arr = np.asarray(points, dtype=float).reshape(-1, 2)
        min_lat, min_lon = arr.min(axis=0)
        max_lat, max_lon = arr.max(axis=0)

        center_lat = (min_lat + max_lat) / 2.0
        lat_scale, lon_scale = meters_per_degree(center_lat)
        if not is_usable_lon_scale(lon_scale):
            return None

        d_lat = cell_meters / lat_scale
        d_lon = cell_meters / lon_scale

        # a zero-width box puts every point in row/column 0
        lat_idx = np.floor((arr[:, 0] - min_lat) / d_lat).astype(np.int64)
        lon_idx = np.floor((arr[:, 1] - min_lon) / d_lon).astype(np.int64)
        keys = np.column_stack((lat_idx, lon_idx))

        cell_keys, inverse, counts = np.unique(
            keys, axis=0, return_inverse=True, return_counts=True,
        )
        grid = cls(
            points=arr,
            origin=(float(min_lat), float(min_lon)),
            step=(float(d_lat), float(d_lon)),
            cell_keys=cell_keys,
            cell_of_point=np.asarray(inverse).reshape(-1),
            counts=counts,
        )
        logger.debug(
            "Binned %d points into %d cells of %.0f m", len(arr), len(cell_keys), cell_meters,
        )
        return grid

    def __len__(self) -> int:
        return len(self.cell_keys)

    @property
    def total_count(self) -> int:
        return int(self.counts.sum())

    def cell_counts(self) -> Dict[Tuple[int, int], int]:
        return {
            (int(i), int(j)): int(c)
            for (i, j), c in zip(self.cell_keys, self.counts)
        }

    def cell_bounds(self, lat_index: int, lon_index: int) -> Tuple[GeoPoint, GeoPoint]:
        south = self.min_lat + lat_index * self.d_lat
        west = self.min_lon + lon_index * self.d_lon
        return (
            GeoPoint(south, west),
            GeoPoint(south + self.d_lat, west + self.d_lon),
        )

    def heat_cells(self) -> List[HeatCell]:
        """
        One HeatCell per populated cell, intensity = count / max count.
        """
        max_count = int(self.counts.max())
        cells = []
        for (i, j), count in zip(self.cell_keys, self.counts):
            sw, ne = self.cell_bounds(int(i), int(j))
            centroid = GeoPoint(
                (sw.latitude + ne.latitude) / 2.0,
                (sw.longitude + ne.longitude) / 2.0,
            )
            cells.append(HeatCell(
                centroid=centroid,
                bounds=(sw, ne),
                sample_count=int(count),
                normalized_intensity=int(count) / max_count,
            ))
        return cells

    def density_threshold(
        self,
        min_count: float = config.SAFE_AREA_MIN_CELL_COUNT,
        factor: float = config.SAFE_AREA_DENSITY_FACTOR,
    ) -> float:
        return max(float(min_count), float(self.counts.mean()) * factor)

    def high_density_centroids(
        self,
        min_count: float = config.SAFE_AREA_MIN_CELL_COUNT,
        factor: float = config.SAFE_AREA_DENSITY_FACTOR,
    ) -> List[GeoPoint]:
        """
        Mean location of the member points of every cell whose count
        reaches the density threshold.
        """
        threshold = self.density_threshold(min_count, factor)
        sums = np.zeros((len(self.cell_keys), 2), dtype=float)
        np.add.at(sums, self.cell_of_point, self.points)
        means = sums / self.counts[:, None]

        selected = self.counts >= threshold
        logger.debug(
            "%d of %d cells at or above density threshold %.2f",
            int(selected.sum()), len(self.counts), threshold,
        )
        return [GeoPoint(float(lat), float(lon)) for lat, lon in means[selected]]


def compute_heat_map(
    points: Sequence,
    cell_meters: float = config.HEATMAP_CELL_METERS,
) -> List[HeatCell]:
    grid = DensityGrid.from_points(points, cell_meters)
    if grid is None:
        return []
    return grid.heat_cells()


def safe_area_polygon(
    points: Sequence,
    cell_meters: float = config.SAFE_AREA_CELL_METERS,
    min_count: float = config.SAFE_AREA_MIN_CELL_COUNT,
    factor: float = config.SAFE_AREA_DENSITY_FACTOR,
) -> Optional[HullPolygon]:
    """
    Hull over the centroids of high-density cells, or None when fewer
    than 3 such cells exist.
    """
    if len(points) < 3:
        return None
    grid = DensityGrid.from_points(points, cell_meters)
    if grid is None:
        return None
    centroids = grid.high_density_centroids(min_count, factor)
    if len(centroids) < 3:
        return None
    return build_hull_polygon(centroids)
