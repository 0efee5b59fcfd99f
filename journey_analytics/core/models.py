"""
Journey snapshots consumed by the analytics core, and the value objects it returns.

Nothing here holds a reference back to a source Journey: outputs carry
copied coordinates and plain numbers only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple

from journey_analytics.utils import config
from journey_analytics.utils.geo_utils import point_in_convex_polygon


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC; aware ones are returned unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GeoPoint(NamedTuple):
    """A (latitude, longitude) pair in decimal degrees."""

    latitude: float
    longitude: float

    def rounded(self, decimals: int) -> 'GeoPoint':
        return GeoPoint(round(self.latitude, decimals), round(self.longitude, decimals))

    def to_list(self) -> List[float]:
        return [float(self.latitude), float(self.longitude)]


class Feeling(str, Enum):
    GREAT = 'great'
    GOOD = 'good'
    OKAY = 'okay'
    CALM = 'calm'
    ANXIOUS = 'anxious'
    PANIC = 'panic'

    @classmethod
    def parse(cls, value) -> 'Feeling':
        """Case-insensitive lookup; unknown values read as OKAY."""
        if isinstance(value, Feeling):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OKAY

    @property
    def is_anxious(self) -> bool:
        return self.value in config.ANXIOUS_FEELINGS


# ── Inputs ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PathSample:
    """One recorded location; position in Journey.path_samples is its order."""

    location: GeoPoint
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class HesitationEvent:
    """A pause detected upstream by the location tracker."""

    location: GeoPoint
    duration_seconds: float


@dataclass(frozen=True)
class FeelingCheckpoint:
    """
    A self-reported feeling. Only `feeling` feeds the stats, so a
    checkpoint without a usable location is still kept.
    """

    location: Optional[GeoPoint]
    feeling: Feeling
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class Journey:
    """
    Read-only snapshot of one recorded excursion.

    Created by the tracking subsystem; the analytics core only reads it.
    """

    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    distance_meters: float = 0.0
    duration_seconds: int = 0
    path_samples: Tuple[PathSample, ...] = ()
    hesitations: Tuple[HesitationEvent, ...] = ()
    checkpoints: Tuple[FeelingCheckpoint, ...] = ()

    @property
    def start_point(self) -> Optional[GeoPoint]:
        return self.path_samples[0].location if self.path_samples else None

    @property
    def is_anxiety_free(self) -> bool:
        return not any(c.feeling.is_anxious for c in self.checkpoints)


# ── Outputs ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HeatCell:
    centroid: GeoPoint
    bounds: Tuple[GeoPoint, GeoPoint]  # (south-west, north-east)
    sample_count: int
    normalized_intensity: float

    @property
    def band(self) -> str:
        """Colour band used by the map layer."""
        if self.normalized_intensity > 0.7:
            return 'red'
        if self.normalized_intensity > 0.4:
            return 'orange'
        if self.normalized_intensity > 0.2:
            return 'yellow'
        return 'green'

    def to_dict(self) -> Dict:
        return {
            'centroid': self.centroid.to_list(),
            'bounds': [self.bounds[0].to_list(), self.bounds[1].to_list()],
            'sample_count': self.sample_count,
            'normalized_intensity': self.normalized_intensity,
            'band': self.band,
        }


@dataclass(frozen=True)
class HullPolygon:
    """
    Convex polygon, counter-clockwise in (longitude, latitude) space.

    The first vertex is not repeated at the end.
    """

    vertices: Tuple[GeoPoint, ...]

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self):
        return iter(self.vertices)

    def contains(self, point) -> bool:
        return point_in_convex_polygon(tuple(point), self.vertices)

    def to_list(self) -> List[List[float]]:
        return [v.to_list() for v in self.vertices]


@dataclass(frozen=True)
class HesitationCluster:
    centroid: GeoPoint
    member_count: int
    total_duration_seconds: float
    member_indices: Tuple[int, ...] = ()

    def to_dict(self) -> Dict:
        return {
            'centroid': self.centroid.to_list(),
            'member_count': self.member_count,
            'total_duration_seconds': self.total_duration_seconds,
        }


@dataclass(frozen=True)
class FurthestPoint:
    point: GeoPoint
    distance_meters: float
    home: GeoPoint

    def to_dict(self) -> Dict:
        return {
            'point': self.point.to_list(),
            'distance_meters': self.distance_meters,
            'home': self.home.to_list(),
        }


@dataclass(frozen=True)
class CumulativeStats:
    total_journeys: int = 0
    total_distance_meters: float = 0.0
    total_duration_seconds: int = 0
    furthest_distance_meters: float = 0.0
    safe_area_square_meters: float = 0.0
    total_hesitations: int = 0
    avg_journey_duration_seconds: int = 0
    anxiety_free_percentage: float = 0.0

    @property
    def average_speed_mps(self) -> float:
        if self.total_duration_seconds <= 0:
            return 0.0
        return self.total_distance_meters / self.total_duration_seconds

    def to_dict(self) -> Dict:
        return {
            'total_journeys': self.total_journeys,
            'total_distance_meters': self.total_distance_meters,
            'total_duration_seconds': self.total_duration_seconds,
            'furthest_distance_meters': self.furthest_distance_meters,
            'safe_area_square_meters': self.safe_area_square_meters,
            'total_hesitations': self.total_hesitations,
            'avg_journey_duration_seconds': self.avg_journey_duration_seconds,
            'anxiety_free_percentage': self.anxiety_free_percentage,
            'average_speed_mps': self.average_speed_mps,
        }


@dataclass(frozen=True)
class AnalyticsOptions:
    """Per-call tuning for compute_cumulative_analytics."""

    heatmap_cell_meters: float = config.HEATMAP_CELL_METERS
    safe_area_cell_meters: float = config.SAFE_AREA_CELL_METERS
    cluster_radius_meters: float = config.CLUSTER_RADIUS_METERS
    prior_window_start: Optional[datetime] = None
    prior_window_end: Optional[datetime] = None
    hull_rounding_decimals: int = config.HULL_ROUNDING_DECIMALS

    def __post_init__(self):
        for name in ('heatmap_cell_meters', 'safe_area_cell_meters', 'cluster_radius_meters'):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value!r}")
        if (self.prior_window_start is None) != (self.prior_window_end is None):
            raise ValueError("prior_window_start and prior_window_end must be given together")
        if self.has_prior_window:
            start = as_utc(self.prior_window_start)
            end = as_utc(self.prior_window_end)
            if end < start:
                raise ValueError(
                    f"prior_window_end ({end.isoformat()}) is before prior_window_start ({start.isoformat()})"
                )
            object.__setattr__(self, 'prior_window_start', start)
            object.__setattr__(self, 'prior_window_end', end)

    @property
    def has_prior_window(self) -> bool:
        return self.prior_window_start is not None


@dataclass(frozen=True)
class AnalyticsResult:
    stats: CumulativeStats = field(default_factory=CumulativeStats)
    heat_cells: Tuple[HeatCell, ...] = ()
    boundary_polygon: Optional[HullPolygon] = None
    prior_boundary_polygon: Optional[HullPolygon] = None
    safe_area_polygon: Optional[HullPolygon] = None
    hesitation_clusters: Tuple[HesitationCluster, ...] = ()
    furthest_point: Optional[FurthestPoint] = None

    def is_inside_safe_area(self, point) -> bool:
        return self.safe_area_polygon is not None and self.safe_area_polygon.contains(point)

    def to_dict(self) -> Dict:
        def poly(p):
            return p.to_list() if p is not None else None

        return {
            'stats': self.stats.to_dict(),
            'heat_cells': [c.to_dict() for c in self.heat_cells],
            'boundary_polygon': poly(self.boundary_polygon),
            'prior_boundary_polygon': poly(self.prior_boundary_polygon),
            'safe_area_polygon': poly(self.safe_area_polygon),
            'hesitation_clusters': [c.to_dict() for c in self.hesitation_clusters],
            'furthest_point': self.furthest_point.to_dict() if self.furthest_point else None,
        }
