"""
Cumulative Journey Analytics Engine
Combines heat map + boundaries + safe area + hesitation clusters + furthest point
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Optional, Sequence, Tuple

from journey_analytics.core.clustering import cluster_hesitations
from journey_analytics.core.density import compute_heat_map, safe_area_polygon
from journey_analytics.core.furthest import furthest_point
from journey_analytics.core.hull import boundary_polygon
from journey_analytics.core.models import AnalyticsOptions, AnalyticsResult, Journey
from journey_analytics.core.records import sanitize_journeys
from journey_analytics.core.stats import all_path_points, build_stats, hesitation_count
from journey_analytics.core.time_window import filter_journeys_in_window
from journey_analytics.utils import config

logger = logging.getLogger(__name__)


class CumulativeAnalyticsEngine:
    """
    Batch recompute of every cumulative journey layer.

    Each layer is a pure function of the same journey snapshot:
    1. Heat map  (density grid, heatmap_cell_meters)
    2. Boundary  (hull over all path samples)
    3. Prior boundary  (hull over journeys started in the prior window)
    4. Safe area  (hull over high-density cell centroids)
    5. Hesitation clusters  (greedy radius clustering)
    6. Furthest point  (from the mean start location)
    Stats are composed from the results once every layer is done.

    With parallel=True the layers fan out over a thread pool; the engine
    holds no state between calls either way.
    """

    def __init__(
        self,
        options: Optional[AnalyticsOptions] = None,
        parallel: bool = False,
        max_workers: int = config.ANALYTICS_MAX_WORKERS,
    ):
        self.options = options or AnalyticsOptions()
        self.parallel = parallel
        self.max_workers = max(1, max_workers)

    # ------------------------------------------------------------- layers

    def _layers(
        self, journeys: Sequence[Journey], options: AnalyticsOptions,
    ) -> Dict[str, Tuple[Callable, tuple]]:
        points = all_path_points(journeys)
        hesitations = [h for j in journeys for h in j.hesitations]

        layers = {
            'heat_cells': (compute_heat_map, (points, options.heatmap_cell_meters)),
            'boundary_polygon': (boundary_polygon, (journeys, options.hull_rounding_decimals)),
            'safe_area_polygon': (safe_area_polygon, (points, options.safe_area_cell_meters)),
            'hesitation_clusters': (cluster_hesitations, (hesitations, options.cluster_radius_meters)),
            'furthest_point': (furthest_point, (journeys,)),
        }
        if options.has_prior_window:
            layers['prior_boundary_polygon'] = (self._prior_boundary, (journeys, options))
        return layers

    @staticmethod
    def _prior_boundary(journeys, options: AnalyticsOptions):
        prior = filter_journeys_in_window(
            journeys, options.prior_window_start, options.prior_window_end,
        )
        if not prior:
            return None
        return boundary_polygon(prior, options.hull_rounding_decimals)

    def _run_layers(self, layers) -> Dict:
        if not self.parallel:
            return {name: fn(*args) for name, (fn, args) in layers.items()}

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {name: pool.submit(fn, *args) for name, (fn, args) in layers.items()}
            return {name: future.result() for name, future in futures.items()}

    # ------------------------------------------------------------ compute

    def compute(
        self,
        journeys: Sequence[Journey],
        options: Optional[AnalyticsOptions] = None,
    ) -> AnalyticsResult:
        options = options or self.options
        journeys = list(journeys)
        total_hesitations = hesitation_count(journeys)
        journeys, dropped = sanitize_journeys(journeys)
        if not journeys:
            return AnalyticsResult()

        results = self._run_layers(self._layers(journeys, options))
        stats = build_stats(
            journeys, results['furthest_point'], results['safe_area_polygon'], total_hesitations,
        )

        result = AnalyticsResult(
            stats=stats,
            heat_cells=tuple(results['heat_cells']),
            boundary_polygon=results['boundary_polygon'],
            prior_boundary_polygon=results.get('prior_boundary_polygon'),
            safe_area_polygon=results['safe_area_polygon'],
            hesitation_clusters=tuple(results['hesitation_clusters']),
            furthest_point=results['furthest_point'],
        )
        logger.info(
            "Analytics over %d journeys: %d heat cells, %d clusters, boundary=%s, safe_area=%.0f m2"
            "%s",
            stats.total_journeys, len(result.heat_cells), len(result.hesitation_clusters),
            'yes' if result.boundary_polygon else 'no', stats.safe_area_square_meters,
            f", {dropped} malformed coordinates dropped" if dropped else '',
        )
        return result


def compute_cumulative_analytics(
    journeys: Sequence[Journey],
    options: Optional[AnalyticsOptions] = None,
    parallel: bool = False,
) -> AnalyticsResult:
    """
    Compute every cumulative layer and the aggregate stats for `journeys`.

    Never raises on empty or degenerate input: missing geometry is None,
    missing collections are empty and stats read 0.
    """
    return CumulativeAnalyticsEngine(options=options, parallel=parallel).compute(journeys)


class LatestResultSink:
    """
    Last-write-wins holder for results of overlapping recomputes.

    Call begin() when a recompute is triggered and publish() with the
    returned generation when it finishes; a run that finishes after a
    newer one has been published is discarded.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._next_generation = 0
        self._published_generation = -1
        self._result: Optional[AnalyticsResult] = None

    def begin(self) -> int:
        with self._lock:
            generation = self._next_generation
            self._next_generation += 1
            return generation

    def publish(self, generation: int, result: AnalyticsResult) -> bool:
        with self._lock:
            if generation < self._published_generation:
                logger.debug("Discarding stale analytics result (generation %d)", generation)
                return False
            self._published_generation = generation
            self._result = result
            return True

    @property
    def result(self) -> Optional[AnalyticsResult]:
        with self._lock:
            return self._result

    def recompute(
        self,
        journeys: Sequence[Journey],
        options: Optional[AnalyticsOptions] = None,
        parallel: bool = False,
    ) -> AnalyticsResult:
        """begin() + compute + publish(); returns the computed result."""
        generation = self.begin()
        result = compute_cumulative_analytics(journeys, options, parallel=parallel)
        self.publish(generation, result)
        return result
