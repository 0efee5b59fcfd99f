#!/usr/bin/env python3
"""Quick-start verification for the cumulative journey analytics engine"""
import sys
import time
from datetime import datetime, timezone


def section(title):
    print(f"\n{'='*70}\n  {title}\n{'='*70}\n")


def check_python():
    section("1. Python Version")
    v = sys.version_info
    print(f"   Python {v.major}.{v.minor}.{v.micro}")
    ok = v.major == 3 and v.minor >= 9
    print(f"   {'OK' if ok else 'Python 3.9+ required'}\n")
    return ok


def check_packages():
    section("2. Python Packages")
    ok = True
    for alias, name in {'numpy': 'numpy', 'journey_analytics': 'journey-analytics'}.items():
        try:
            mod = __import__(alias)
            print(f"   {name}: {getattr(mod, '__version__', 'ok')}")
        except ImportError:
            print(f"   {name}: MISSING")
            ok = False
    print()
    return ok


def check_engine(parallel=False):
    section(f"3. Engine ({'parallel' if parallel else 'sequential'})")
    from journey_analytics import AnalyticsOptions, compute_cumulative_analytics
    from journey_analytics.core.time_window import trailing_windows
    from journey_analytics.utils import summarize_stats
    from journey_analytics.utils.config import configure_logging
    from simulation.synthetic_journeys import generate_journeys

    configure_logging()

    now = datetime.now(timezone.utc)
    journeys = generate_journeys(count=30, now=now)
    _, (prior_start, prior_end) = trailing_windows(now)
    options = AnalyticsOptions(prior_window_start=prior_start, prior_window_end=prior_end)

    t0 = time.perf_counter()
    result = compute_cumulative_analytics(journeys, options, parallel=parallel)
    elapsed = (time.perf_counter() - t0) * 1000

    print(f"   {summarize_stats(result.stats)}")
    print(f"   Heat cells: {len(result.heat_cells)}")
    print(f"   Boundary vertices: {len(result.boundary_polygon or ())}")
    print(f"   Prior boundary vertices: {len(result.prior_boundary_polygon or ())}")
    print(f"   Safe area vertices: {len(result.safe_area_polygon or ())}")
    print(f"   Hesitation clusters: {len(result.hesitation_clusters)}")
    print(f"   Computed in {elapsed:.1f} ms\n")
    return result.stats.total_journeys == len(journeys)


def check_empty():
    section("4. Empty Input")
    from journey_analytics import compute_cumulative_analytics
    result = compute_cumulative_analytics([])
    ok = result.stats.total_journeys == 0 and result.boundary_polygon is None
    print(f"   {'OK' if ok else 'Unexpected result for empty input'}\n")
    return ok


def main():
    print("\n" + "=" * 70)
    print("  Cumulative Journey Analytics - Quick Start")
    print("=" * 70)

    checks = [
        ("Python", check_python), ("Packages", check_packages),
        ("Engine", check_engine), ("Engine (parallel)", lambda: check_engine(parallel=True)),
        ("Empty input", check_empty),
    ]

    results = {}
    for name, fn in checks:
        try:
            results[name] = fn()
        except Exception as e:
            print(f"   Error: {e}\n")
            results[name] = False

    section("Summary")
    for name, ok in results.items():
        print(f"   {'PASS' if ok else 'FAIL'} {name}")
    print()

    if not all(results.values()):
        print("   Fix errors above before running.\n")
        sys.exit(1)
    print("   All systems ready!\n")


if __name__ == '__main__':
    main()
