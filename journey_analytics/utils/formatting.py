"""
Human-readable formatting of journey statistics
"""

from journey_analytics.utils.config import METERS_PER_MILE


def format_distance(meters: float, use_miles: bool = False, precision: int = 1) -> str:
    if use_miles:
        return f"{meters / METERS_PER_MILE:.{precision}f} mi"
    return f"{meters / 1000.0:.{precision}f} km"


def format_duration(seconds: int) -> str:
    """'1h 5m' from an hour up, otherwise '42m'."""
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_pace(distance_m: float, duration_s: float, use_miles: bool = False) -> str:
    """Minutes per km (or mile) as 'm:ss'; '--:--' without distance or time."""
    if distance_m <= 0 or duration_s <= 0:
        return "--:--"
    units = distance_m / (METERS_PER_MILE if use_miles else 1000.0)
    pace = duration_s / 60.0 / units
    minutes = int(pace)
    secs = int((pace - minutes) * 60)
    return f"{minutes}:{secs:02d}"


def summarize_stats(stats, use_miles: bool = False) -> str:
    """One-line summary of a CumulativeStats."""
    unit = 'mi' if use_miles else 'km'
    parts = [
        f"{stats.total_journeys} journeys",
        f"{format_distance(stats.total_distance_meters, use_miles)} total",
        f"{format_duration(stats.total_duration_seconds)} moving "
        f"(avg {format_duration(stats.avg_journey_duration_seconds)})",
        f"pace {format_pace(stats.total_distance_meters, stats.total_duration_seconds, use_miles)}/{unit}",
        f"furthest {format_distance(stats.furthest_distance_meters, use_miles)}",
        f"safe area {stats.safe_area_square_meters / 1_000_000:.2f} km²",
        f"{stats.total_hesitations} hesitations",
        f"{stats.anxiety_free_percentage:.0f}% anxiety-free",
    ]
    return " | ".join(parts)
