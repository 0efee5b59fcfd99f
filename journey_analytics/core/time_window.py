"""
Journey selection by start time.
"""

from datetime import datetime, timedelta
from typing import List, Sequence, Tuple

from journey_analytics.core.models import Journey, as_utc
from journey_analytics.utils import config

Window = Tuple[datetime, datetime]


def in_window(journey: Journey, window_start: datetime, window_end: datetime) -> bool:
    """
    Half-open test: window_start <= start_time < window_end.

    Naive datetimes on either side are read as UTC.
    """
    return as_utc(window_start) <= as_utc(journey.start_time) < as_utc(window_end)


def filter_journeys_in_window(
    journeys: Sequence[Journey],
    window_start: datetime,
    window_end: datetime,
) -> List[Journey]:
    """
    Journeys whose start_time falls in [window_start, window_end), in input order.
    """
    if as_utc(window_end) < as_utc(window_start):
        raise ValueError(
            f"window_end ({window_end.isoformat()}) is before window_start ({window_start.isoformat()})"
        )
    return [j for j in journeys if in_window(j, window_start, window_end)]


def trailing_windows(now: datetime, days: int = config.PRIOR_WINDOW_DAYS) -> Tuple[Window, Window]:
    """
    (current, prior) windows of `days` length ending at `now`.

    With days=7: current = [now-7d, now), prior = [now-14d, now-7d).
    """
    span = timedelta(days=days)
    current = (now - span, now)
    prior = (now - 2 * span, now - span)
    return current, prior
