"""
Build Journey snapshots from persistence-layer records.

Records are plain dicts shaped like the tracker's stored journeys:

    {
        'id': 'j-1',
        'start_time': datetime | epoch seconds | ISO-8601 string,
        'end_time': ...,
        'distance': 1234.5,              # meters
        'duration': 900,                 # seconds
        'path_points': [{'latitude': .., 'longitude': .., 'timestamp': ..}, ...],
        'hesitation_points': [{'latitude': .., 'longitude': .., 'duration': ..}, ...],
        'checkpoints': [{'latitude': .., 'longitude': .., 'feeling': 'Anxious', 'timestamp': ..}, ...],
    }

Coordinates outside [-90, 90] x [-180, 180], NaN or non-numeric never
reach the geometry. Path points with such coordinates are dropped here.
Hesitations are kept (they still count towards the stats) and removed
from clustering by sanitize_journeys(); checkpoints keep their feeling
with no location. Timestamps without an offset are read as UTC.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from journey_analytics.core.models import (
    Feeling,
    FeelingCheckpoint,
    GeoPoint,
    HesitationEvent,
    Journey,
    PathSample,
    as_utc,
)
from journey_analytics.utils.geo_utils import is_valid_coordinate

logger = logging.getLogger(__name__)


def parse_timestamp(value) -> Optional[datetime]:
    """datetime, epoch seconds (int/float) or ISO-8601 string -> aware datetime."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        return as_utc(datetime.fromisoformat(text))
    raise ValueError(f"Unsupported timestamp: {value!r}")


def _location(row: Mapping) -> Optional[GeoPoint]:
    lat = row.get('latitude')
    lon = row.get('longitude')
    if not is_valid_coordinate(lat, lon):
        return None
    return GeoPoint(float(lat), float(lon))


def _raw_location(row: Mapping) -> GeoPoint:
    """Coordinates as given; unparseable values become NaN."""

    def coerce(value):
        try:
            return float(value)
        except (TypeError, ValueError):
            return math.nan

    return GeoPoint(coerce(row.get('latitude')), coerce(row.get('longitude')))


def journey_from_record(record: Mapping) -> Journey:
    """
    Convert one record. Raises KeyError/ValueError when 'id' or
    'start_time' is missing or unparseable.
    """
    start_time = parse_timestamp(record['start_time'])
    if start_time is None:
        raise ValueError(f"Journey {record.get('id')!r} has no start_time")

    samples = []
    for row in record.get('path_points') or ():
        loc = _location(row)
        if loc is not None:
            samples.append(PathSample(location=loc, timestamp=parse_timestamp(row.get('timestamp'))))

    hesitations = [
        HesitationEvent(
            location=_raw_location(row),
            duration_seconds=float(row.get('duration') or 0.0),
        )
        for row in record.get('hesitation_points') or ()
    ]

    checkpoints = [
        FeelingCheckpoint(
            location=_location(row),
            feeling=Feeling.parse(row.get('feeling')),
            timestamp=parse_timestamp(row.get('timestamp')),
        )
        for row in record.get('checkpoints') or ()
    ]

    return Journey(
        id=str(record['id']),
        start_time=start_time,
        end_time=parse_timestamp(record.get('end_time')),
        distance_meters=float(record.get('distance') or 0.0),
        duration_seconds=int(record.get('duration') or 0),
        path_samples=tuple(samples),
        hesitations=tuple(hesitations),
        checkpoints=tuple(checkpoints),
    )


def journeys_from_records(records: Iterable[Mapping]) -> List[Journey]:
    """
    Convert a batch; records that cannot be converted are logged and skipped.
    """
    journeys = []
    for record in records:
        try:
            journeys.append(journey_from_record(record))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning("Skipping journey record %r: %s", record.get('id'), e)
    return journeys


def sanitize_journeys(journeys: Sequence[Journey]) -> Tuple[List[Journey], int]:
    """
    Copies of `journeys` without malformed path-sample and hesitation
    coordinates.

    Checkpoints are left alone: they feed no geometry. Journey-level totals
    are kept, but the copies hold fewer hesitations, so count those on the
    input. Returns (journeys, dropped_count).
    """
    cleaned = []
    dropped = 0
    for journey in journeys:
        samples = tuple(s for s in journey.path_samples if is_valid_coordinate(*s.location))
        hesitations = tuple(h for h in journey.hesitations if is_valid_coordinate(*h.location))
        removed = (
            len(journey.path_samples) - len(samples)
            + len(journey.hesitations) - len(hesitations)
        )
        if removed:
            dropped += removed
            journey = replace(
                journey,
                path_samples=samples,
                hesitations=hesitations,
            )
        cleaned.append(journey)

    if dropped:
        logger.warning("Dropped %d malformed coordinates from %d journeys", dropped, len(journeys))
    return cleaned, dropped


def journey_to_record(journey: Journey) -> Dict:
    """Inverse of journey_from_record, with ISO-8601 timestamps."""

    def iso(dt):
        return dt.isoformat() if dt is not None else None

    return {
        'id': journey.id,
        'start_time': iso(journey.start_time),
        'end_time': iso(journey.end_time),
        'distance': journey.distance_meters,
        'duration': journey.duration_seconds,
        'path_points': [
            {'latitude': s.location.latitude, 'longitude': s.location.longitude,
             'timestamp': iso(s.timestamp)}
            for s in journey.path_samples
        ],
        'hesitation_points': [
            {'latitude': h.location.latitude, 'longitude': h.location.longitude,
             'duration': h.duration_seconds}
            for h in journey.hesitations
        ],
        'checkpoints': [
            {'latitude': c.location.latitude if c.location else None,
             'longitude': c.location.longitude if c.location else None,
             'feeling': c.feeling.value, 'timestamp': iso(c.timestamp)}
            for c in journey.checkpoints
        ],
    }
