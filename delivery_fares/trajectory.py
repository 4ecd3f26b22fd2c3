"""Trajectory cleaning and segmentation for a single delivery run.

The filter walks adjacent ping pairs and keeps the left endpoint of every
pair that describes a physically possible transition. A pair with a
non-increasing timestamp or an implied speed above
MAX_PLAUSIBLE_SPEED_KMH drops its left endpoint. The final ping of the
run is always kept, even when its incoming transition was rejected.
"""

from collections.abc import Sequence

from .geo import haversine_distance_km
from .models import Point, Segment, hours_between

MAX_PLAUSIBLE_SPEED_KMH = 100.0


def _measure(p1: Point, p2: Point) -> tuple[float, float, float] | None:
    """Return (distance_km, duration_hours, speed_kmh), or None if time does not advance."""
    duration = hours_between(p1, p2)
    if duration <= 0:
        return None

    distance = haversine_distance_km(p1.latitude, p1.longitude, p2.latitude, p2.longitude)
    return distance, duration, distance / duration


def filter_anomalies(points: Sequence[Point]) -> list[Point]:
    """Drop pings whose outgoing transition is implausible.

    Args:
        points: Pings of one delivery, oldest first.

    Returns:
        The cleaned pings, in the original order.
    """
    valid: list[Point] = []

    for p1, p2 in zip(points, points[1:]):
        measured = _measure(p1, p2)
        if measured is None:
            continue

        _, _, speed = measured
        if speed > MAX_PLAUSIBLE_SPEED_KMH:
            continue
        valid.append(p1)

    if points:
        valid.append(points[-1])

    return valid


def build_segments(points: Sequence[Point]) -> list[Segment]:
    """Split cleaned pings into consecutive segments.

    Pairs whose duration is not positive contribute no segment.
    """
    segments: list[Segment] = []

    for p1, p2 in zip(points, points[1:]):
        measured = _measure(p1, p2)
        if measured is None:
            continue

        distance, duration, speed = measured
        segments.append(
            Segment(
                p1=p1,
                p2=p2,
                speed_kmh=speed,
                distance_km=distance,
                duration_hours=duration,
            )
        )

    return segments
