"""Core data types for delivery fare computation."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class MotionState(str, Enum):
    """Motion state of a segment, derived from its average speed."""

    MOVING = "moving"
    IDLE = "idle"


@dataclass(frozen=True)
class Point:
    """A single GPS ping belonging to a delivery."""

    delivery_id: str
    latitude: float
    longitude: float
    timestamp: datetime


@dataclass
class Segment:
    """Interval between two temporally adjacent valid pings."""

    p1: Point
    p2: Point
    speed_kmh: float
    distance_km: float
    duration_hours: float

    @property
    def hour(self) -> int:
        """Hour of day (0-23) at which the segment starts."""
        return self.p1.timestamp.hour


def hours_between(p1: Point, p2: Point) -> float:
    """Signed elapsed time from p1 to p2 in hours."""
    return (p2.timestamp - p1.timestamp).total_seconds() / 3600
