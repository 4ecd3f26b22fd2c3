"""Delivery fare computation from GPS ping streams."""

from .engine import FareDispatcher, FareStore, group_deliveries
from .fare import FareBreakdown, FareCalculator
from .models import MotionState, Point, Segment

__version__ = "0.1.0"

__all__ = [
    "FareBreakdown",
    "FareCalculator",
    "FareDispatcher",
    "FareStore",
    "MotionState",
    "Point",
    "Segment",
    "group_deliveries",
]
