import logging
from collections.abc import Sequence

from pydantic import BaseModel, Field

from .models import MotionState, Point, Segment
from .trajectory import build_segments, filter_anomalies

logger = logging.getLogger(__name__)


class FareBreakdown(BaseModel):
    """Detailed breakdown of a delivery fare."""

    base_fee: float = Field(ge=0)
    moving_charge: float = Field(ge=0)
    night_charge: float = Field(ge=0)
    idle_charge: float = Field(ge=0)
    subtotal: float = Field(ge=0)
    total_fare: float = Field(ge=0)
    segments_priced: int = Field(ge=0)
    points_discarded: int = Field(ge=0)
    minimum_applied: bool


class FareCalculator:
    """Prices a delivery from its GPS pings using a time-of-day and motion tariff."""

    BASE_FEE = 1.30
    DAY_RATE_PER_KM = 0.74
    NIGHT_RATE_PER_KM = 1.30
    IDLE_RATE_PER_HOUR = 11.90
    MINIMUM_FARE = 3.47
    MOVING_SPEED_THRESHOLD_KMH = 10.0
    DAY_START_HOUR = 5
    DAY_END_HOUR = 24

    def motion_state(self, speed_kmh: float) -> MotionState:
        if speed_kmh > self.MOVING_SPEED_THRESHOLD_KMH:
            return MotionState.MOVING
        return MotionState.IDLE

    def is_day_hour(self, hour: int) -> bool:
        return self.DAY_START_HOUR <= hour < self.DAY_END_HOUR

    def segment_charge(self, segment: Segment) -> float:
        """Charge for one segment.

        Moving segments are billed per kilometer, at the night rate when they
        start between midnight and DAY_START_HOUR. Idle segments are billed
        per hour at any time of day.
        """
        if self.motion_state(segment.speed_kmh) == MotionState.MOVING:
            if self.is_day_hour(segment.hour):
                return self.DAY_RATE_PER_KM * segment.distance_km
            return self.NIGHT_RATE_PER_KM * segment.distance_km
        return self.IDLE_RATE_PER_HOUR * segment.duration_hours

    def calculate(self, points: Sequence[Point]) -> FareBreakdown:
        """
        Calculate the fare for one delivery run.

        Pings are cleaned, split into segments and each segment is priced in
        order on top of BASE_FEE. Totals below MINIMUM_FARE are raised to it.
        Values are kept at full precision; rounding belongs to the writer.
        """
        valid_points = filter_anomalies(points)
        segments = build_segments(valid_points)

        total = self.BASE_FEE
        moving_charge = 0.0
        night_charge = 0.0
        idle_charge = 0.0

        for segment in segments:
            charge = self.segment_charge(segment)
            total += charge

            if self.motion_state(segment.speed_kmh) == MotionState.IDLE:
                idle_charge += charge
            elif self.is_day_hour(segment.hour):
                moving_charge += charge
            else:
                night_charge += charge

            logger.debug(
                f"Priced segment for {segment.p1.delivery_id}: "
                f"charge={charge:.4f}, running_total={total:.4f}"
            )

        subtotal = total
        minimum_applied = total < self.MINIMUM_FARE
        if minimum_applied:
            total = self.MINIMUM_FARE

        return FareBreakdown(
            base_fee=self.BASE_FEE,
            moving_charge=moving_charge,
            night_charge=night_charge,
            idle_charge=idle_charge,
            subtotal=subtotal,
            total_fare=total,
            segments_priced=len(segments),
            points_discarded=len(points) - len(valid_points),
            minimum_applied=minimum_applied,
        )
