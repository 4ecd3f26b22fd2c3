"""Thread-safe run metrics for the fare dispatcher."""

import threading
import time
from dataclasses import dataclass


@dataclass
class FareRunMetrics:
    """Point-in-time metrics snapshot."""

    # Throughput totals
    deliveries_priced: int
    points_received: int
    points_discarded: int
    segments_priced: int
    minimum_fare_applied: int

    # Worker pool
    active_workers: int
    peak_active_workers: int

    # Timing
    elapsed_seconds: float


class FareMetricsCollector:
    """Counters shared by every fare worker of a run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._start_time = time.monotonic()

        # Counters
        self._deliveries_priced = 0
        self._points_received = 0
        self._points_discarded = 0
        self._segments_priced = 0
        self._minimum_fare_applied = 0

        # Concurrency tracking
        self._active_workers = 0
        self._peak_active_workers = 0

    def worker_started(self) -> None:
        """Record a worker entering its fare computation."""
        with self._lock:
            self._active_workers += 1
            if self._active_workers > self._peak_active_workers:
                self._peak_active_workers = self._active_workers

    def worker_finished(self) -> None:
        """Record a worker leaving its fare computation."""
        with self._lock:
            self._active_workers -= 1

    def record_delivery(
        self,
        points_received: int,
        points_discarded: int,
        segments_priced: int,
        minimum_applied: bool,
    ) -> None:
        """Record the outcome of one priced delivery run."""
        with self._lock:
            self._deliveries_priced += 1
            self._points_received += points_received
            self._points_discarded += points_discarded
            self._segments_priced += segments_priced
            if minimum_applied:
                self._minimum_fare_applied += 1

    def get_snapshot(self) -> FareRunMetrics:
        """Get current metrics snapshot."""
        with self._lock:
            return FareRunMetrics(
                deliveries_priced=self._deliveries_priced,
                points_received=self._points_received,
                points_discarded=self._points_discarded,
                segments_priced=self._segments_priced,
                minimum_fare_applied=self._minimum_fare_applied,
                active_workers=self._active_workers,
                peak_active_workers=self._peak_active_workers,
                elapsed_seconds=time.monotonic() - self._start_time,
            )
