"""Bounded-concurrency dispatch of delivery fare workers.

Pings arrive as one ordered stream in which each delivery occupies a
contiguous run. Every run becomes one task on a thread pool. A counting
semaphore caps how many tasks are in flight, so a slow pool applies
back-pressure to the stream instead of buffering all of it.

Runs are keyed by delivery id. If an id reappears after another
delivery, the later run is priced on its own and overwrites the earlier
fare; input must be grouped upstream.
"""

import logging
import threading
from collections.abc import Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor, wait
from itertools import groupby
from operator import attrgetter

from .fare import FareCalculator
from .fare_logging import log_delivery_context
from .metrics import FareMetricsCollector
from .models import Point

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 10


def group_deliveries(points: Iterable[Point]) -> Iterator[tuple[str, list[Point]]]:
    """Yield (delivery_id, points) for each contiguous run of the stream."""
    for delivery_id, run in groupby(points, key=attrgetter("delivery_id")):
        yield delivery_id, list(run)


class FareStore:
    """Fare mapping shared by all workers of a run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fares: dict[str, float] = {}

    def record(self, delivery_id: str, fare: float) -> None:
        with self._lock:
            self._fares[delivery_id] = fare

    def snapshot(self) -> dict[str, float]:
        """Return a copy of the recorded fares."""
        with self._lock:
            return dict(self._fares)

    def __len__(self) -> int:
        with self._lock:
            return len(self._fares)


class FareDispatcher:
    """Prices every delivery run of a ping stream on a bounded worker pool."""

    def __init__(
        self,
        max_workers: int = DEFAULT_MAX_WORKERS,
        calculator: FareCalculator | None = None,
        metrics: FareMetricsCollector | None = None,
    ):
        """Initialize dispatcher.

        Args:
            max_workers: Maximum number of deliveries priced at the same time.
            calculator: Fare calculator shared by all workers.
            metrics: Collector receiving per-delivery counters.
        """
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        self.max_workers = max_workers
        self.calculator = calculator or FareCalculator()
        self.metrics = metrics or FareMetricsCollector()

    def run(self, points: Iterable[Point]) -> dict[str, float]:
        """Price every delivery in the stream and return the final fare mapping.

        Blocks until every submitted worker has finished. Fares are full
        precision.
        """
        store = FareStore()
        slots = threading.BoundedSemaphore(self.max_workers)
        # Unfinished futures, plus finished ones that raised
        pending: set[Future[None]] = set()
        failed: list[Future[None]] = []
        runs = 0

        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="fare-worker"
        ) as executor:
            for delivery_id, run in group_deliveries(points):
                slots.acquire()
                future = executor.submit(self._price_delivery, delivery_id, run, store)
                future.add_done_callback(lambda _: slots.release())
                pending.add(future)
                runs += 1
                self._collect_finished(pending, failed)

            wait(pending)
            self._collect_finished(pending, failed)

        for future in failed:
            # Re-raise anything a worker did not expect
            future.result()

        fares = store.snapshot()
        logger.info(f"Priced {len(fares)} deliveries from {runs} runs")
        return fares

    @staticmethod
    def _collect_finished(pending: set[Future[None]], failed: list[Future[None]]) -> None:
        """Move finished futures out of pending, keeping the ones that raised."""
        finished = {future for future in pending if future.done()}
        pending -= finished
        failed.extend(future for future in finished if future.exception() is not None)

    def _price_delivery(self, delivery_id: str, points: list[Point], store: FareStore) -> None:
        """Compute one delivery's fare and record it in the shared store."""
        self.metrics.worker_started()
        try:
            with log_delivery_context(delivery_id):
                breakdown = self.calculator.calculate(points)
                store.record(delivery_id, breakdown.total_fare)
                logger.debug(
                    f"Fare {breakdown.total_fare:.2f} from {breakdown.segments_priced} segments, "
                    f"{breakdown.points_discarded} points discarded"
                )
            self.metrics.record_delivery(
                points_received=len(points),
                points_discarded=breakdown.points_discarded,
                segments_priced=breakdown.segments_priced,
                minimum_applied=breakdown.minimum_applied,
            )
        finally:
            self.metrics.worker_finished()
