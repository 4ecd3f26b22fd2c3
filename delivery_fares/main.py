"""Delivery fare processor entry point."""

import argparse
import sys

from pydantic import ValidationError

from .engine import FareDispatcher
from .errors import FareProcessingError
from .fare_logging import get_logger, setup_logging
from .ingest import PingReader
from .metrics import FareMetricsCollector
from .output import write_fares
from .settings import FareSettings, get_settings

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = {name: field.default for name, field in FareSettings.model_fields.items()}
    parser = argparse.ArgumentParser(
        description="Compute delivery fares from a CSV stream of GPS pings"
    )
    parser.add_argument(
        "--input",
        help=f"Ping CSV to read (default: {defaults['input_path']})",
    )
    parser.add_argument(
        "--output",
        help=f"Fare CSV to write (default: {defaults['output_path']})",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help=f"Deliveries priced concurrently (default: {defaults['max_workers']})",
    )
    parser.add_argument(
        "--utc-offset-minutes",
        type=int,
        help="UTC offset used for time-of-day tariffs",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        "input_path": args.input,
        "output_path": args.output,
        "max_workers": args.max_workers,
        "utc_offset_minutes": args.utc_offset_minutes,
    }
    # Environment values and CLI overrides are validated together
    try:
        settings = get_settings(
            **{name: value for name, value in overrides.items() if value is not None}
        )
    except ValidationError as e:
        parser.error(str(e))

    setup_logging(
        level=settings.log_level,
        json_output=settings.log_format == "json",
        environment=settings.environment,
    )

    logger.info(f"Reading pings from {settings.input_path}")
    logger.info(f"Max workers: {settings.max_workers}")

    reader = PingReader(settings.input_path, tz=settings.get_tzinfo())
    metrics = FareMetricsCollector()
    dispatcher = FareDispatcher(max_workers=settings.max_workers, metrics=metrics)

    try:
        fares = dispatcher.run(reader)
        write_fares(settings.output_path, fares)
    except FareProcessingError as e:
        logger.error(f"Fare processing failed: {e}")
        return 1

    snapshot = metrics.get_snapshot()
    logger.info(
        f"Run complete: {snapshot.deliveries_priced} deliveries, "
        f"{reader.stats.records_dropped} malformed records dropped, "
        f"{snapshot.points_discarded} anomalous points discarded, "
        f"peak workers {snapshot.peak_active_workers}, "
        f"{snapshot.elapsed_seconds:.2f}s"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
