"""CSV writer for finalized delivery fares."""

import csv
import logging
from collections.abc import Mapping
from pathlib import Path

from .errors import OutputWriteError

logger = logging.getLogger(__name__)


def format_fare(fare: float) -> str:
    """Render a fare with two decimal places."""
    return f"{fare:.2f}"


def write_fares(path: str | Path, fares: Mapping[str, float]) -> int:
    """Write one delivery_id,fare row per delivery.

    Row order follows the mapping and carries no meaning.

    Returns:
        Number of rows written.

    Raises:
        OutputWriteError: If the file cannot be created or written.
    """
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            for delivery_id, fare in fares.items():
                writer.writerow([delivery_id, format_fare(fare)])
    except OSError as e:
        raise OutputWriteError(f"Failed to write fares to {path}: {e}") from e

    logger.info(f"Wrote {len(fares)} fares to {path}")
    return len(fares)
