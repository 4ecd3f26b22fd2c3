"""Ping ingestion from CSV files.

Each line is ``delivery_id,latitude,longitude,unix_seconds`` with no
header. Lines with the wrong field count or non-numeric values are
dropped silently and counted in IngestStats. Failing to open or read the file is
not a data problem and raises InputFileError.
"""

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ValidationError

from .errors import InputFileError
from .models import Point

logger = logging.getLogger(__name__)

FIELD_COUNT = 4

# Plain decimal literals only: no padding, digit separators or fractional seconds
_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf)|nan",
    re.IGNORECASE,
)


def _literal(pattern: re.Pattern[str], kind: str) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        if isinstance(value, str) and not pattern.fullmatch(value):
            raise ValueError(f"not a plain {kind} literal: {value!r}")
        return value

    return check


Coordinate = Annotated[float, BeforeValidator(_literal(_FLOAT_LITERAL, "decimal"))]
UnixSeconds = Annotated[int, BeforeValidator(_literal(_INTEGER_LITERAL, "integer"))]


class PingRecord(BaseModel):
    """One raw CSV ping record."""

    delivery_id: str
    latitude: Coordinate
    longitude: Coordinate
    timestamp: UnixSeconds


@dataclass
class IngestStats:
    """Counters for one pass over an input file."""

    lines_read: int = 0
    records_dropped: int = 0

    @property
    def records_accepted(self) -> int:
        return self.lines_read - self.records_dropped


def parse_line(line: str, tz: tzinfo = UTC) -> Point | None:
    """Parse one CSV line into a Point, or None if the record is malformed."""
    fields = line.rstrip("\r\n").split(",")
    if len(fields) != FIELD_COUNT:
        return None

    try:
        record = PingRecord.model_validate(
            {
                "delivery_id": fields[0],
                "latitude": fields[1],
                "longitude": fields[2],
                "timestamp": fields[3],
            }
        )
        timestamp = datetime.fromtimestamp(record.timestamp, tz=tz)
    except (ValidationError, OverflowError, OSError, ValueError):
        return None

    return Point(
        delivery_id=record.delivery_id,
        latitude=record.latitude,
        longitude=record.longitude,
        timestamp=timestamp,
    )


class PingReader:
    """Lazy, one-pass reader of well-formed pings from a CSV file."""

    def __init__(self, path: str | Path, tz: tzinfo = UTC):
        self.path = Path(path)
        self.tz = tz
        self.stats = IngestStats()

    def __iter__(self) -> Iterator[Point]:
        try:
            f = open(self.path, encoding="utf-8", errors="replace")
        except OSError as e:
            raise InputFileError(f"Failed to open ping input {self.path}: {e}") from e

        with f:
            try:
                for line in f:
                    self.stats.lines_read += 1
                    point = parse_line(line, self.tz)
                    if point is None:
                        self.stats.records_dropped += 1
                        continue
                    yield point
            except OSError as e:
                raise InputFileError(f"Failed to read ping input {self.path}: {e}") from e

        if self.stats.records_dropped:
            logger.info(
                f"Dropped {self.stats.records_dropped} malformed records "
                f"out of {self.stats.lines_read} lines in {self.path}"
            )
