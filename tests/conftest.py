"""Pytest configuration for delivery fare tests."""

import logging
import random

import pytest

from delivery_fares.models import Point
from tests.factories import make_run

# Unix timestamps of the reference five-ping scenario (2023-10-01 10:40 UTC onwards)
SCENARIO_CSV = """1,35.0,51.0,1696156800
1,35.1,51.1,1696157400
1,35.2,51.2,1696158000
2,36.0,52.0,1696158600
2,36.1,52.1,1696159200
"""


@pytest.fixture
def scenario_csv() -> str:
    """Two deliveries, ten minutes between pings, roughly 14 km per hop."""
    return SCENARIO_CSV


@pytest.fixture
def many_deliveries() -> list[Point]:
    """Seeded stream of 40 contiguous delivery runs with mixed motion."""
    rng = random.Random(42)
    stream: list[Point] = []
    for i in range(40):
        lat, lng, minutes = -23.55, -46.63, 0.0
        pings = []
        for _ in range(rng.randint(0, 8)):
            pings.append((lat, lng, minutes))
            lat += rng.uniform(-0.02, 0.02)
            lng += rng.uniform(-0.02, 0.02)
            minutes += rng.choice([0.0, 1.0, 5.0, 10.0])
        stream.extend(make_run(f"delivery-{i}", pings))
    return stream


@pytest.fixture
def restore_root_logger():
    """Undo handler changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
