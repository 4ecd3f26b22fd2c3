"""Tests for anomaly filtering and segmentation."""

import pytest

from delivery_fares.geo import haversine_distance_km
from delivery_fares.trajectory import (
    MAX_PLAUSIBLE_SPEED_KMH,
    build_segments,
    filter_anomalies,
)
from tests.factories import make_point, make_run


@pytest.mark.unit
class TestFilterAnomalies:
    """Tests for filter_anomalies."""

    def test_empty_run(self):
        assert filter_anomalies([]) == []

    def test_single_point_is_kept(self):
        point = make_point()
        assert filter_anomalies([point]) == [point]

    def test_plausible_run_is_unchanged(self):
        run = make_run("1", [(35.0, 51.0, 0), (35.01, 51.01, 10), (35.02, 51.02, 20)])
        assert filter_anomalies(run) == run

    def test_zero_duration_drops_left_endpoint(self):
        run = make_run("1", [(35.0, 51.0, 0), (35.0, 51.0, 0), (35.001, 51.0, 10)])
        assert filter_anomalies(run) == [run[1], run[2]]

    def test_backwards_timestamp_drops_left_endpoint(self):
        run = make_run("1", [(35.0, 51.0, 10), (35.0, 51.0, 5), (35.001, 51.0, 15)])
        assert filter_anomalies(run) == [run[1], run[2]]

    def test_speeding_transition_drops_left_endpoint(self):
        """About 111 km in ten minutes is far above the plausible limit."""
        run = make_run("1", [(35.0, 51.0, 0), (36.0, 51.0, 10), (36.001, 51.0, 20)])
        assert filter_anomalies(run) == [run[1], run[2]]

    def test_last_point_kept_after_anomalous_transition(self):
        run = make_run("1", [(35.0, 51.0, 0), (35.001, 51.0, 10), (40.0, 51.0, 20)])
        assert filter_anomalies(run) == [run[0], run[2]]

    def test_last_point_kept_when_every_transition_is_anomalous(self):
        run = make_run("1", [(35.0, 51.0, 0), (40.0, 51.0, 1), (45.0, 51.0, 2)])
        assert filter_anomalies(run) == [run[2]]

    def test_plausible_speed_limit(self):
        assert MAX_PLAUSIBLE_SPEED_KMH == 100.0

    def test_does_not_mutate_input(self):
        run = make_run("1", [(35.0, 51.0, 0), (36.0, 51.0, 1)])
        original = list(run)
        filter_anomalies(run)
        assert run == original


@pytest.mark.unit
class TestBuildSegments:
    """Tests for build_segments."""

    def test_no_segments_for_short_runs(self):
        assert build_segments([]) == []
        assert build_segments([make_point()]) == []

    def test_segment_measurements(self):
        run = make_run("1", [(35.0, 51.0, 0), (35.1, 51.1, 10)])
        segments = build_segments(run)

        assert len(segments) == 1
        segment = segments[0]
        expected_distance = haversine_distance_km(35.0, 51.0, 35.1, 51.1)
        assert segment.p1 == run[0]
        assert segment.p2 == run[1]
        assert segment.distance_km == pytest.approx(expected_distance)
        assert segment.duration_hours == pytest.approx(1 / 6)
        assert segment.speed_kmh == pytest.approx(expected_distance * 6)
        assert segment.hour == 6

    def test_segments_follow_point_order(self):
        run = make_run("1", [(35.0, 51.0, 0), (35.01, 51.0, 10), (35.02, 51.0, 30)])
        segments = build_segments(run)
        assert [(s.p1, s.p2) for s in segments] == [(run[0], run[1]), (run[1], run[2])]

    def test_non_positive_duration_skipped(self):
        run = make_run("1", [(35.0, 51.0, 0), (35.01, 51.0, 0), (35.02, 51.0, 10)])
        segments = build_segments(run)
        assert len(segments) == 1
        assert segments[0].p1 == run[1]
