import math
import random

import numpy as np
import pytest

from lpcad_engine.geometry import (
    angle_degrees,
    clamp,
    distance_to_quadratic,
    nearest_point_on_polyline,
    nearest_point_on_quadratic,
    quadratic_control_point_for_through,
    quadratic_point,
    sample_quadratic_polyline,
    snap_angle_degrees,
)
from lpcad_engine.intersect2d import (
    distance_to_segment,
    line_segment_intersection,
    polyline_intersections,
    project_point_onto_segment,
)


def _close(actual, expected, eps=1e-9):
    assert abs(actual[0] - expected[0]) <= eps
    assert abs(actual[1] - expected[1]) <= eps


def test_clamp():
    assert clamp(5.0, 0.0, 1.0) == 1.0
    assert clamp(-2.0, 0.0, 1.0) == 0.0
    assert clamp(0.25, 0.0, 1.0) == 0.25


def test_angle_degrees_is_normalized():
    assert angle_degrees((0, 0), (1, 0)) == pytest.approx(0.0)
    assert angle_degrees((0, 0), (0, 1)) == pytest.approx(90.0)
    assert angle_degrees((0, 0), (-1, 0)) == pytest.approx(180.0)
    assert angle_degrees((0, 0), (0, -1)) == pytest.approx(270.0)


def test_snap_angle_degrees_rounds_to_increment():
    assert snap_angle_degrees(44.0, 15.0) == pytest.approx(45.0)
    assert snap_angle_degrees(353.0, 15.0) == pytest.approx(0.0)
    assert snap_angle_degrees(-20.0, 15.0) == pytest.approx(345.0)


def test_snap_angle_degrees_rounds_exact_halves_up():
    assert snap_angle_degrees(7.5, 15.0) == pytest.approx(15.0)
    assert snap_angle_degrees(22.5, 15.0) == pytest.approx(30.0)


def test_projection_clamps_to_segment_ends():
    a, b = (0.0, 0.0), (10.0, 0.0)
    _close(project_point_onto_segment((-5.0, 3.0), a, b), a)
    _close(project_point_onto_segment((15.0, -3.0), a, b), b)
    _close(project_point_onto_segment((4.0, 7.0), a, b), (4.0, 0.0))


def test_projection_on_zero_length_segment_returns_the_point():
    for query in [(0.0, 0.0), (100.0, -3.0), (-1e6, 1e6)]:
        _close(project_point_onto_segment(query, (2.0, 3.0), (2.0, 3.0)), (2.0, 3.0))


def test_distance_to_segment():
    assert distance_to_segment((5.0, 4.0), (0.0, 0.0), (10.0, 0.0)) == pytest.approx(4.0)
    assert distance_to_segment((13.0, 4.0), (0.0, 0.0), (10.0, 0.0)) == pytest.approx(5.0)


def test_through_point_identity():
    rng = random.Random(3)
    for _ in range(100):
        start = (rng.uniform(-100, 100), rng.uniform(-100, 100))
        through = (rng.uniform(-100, 100), rng.uniform(-100, 100))
        end = (rng.uniform(-100, 100), rng.uniform(-100, 100))
        control = quadratic_control_point_for_through(start, through, end)
        _close(quadratic_point(start, control, end, 0.5), through)


def test_quadratic_sampling_includes_endpoints():
    samples = sample_quadratic_polyline((0.0, 0.0), (5.0, 10.0), (10.0, 0.0), 8)
    assert samples.shape == (9, 2)
    _close(samples[0], (0.0, 0.0))
    _close(samples[-1], (10.0, 0.0))
    _close(samples[4], quadratic_point((0.0, 0.0), (5.0, 10.0), (10.0, 0.0), 0.5))


def test_quadratic_sampling_uses_at_least_one_segment():
    samples = sample_quadratic_polyline((0.0, 0.0), (5.0, 10.0), (10.0, 0.0), 0)
    assert samples.shape == (2, 2)


def test_nearest_point_on_quadratic_apex():
    start, control, end = (0.0, 0.0), (50.0, 100.0), (100.0, 0.0)
    nearest = nearest_point_on_quadratic((50.0, 80.0), start, control, end, 64)
    _close(nearest, (50.0, 50.0), eps=1e-6)
    assert distance_to_quadratic((50.0, 80.0), start, control, end, 64) == pytest.approx(30.0, abs=1e-6)


def test_nearest_point_on_polyline_ignores_repeated_vertices():
    polyline = np.array([[0.0, 0.0], [0.0, 0.0], [10.0, 0.0]])
    point, dist = nearest_point_on_polyline((4.0, 2.0), polyline)
    _close(point, (4.0, 0.0))
    assert dist == pytest.approx(2.0)
    assert not math.isnan(dist)


def test_segment_intersection_inside_both_segments():
    hit = line_segment_intersection((0, 0), (10, 10), (0, 10), (10, 0))
    _close(hit, (5.0, 5.0))


def test_segment_intersection_at_shared_endpoint():
    hit = line_segment_intersection((0, 0), (10, 0), (10, 0), (10, 10))
    _close(hit, (10.0, 0.0))


def test_segment_intersection_outside_range_is_none():
    assert line_segment_intersection((0, 0), (1, 1), (0, 10), (10, 0)) is None


def test_parallel_and_coincident_segments_do_not_intersect():
    assert line_segment_intersection((0, 0), (10, 0), (0, 5), (10, 5)) is None
    assert line_segment_intersection((0, 0), (10, 0), (2, 0), (8, 0)) is None


def test_tiny_crossing_segments_still_intersect():
    hit = line_segment_intersection((0.0, 0.0), (1e-5, 1e-5), (0.0, 1e-5), (1e-5, 0.0))
    assert hit is not None
    _close(hit, (5e-6, 5e-6), eps=1e-15)


def test_zero_length_segment_has_no_intersection():
    assert line_segment_intersection((1.0, 1.0), (1.0, 1.0), (0.0, 0.0), (2.0, 2.0)) is None


def test_polyline_intersections_collects_crossings():
    zigzag = [(0.0, -1.0), (2.0, 1.0), (4.0, -1.0)]
    hits = polyline_intersections([(0.0, 0.0), (4.0, 0.0)], zigzag)
    assert len(hits) == 2
    _close(hits[0], (1.0, 0.0))
    _close(hits[1], (3.0, 0.0))
