"""Length estimates for conductor footage reporting."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from lpcad_engine.circular_arc import circular_arc_geometry_from_three_points
from lpcad_engine.config import get_engine_config
from lpcad_engine.geometry import quadratic_control_point_for_through
from lpcad_engine.intersect2d import distance

Point = Tuple[float, float]


def _midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5)


def _quadratic_length(start: Point, control: Point, end: Point, depth: int, flatness: float, max_depth: int) -> float:
    chord = distance(start, end)
    control_net = distance(start, control) + distance(control, end)
    if depth >= max_depth or control_net - chord <= flatness:
        return 0.5 * (chord + control_net)
    left_control = _midpoint(start, control)
    right_control = _midpoint(control, end)
    split = _midpoint(left_control, right_control)
    return (
        _quadratic_length(start, left_control, split, depth + 1, flatness, max_depth)
        + _quadratic_length(split, right_control, end, depth + 1, flatness, max_depth)
    )


def quadratic_length_adaptive(
    start: Point,
    control: Point,
    end: Point,
    *,
    flatness: Optional[float] = None,
    max_depth: Optional[int] = None,
) -> float:
    """Length of a quadratic Bézier by de Casteljau subdivision.

    A node stops splitting once its control polygon exceeds its chord by at
    most ``flatness`` document units, or at ``max_depth``; its length is then
    the mean of the chord and control-polygon lengths.
    """
    if flatness is None or max_depth is None:
        config = get_engine_config()
        flatness = config.curve_flatness_epsilon if flatness is None else flatness
        max_depth = config.curve_max_subdivision_depth if max_depth is None else max_depth
    return _quadratic_length(start, control, end, 0, float(flatness), int(max_depth))


def curve_length_from_through(start: Point, through: Point, end: Point) -> float:
    """Length of a stored curve whose middle point lies on the curve."""
    control = quadratic_control_point_for_through(start, through, end)
    return quadratic_length_adaptive(start, control, end)


def arc_length_from_three_points(start: Point, through: Point, end: Point) -> float:
    """Arc length ``radius * sweep``; straight distance when no circle fits."""
    geometry = circular_arc_geometry_from_three_points(start, through, end)
    if geometry is None:
        return distance(start, end)
    return geometry.radius * geometry.sweep_radians


def polyline_length(points: Sequence[Point] | np.ndarray) -> float:
    """Return the cumulative length of a polyline."""
    pts = np.asarray(points, dtype=float)
    if pts.shape[0] < 2:
        return 0.0
    delta = np.diff(pts, axis=0)
    return float(np.sum(np.hypot(delta[:, 0], delta[:, 1])))


__all__ = [
    "arc_length_from_three_points",
    "curve_length_from_through",
    "polyline_length",
    "quadratic_length_adaptive",
]
