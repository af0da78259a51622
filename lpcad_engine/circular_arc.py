"""Circular arcs defined by three points: start, a point on the arc, end.

The circle is fitted in closed form from the perpendicular bisectors of the
two chords. Collinear or coincident points have no fitted circle; callers get
``None`` and treat the entity as the straight segment start->end.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from lpcad_engine.geometry import nearest_point_on_polyline
from lpcad_engine.intersect2d import cross, distance, dot, sub

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
TAU = 2.0 * math.pi
ANGLE_EPS = 1e-7


@dataclass(frozen=True)
class CircularArcGeometry:
    center: Point
    radius: float
    start_angle_rad: float
    through_angle_rad: float
    end_angle_rad: float
    sweep_positive: bool
    sweep_radians: float
    large_arc_flag: int
    sweep_flag: int


def normalize_radians(radians: float) -> float:
    normalized = math.fmod(radians, TAU)
    if normalized < 0.0:
        normalized += TAU
    # fmod of a tiny negative value can round back up to exactly TAU
    return 0.0 if normalized >= TAU else normalized


def positive_angle_delta(start: float, end: float) -> float:
    """Counter-clockwise (increasing angle) travel from ``start`` to ``end``."""
    delta = normalize_radians(end) - normalize_radians(start)
    return delta if delta >= 0.0 else delta + TAU


def circular_arc_geometry_from_three_points(
    start: Point,
    through: Point,
    end: Point,
    epsilon: float = 1e-6,
) -> Optional[CircularArcGeometry]:
    if distance(start, through) <= epsilon or distance(start, end) <= epsilon or distance(through, end) <= epsilon:
        return None

    # Work relative to ``start`` so large coordinates keep their precision.
    b = sub(through, start)
    c = sub(end, start)
    d1 = b
    d2 = sub(c, b)
    det = cross(d1, d2)
    if abs(2.0 * det) <= epsilon:
        logger.debug("arc points are collinear: %s %s %s", start, through, end)
        return None

    # Bisector of start->through: dot(x, d1) = |b|^2 / 2
    # Bisector of through->end:   dot(x, d2) = (|c|^2 - |b|^2) / 2
    r1 = 0.5 * dot(b, b)
    r2 = 0.5 * (dot(c, c) - dot(b, b))
    local_x = (r1 * d2[1] - r2 * d1[1]) / det
    local_y = (d1[0] * r2 - d2[0] * r1) / det
    if not (math.isfinite(local_x) and math.isfinite(local_y)):
        return None

    center = (start[0] + local_x, start[1] + local_y)
    radius = distance(center, start)
    if not math.isfinite(radius) or radius <= epsilon:
        return None

    start_angle = normalize_radians(math.atan2(start[1] - center[1], start[0] - center[0]))
    through_angle = normalize_radians(math.atan2(through[1] - center[1], through[0] - center[0]))
    end_angle = normalize_radians(math.atan2(end[1] - center[1], end[0] - center[0]))

    ccw_span = positive_angle_delta(start_angle, end_angle)
    ccw_through = positive_angle_delta(start_angle, through_angle)
    if ccw_span <= ANGLE_EPS or ccw_span >= TAU - ANGLE_EPS:
        return None

    sweep_positive = ccw_through <= ccw_span + ANGLE_EPS
    sweep_radians = ccw_span if sweep_positive else TAU - ccw_span
    if sweep_radians <= ANGLE_EPS or sweep_radians >= TAU - ANGLE_EPS:
        return None

    return CircularArcGeometry(
        center=center,
        radius=radius,
        start_angle_rad=start_angle,
        through_angle_rad=through_angle,
        end_angle_rad=end_angle,
        sweep_positive=sweep_positive,
        sweep_radians=sweep_radians,
        large_arc_flag=1 if sweep_radians > math.pi else 0,
        sweep_flag=1 if sweep_positive else 0,
    )


def _fmt(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def circular_arc_path_from_three_points(start: Point, through: Point, end: Point) -> Optional[str]:
    """SVG path data for the arc, or ``None`` when no circle fits."""
    arc = circular_arc_geometry_from_three_points(start, through, end)
    if arc is None:
        return None
    r = _fmt(arc.radius)
    return (
        f"M {_fmt(start[0])} {_fmt(start[1])} "
        f"A {r} {r} 0 {arc.large_arc_flag} {arc.sweep_flag} {_fmt(end[0])} {_fmt(end[1])}"
    )


def sample_circular_arc_polyline(start: Point, through: Point, end: Point, segments: int = 32) -> np.ndarray:
    """Sample the fitted arc into ``segments + 1`` points from start to end.

    Degenerate input samples as the straight segment ``[start, end]``.
    """
    arc = circular_arc_geometry_from_three_points(start, through, end)
    if arc is None:
        return np.asarray([start, end], dtype=float)
    total = max(2, int(math.floor(segments)))
    direction = 1.0 if arc.sweep_positive else -1.0
    angles = arc.start_angle_rad + direction * arc.sweep_radians * np.linspace(0.0, 1.0, total + 1)
    cx, cy = arc.center
    pts = np.column_stack((cx + arc.radius * np.cos(angles), cy + arc.radius * np.sin(angles)))
    pts[0] = start
    pts[-1] = end
    return pts


def nearest_point_on_circular_arc(
    point: Point,
    start: Point,
    through: Point,
    end: Point,
    samples: int = 96,
) -> Point:
    polyline = sample_circular_arc_polyline(start, through, end, samples)
    return nearest_point_on_polyline(point, polyline)[0]


def distance_to_circular_arc(
    point: Point,
    start: Point,
    through: Point,
    end: Point,
    samples: int = 96,
) -> float:
    polyline = sample_circular_arc_polyline(start, through, end, samples)
    return nearest_point_on_polyline(point, polyline)[1]


__all__ = [
    "CircularArcGeometry",
    "circular_arc_geometry_from_three_points",
    "circular_arc_path_from_three_points",
    "distance_to_circular_arc",
    "nearest_point_on_circular_arc",
    "normalize_radians",
    "positive_angle_delta",
    "sample_circular_arc_polyline",
]
