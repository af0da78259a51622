"""Geometry helpers for the drafting canvas.

Curves are stored by a through-point (a point the curve passes at its
midpoint parameter) rather than a Bézier control point; the helpers here
derive the control point, evaluate the quadratic and approximate proximity by
sampling it into a polyline. Selection tolerances are a few screen pixels, so
a sampled polyline is accurate enough and keeps hit testing well under a
frame for drawings with hundreds of entities.
"""
from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from lpcad_engine.intersect2d import EPS, clamp, distance

Point = Tuple[float, float]

__all__ = [
    "angle_degrees",
    "clamp",
    "distance",
    "nearest_point_on_polyline",
    "nearest_point_on_quadratic",
    "distance_to_quadratic",
    "quadratic_control_point_for_through",
    "quadratic_point",
    "sample_quadratic_polyline",
    "snap_angle_degrees",
]


def angle_degrees(origin: Sequence[float], point: Sequence[float]) -> float:
    """Direction from ``origin`` to ``point`` in degrees, in ``[0, 360)``."""
    raw = math.degrees(math.atan2(float(point[1]) - float(origin[1]), float(point[0]) - float(origin[0])))
    return (raw + 360.0) % 360.0


def snap_angle_degrees(angle: float, increment_deg: float) -> float:
    """Snap ``angle`` to the nearest multiple of ``increment_deg``.

    Exact halves round up (toward the larger multiple). A non-positive
    increment leaves the angle unsnapped.
    """
    if increment_deg <= 0.0:
        return float(angle) % 360.0
    snapped = math.floor(float(angle) / increment_deg + 0.5) * increment_deg
    return (snapped + 360.0) % 360.0


def quadratic_control_point_for_through(start: Point, through: Point, end: Point) -> Point:
    """Control point that makes the quadratic pass ``through`` at ``t = 0.5``."""
    return (
        2.0 * through[0] - 0.5 * start[0] - 0.5 * end[0],
        2.0 * through[1] - 0.5 * start[1] - 0.5 * end[1],
    )


def quadratic_point(start: Point, control: Point, end: Point, t: float) -> Point:
    one_minus_t = 1.0 - t
    a = one_minus_t * one_minus_t
    b = 2.0 * one_minus_t * t
    c = t * t
    return (
        a * start[0] + b * control[0] + c * end[0],
        a * start[1] + b * control[1] + c * end[1],
    )


def sample_quadratic_polyline(start: Point, control: Point, end: Point, segments: int = 24) -> np.ndarray:
    """Sample the quadratic into ``segments + 1`` points (at least 2)."""
    total = max(1, int(math.floor(segments)))
    t = np.linspace(0.0, 1.0, total + 1)[:, None]
    one_minus_t = 1.0 - t
    p0, p1, p2 = (np.asarray(p, dtype=float) for p in (start, control, end))
    return one_minus_t * one_minus_t * p0 + 2.0 * one_minus_t * t * p1 + t * t * p2


def nearest_point_on_polyline(point: Sequence[float], polyline: np.ndarray) -> Tuple[Point, float]:
    """Closest point on ``polyline`` to ``point`` and the distance to it.

    Ties resolve to the earliest segment.
    """
    px, py = float(point[0]), float(point[1])
    pts = np.asarray(polyline, dtype=float)
    if pts.shape[0] == 0:
        return (px, py), 0.0
    if pts.shape[0] == 1:
        only = (float(pts[0, 0]), float(pts[0, 1]))
        return only, distance((px, py), only)
    seg_vec = pts[1:] - pts[:-1]
    seg_len_sq = np.sum(seg_vec ** 2, axis=1)
    to_point = np.array([px, py]) - pts[:-1]
    usable = seg_len_sq > EPS * EPS
    safe_len_sq = np.where(usable, seg_len_sq, 1.0)
    t = np.where(usable, np.sum(to_point * seg_vec, axis=1) / safe_len_sq, 0.0)
    t = np.clip(t, 0.0, 1.0)
    projection = pts[:-1] + seg_vec * t[:, None]
    dist = np.hypot(px - projection[:, 0], py - projection[:, 1])
    best = int(np.argmin(dist))
    return (float(projection[best, 0]), float(projection[best, 1])), float(dist[best])


def nearest_point_on_quadratic(
    point: Point,
    start: Point,
    control: Point,
    end: Point,
    samples: int = 48,
) -> Point:
    polyline = sample_quadratic_polyline(start, control, end, samples)
    return nearest_point_on_polyline(point, polyline)[0]


def distance_to_quadratic(
    point: Point,
    start: Point,
    control: Point,
    end: Point,
    samples: int = 48,
) -> float:
    polyline = sample_quadratic_polyline(start, control, end, samples)
    return nearest_point_on_polyline(point, polyline)[1]
