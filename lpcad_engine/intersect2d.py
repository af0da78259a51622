"""2D segment helpers: projection, distance and intersection."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import math

Point = Tuple[float, float]
EPS = 1e-9


def dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross(a: Point, b: Point) -> float:
    return a[0] * b[1] - a[1] * b[0]


def sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def add(a: Point, b: Point) -> Point:
    return (a[0] + b[0], a[1] + b[1])


def mul(a: Point, s: float) -> Point:
    return (a[0] * s, a[1] * s)


def norm(a: Point) -> float:
    return math.hypot(a[0], a[1])


def distance(a: Point, b: Point) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def project_point_to_segment(p: Point, a: Point, b: Point) -> Tuple[Point, float]:
    """Return the closest point on segment ``a``-``b`` and its clamped parameter."""
    ab = sub(b, a)
    ab2 = dot(ab, ab)
    if ab2 < EPS * EPS:
        return (a[0], a[1]), 0.0
    t = clamp(dot(sub(p, a), ab) / ab2, 0.0, 1.0)
    return add(a, mul(ab, t)), t


def project_point_onto_segment(p: Point, a: Point, b: Point) -> Point:
    return project_point_to_segment(p, a, b)[0]


def distance_to_segment(p: Point, a: Point, b: Point) -> float:
    return distance(p, project_point_onto_segment(p, a, b))


def line_segment_intersection(a1: Point, a2: Point, b1: Point, b2: Point) -> Optional[Point]:
    """Intersection of two closed segments, or ``None``.

    Parallel and coincident segments yield ``None``; so do lines that cross
    outside either segment.
    """
    r = sub(a2, a1)
    s = sub(b2, b1)
    den = cross(r, s)
    # relative to segment lengths so tiny segments are not taken as parallel
    if abs(den) <= EPS * norm(r) * norm(s):
        return None
    qp = sub(b1, a1)
    t = cross(qp, s) / den
    u = cross(qp, r) / den
    if -EPS <= t <= 1 + EPS and -EPS <= u <= 1 + EPS:
        return (a1[0] + t * r[0], a1[1] + t * r[1])
    return None


def polyline_intersections(poly_a: Sequence[Point], poly_b: Sequence[Point]) -> List[Point]:
    hits: List[Point] = []
    for i in range(1, len(poly_a)):
        for j in range(1, len(poly_b)):
            hit = line_segment_intersection(poly_a[i - 1], poly_a[i], poly_b[j - 1], poly_b[j])
            if hit is not None:
                hits.append(hit)
    return hits

