# lpcad_engine/snapping.py
"""
Object-snap helpers for drafting input: endpoints, intersections,
perpendicular feet, annotation base points, construction marks and the
nearest point on any conductor.

``resolve_snap_point`` evaluates every candidate against the raw pointer
location and returns the best one within ``10 / zoom`` document units. Kinds
with a higher priority win outright; within a priority the closer candidate
wins. ``apply_line_angle_constraint`` snaps the direction of a line being
drawn while keeping its length.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

import numpy as np

from lpcad_engine.circular_arc import nearest_point_on_circular_arc, sample_circular_arc_polyline
from lpcad_engine.config import EngineConfig, get_engine_config
from lpcad_engine.entities import Drawing, Selection, SelectionKind
from lpcad_engine.geometry import (
    angle_degrees,
    nearest_point_on_quadratic,
    quadratic_control_point_for_through,
    sample_quadratic_polyline,
    snap_angle_degrees,
)
from lpcad_engine.intersect2d import distance, polyline_intersections, project_point_onto_segment
from lpcad_engine.viewport import ViewState

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
SnapKind = Literal["endpoint", "intersection", "nearest", "perpendicular", "basepoint", "mark"]

SNAP_KIND_PRIORITY: Dict[str, int] = {
    "nearest": 0,
    "endpoint": 1,
    "basepoint": 1,
    "mark": 1,
    "intersection": 1,
    "perpendicular": 1,
}


@dataclass(frozen=True)
class SnapResolution:
    point: Point
    snapped: bool
    kind: Optional[SnapKind] = None


def _without(entries: list, kind: SelectionKind, exclude: Optional[Selection]) -> list:
    if exclude is None or exclude.kind is not kind:
        return entries
    return [entry for entry in entries if entry.id != exclude.id]


def _rows(polyline: np.ndarray) -> List[Point]:
    return [(float(x), float(y)) for x, y in polyline]


def resolve_snap_point(
    raw_point: Point,
    drawing: Drawing,
    view: ViewState,
    *,
    enabled: bool = True,
    exclude: Optional[Selection] = None,
    reference_point: Optional[Point] = None,
    config: Optional[EngineConfig] = None,
) -> SnapResolution:
    """
    Return the snapped location for ``raw_point``.

    ``exclude`` removes the entity being edited from the candidates, and
    ``reference_point`` (the fixed end of a line being drawn) enables
    perpendicular-foot candidates on lines and arrows.
    """
    px, py = float(raw_point[0]), float(raw_point[1])
    if not enabled:
        return SnapResolution((px, py), False, None)
    config = config or get_engine_config()
    tol = config.snap_tolerance_px / view.zoom
    segments = config.snap_polyline_segments
    nearest_samples = config.snap_nearest_samples

    lines = _without(drawing.lines, SelectionKind.LINE, exclude)
    arcs = _without(drawing.arcs, SelectionKind.ARC, exclude)
    curves = _without(drawing.curves, SelectionKind.CURVE, exclude)
    arrows = _without(drawing.arrows, SelectionKind.ARROW, exclude)
    symbols = _without(drawing.symbols, SelectionKind.SYMBOL, exclude)
    texts = _without(drawing.texts, SelectionKind.TEXT, exclude)
    dimension_texts = _without(drawing.dimension_texts, SelectionKind.DIMENSION_TEXT, exclude)
    marks = _without(drawing.marks, SelectionKind.MARK, exclude)

    best_point: Optional[Point] = None
    best_kind: Optional[SnapKind] = None
    best_priority = -math.inf
    best_dist = math.inf

    def consider(candidate: Point, kind: SnapKind) -> None:
        nonlocal best_point, best_kind, best_priority, best_dist
        dist = distance((px, py), candidate)
        if dist > tol:
            return
        priority = SNAP_KIND_PRIORITY[kind]
        if priority > best_priority or (priority == best_priority and dist < best_dist):
            best_point = (float(candidate[0]), float(candidate[1]))
            best_kind = kind
            best_priority = priority
            best_dist = dist

    segments_list: List[Tuple[Point, Point]] = [(line.start, line.end) for line in lines]
    arrow_segments: List[Tuple[Point, Point]] = [(arrow.tail, arrow.head) for arrow in arrows]
    for a, b in segments_list + arrow_segments:
        consider(a, "endpoint")
        consider(b, "endpoint")
        if reference_point is not None:
            consider(project_point_onto_segment(reference_point, a, b), "perpendicular")

    curved: List[Tuple[List[Point], Point]] = []
    for arc in arcs:
        consider(arc.start, "endpoint")
        consider(arc.end, "endpoint")
        polyline = _rows(sample_circular_arc_polyline(arc.start, arc.through, arc.end, segments))
        nearest = nearest_point_on_circular_arc((px, py), arc.start, arc.through, arc.end, nearest_samples)
        curved.append((polyline, nearest))
    for curve in curves:
        consider(curve.start, "endpoint")
        consider(curve.end, "endpoint")
        control = quadratic_control_point_for_through(curve.start, curve.through, curve.end)
        polyline = _rows(sample_quadratic_polyline(curve.start, control, curve.end, segments))
        nearest = nearest_point_on_quadratic((px, py), curve.start, control, curve.end, nearest_samples)
        curved.append((polyline, nearest))

    for mark in marks:
        consider(mark.position, "mark")

    straight = segments_list + arrow_segments
    for i, (a1, a2) in enumerate(straight):
        for b1, b2 in straight[i + 1:]:
            for hit in polyline_intersections((a1, a2), (b1, b2)):
                consider(hit, "intersection")
        for polyline, _ in curved:
            for hit in polyline_intersections((a1, a2), polyline):
                consider(hit, "intersection")
    for i, (poly_a, _) in enumerate(curved):
        for poly_b, _ in curved[i + 1:]:
            for hit in polyline_intersections(poly_a, poly_b):
                consider(hit, "intersection")

    for entry in [*symbols, *texts, *dimension_texts]:
        consider(entry.position, "basepoint")

    for a, b in straight:
        consider(project_point_onto_segment((px, py), a, b), "nearest")
    for _, nearest in curved:
        consider(nearest, "nearest")

    if best_point is None:
        return SnapResolution((px, py), False, None)
    logger.debug("snapped %s to %s (%s)", raw_point, best_point, best_kind)
    return SnapResolution(best_point, True, best_kind)


def apply_line_angle_constraint(
    start: Point,
    end: Point,
    increment_deg: float,
    enabled: bool = True,
) -> Point:
    """Rotate ``end`` about ``start`` onto the nearest ``increment_deg`` ray."""
    if not enabled:
        return end
    length = distance(start, end)
    if length == 0.0:
        return end
    radians = math.radians(snap_angle_degrees(angle_degrees(start, end), increment_deg))
    return (start[0] + math.cos(radians) * length, start[1] + math.sin(radians) * length)


__all__ = [
    "SNAP_KIND_PRIORITY",
    "SnapResolution",
    "apply_line_angle_constraint",
    "resolve_snap_point",
]
