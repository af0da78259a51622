"""Resolve a pointer click to at most one drawing entity.

Point and area annotations are easy to miss visually, so they are tested
first, in a fixed category order, and the first hit wins (newest entity first
within a category). Only when none of them is hit do the thin conductors
compete: arcs, curves, arrows and lines are ranked by distance, and
candidates whose distances fall within the tie tolerance are ranked by kind
(curved before arrows before lines).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from lpcad_engine.annotation_layout import (
    ScaleState,
    dimension_text_label,
    general_notes_box_size,
    legend_box_size,
    text_block_size,
)
from lpcad_engine.circular_arc import distance_to_circular_arc
from lpcad_engine.config import EngineConfig, get_engine_config
from lpcad_engine.entities import (
    DimensionText,
    Drawing,
    LegendPlacement,
    NotePlacement,
    Selection,
    SelectionKind,
)
from lpcad_engine.geometry import distance_to_quadratic, quadratic_control_point_for_through
from lpcad_engine.intersect2d import distance, distance_to_segment
from lpcad_engine.viewport import ViewState, doc_to_screen

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Size = Tuple[float, float]

CURVED_PRIORITY = 0
ARROW_PRIORITY = 1
LINE_PRIORITY = 2


@dataclass
class HitTestContext:
    view: ViewState
    annotation_scale: float = 1.0
    linear_tie_tolerance_px: Optional[float] = None              # defaults to the engine config
    scale_state: Optional[ScaleState] = None                    # real-world units for dimension labels
    legend_box_size: Optional[Callable[[LegendPlacement], Size]] = None   # screen px
    notes_box_size: Optional[Callable[[NotePlacement], Size]] = None      # screen px
    dimension_label: Optional[Callable[[DimensionText], str]] = None


def _inside_box(point: Point, left: float, top: float, width: float, height: float, tol: float) -> bool:
    x, y = point
    return left - tol <= x <= left + width + tol and top - tol <= y <= top + height + tol


class _LinearCandidates:
    """Track the best conductor hit under the distance/priority tie-break."""

    def __init__(self, tolerance: float, tie_tolerance: float) -> None:
        self.tolerance = tolerance
        self.tie_tolerance = tie_tolerance
        self.best: Optional[Selection] = None
        self.best_distance = float("inf")
        self.best_priority = float("inf")

    def consider(self, candidate: Selection, dist: float, priority: int) -> None:
        if dist > self.tolerance:
            return
        if dist < self.best_distance - self.tie_tolerance:
            self._take(candidate, dist, priority)
            return
        if abs(dist - self.best_distance) <= self.tie_tolerance and priority < self.best_priority:
            self._take(candidate, dist, priority)

    def _take(self, candidate: Selection, dist: float, priority: int) -> None:
        self.best = candidate
        self.best_distance = dist
        self.best_priority = priority


def hit_test(
    point: Point,
    drawing: Drawing,
    context: HitTestContext,
    config: Optional[EngineConfig] = None,
) -> Optional[Selection]:
    config = config or get_engine_config()
    view = context.view
    scale = float(context.annotation_scale)
    tolerance_px = config.hit_tolerance_px * scale
    tolerance_doc = tolerance_px / view.zoom
    tie_px = config.linear_tie_tolerance_px if context.linear_tie_tolerance_px is None else context.linear_tie_tolerance_px
    tie_doc = float(tie_px) / view.zoom
    point_screen = doc_to_screen(point, view)

    def found(kind: SelectionKind, entity_id: str) -> Selection:
        selection = Selection(kind, entity_id)
        logger.debug("hit %s at %s", selection.key, point)
        return selection

    for symbol in reversed(drawing.symbols):
        if distance(point, symbol.position) <= tolerance_doc:
            return found(SelectionKind.SYMBOL, symbol.id)

    for text in reversed(drawing.texts):
        width, height = text_block_size(text.text, scale)
        left, top = doc_to_screen(text.position, view)
        if _inside_box(point_screen, left, top, width, height, tolerance_px):
            return found(SelectionKind.TEXT, text.id)

    label_for = context.dimension_label or (lambda entry: dimension_text_label(entry, context.scale_state))
    for dimension_text in reversed(drawing.dimension_texts):
        width, height = text_block_size(label_for(dimension_text), scale)
        cx, cy = doc_to_screen(dimension_text.position, view)
        if _inside_box(point_screen, cx - width / 2.0, cy - height / 2.0, width, height, tolerance_px):
            return found(SelectionKind.DIMENSION_TEXT, dimension_text.id)

    legend_size = context.legend_box_size or (lambda placement: legend_box_size(placement.entries, scale))
    for placement in reversed(drawing.legend_placements):
        width, height = legend_size(placement)
        left, top = doc_to_screen(placement.position, view)
        if _inside_box(point_screen, left, top, width, height, tolerance_px):
            return found(SelectionKind.LEGEND, placement.id)

    notes_size = context.notes_box_size or (lambda placement: general_notes_box_size(drawing.general_notes, scale))
    for placement in reversed(drawing.note_placements):
        width, height = notes_size(placement)
        left, top = doc_to_screen(placement.position, view)
        if _inside_box(point_screen, left, top, width, height, tolerance_px):
            return found(SelectionKind.GENERAL_NOTE, placement.id)

    for mark in reversed(drawing.marks):
        if distance(point, mark.position) <= tolerance_doc:
            return found(SelectionKind.MARK, mark.id)

    candidates = _LinearCandidates(tolerance_doc, tie_doc)
    for arc in reversed(drawing.arcs):
        d = distance_to_circular_arc(point, arc.start, arc.through, arc.end, config.arc_hit_samples)
        candidates.consider(Selection(SelectionKind.ARC, arc.id), d, CURVED_PRIORITY)
    for curve in reversed(drawing.curves):
        control = quadratic_control_point_for_through(curve.start, curve.through, curve.end)
        d = distance_to_quadratic(point, curve.start, control, curve.end, config.curve_hit_samples)
        candidates.consider(Selection(SelectionKind.CURVE, curve.id), d, CURVED_PRIORITY)
    for arrow in reversed(drawing.arrows):
        d = distance_to_segment(point, arrow.tail, arrow.head)
        candidates.consider(Selection(SelectionKind.ARROW, arrow.id), d, ARROW_PRIORITY)
    for line in reversed(drawing.lines):
        d = distance_to_segment(point, line.start, line.end)
        candidates.consider(Selection(SelectionKind.LINE, line.id), d, LINE_PRIORITY)

    if candidates.best is None:
        logger.debug("no hit at %s", point)
        return None
    logger.debug("hit %s at %s (distance %.4g)", candidates.best.key, point, candidates.best_distance)
    return candidates.best


__all__ = ["HitTestContext", "hit_test"]
