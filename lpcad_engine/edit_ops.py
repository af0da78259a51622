"""Drag edits for selected drawing entities (translate by a document delta)."""
from __future__ import annotations

import logging
from typing import Iterable, Set, Tuple

from lpcad_engine.entities import Drawing, Selection, SelectionKind, find_entity

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def _shift(point: Point, delta: Point) -> Point:
    return (point[0] + delta[0], point[1] + delta[1])


def move_selection_by_delta(drawing: Drawing, selection: Selection, delta: Point) -> bool:
    """Translate every point of the selected entity by ``delta`` in place.

    Returns ``False`` for a stale selection. Dimension texts move their label
    only; the measured span stays put.
    """
    entity = find_entity(drawing, selection)
    if entity is None:
        return False
    kind = selection.kind
    if kind is SelectionKind.LINE:
        entity.start = _shift(entity.start, delta)
        entity.end = _shift(entity.end, delta)
    elif kind is SelectionKind.ARC or kind is SelectionKind.CURVE:
        entity.start = _shift(entity.start, delta)
        entity.through = _shift(entity.through, delta)
        entity.end = _shift(entity.end, delta)
    elif kind is SelectionKind.ARROW:
        entity.tail = _shift(entity.tail, delta)
        entity.head = _shift(entity.head, delta)
    elif kind in (
        SelectionKind.SYMBOL,
        SelectionKind.TEXT,
        SelectionKind.DIMENSION_TEXT,
        SelectionKind.MARK,
        SelectionKind.LEGEND,
        SelectionKind.GENERAL_NOTE,
    ):
        entity.position = _shift(entity.position, delta)
    else:
        raise ValueError(f"Unhandled selection kind '{kind}'")
    return True


def move_selections_by_delta(drawing: Drawing, selections: Iterable[Selection], delta: Point) -> int:
    """Translate each distinct selection once; returns how many entities moved."""
    seen: Set[str] = set()
    moved = 0
    for selection in selections:
        if selection.key in seen:
            continue
        seen.add(selection.key)
        if move_selection_by_delta(drawing, selection, delta):
            moved += 1
    if moved:
        logger.debug("moved %d entities by %s", moved, delta)
    return moved


__all__ = ["move_selection_by_delta", "move_selections_by_delta"]
