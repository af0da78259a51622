"""Bring-forward / send-backward edits on the per-kind paint-order lists.

A step moves every selected entry that has an unselected neighbour on the
requested side by exactly one slot. Swap decisions are taken from the order
before the step, so selected entries never leapfrog each other and a block of
selected entries keeps its internal order.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Literal, MutableSequence, Sequence, Set

from lpcad_engine.entities import Drawing, Selection, SelectionKind, sequence_for_kind

logger = logging.getLogger(__name__)

ZOrderDirection = Literal["front", "back"]


def _check_direction(direction: str) -> None:
    if direction not in ("front", "back"):
        raise ValueError(f"Unknown z-order direction '{direction}'")


def _selected_flags(sequence: Sequence, selected_ids: Set[str]) -> List[bool]:
    return [entry.id in selected_ids for entry in sequence]


def _step_pairs(flags: Sequence[bool], direction: ZOrderDirection) -> List[int]:
    """Left indices of the adjacent pairs that swap in one step."""
    if direction == "front":
        return [i for i in range(len(flags) - 1) if flags[i] and not flags[i + 1]]
    return [i - 1 for i in range(1, len(flags)) if flags[i] and not flags[i - 1]]


def can_move_ids_by_z_step(sequence: Sequence, selected_ids: Iterable[str], direction: ZOrderDirection) -> bool:
    _check_direction(direction)
    return bool(_step_pairs(_selected_flags(sequence, set(selected_ids)), direction))


def move_ids_by_z_step(sequence: MutableSequence, selected_ids: Iterable[str], direction: ZOrderDirection) -> bool:
    _check_direction(direction)
    pairs = _step_pairs(_selected_flags(sequence, set(selected_ids)), direction)
    # pairs are disjoint: each starts at a selected entry and ends at an unselected one
    for i in pairs:
        sequence[i], sequence[i + 1] = sequence[i + 1], sequence[i]
    return bool(pairs)


def _ids_by_kind(selections: Iterable[Selection]) -> Dict[SelectionKind, Set[str]]:
    grouped: Dict[SelectionKind, Set[str]] = {}
    for selection in selections:
        grouped.setdefault(selection.kind, set()).add(selection.id)
    return grouped


def can_move_selections_by_z_step(
    drawing: Drawing,
    selections: Iterable[Selection],
    direction: ZOrderDirection,
) -> bool:
    _check_direction(direction)
    return any(
        can_move_ids_by_z_step(sequence_for_kind(drawing, kind), ids, direction)
        for kind, ids in _ids_by_kind(selections).items()
    )


def move_selections_by_z_step(
    drawing: Drawing,
    selections: Iterable[Selection],
    direction: ZOrderDirection,
) -> bool:
    _check_direction(direction)
    changed = False
    for kind, ids in _ids_by_kind(selections).items():
        if move_ids_by_z_step(sequence_for_kind(drawing, kind), ids, direction):
            logger.debug("stepped %d %s entries to the %s", len(ids), kind.value, direction)
            changed = True
    return changed


def can_move_selection_to_z_edge(
    drawing: Drawing,
    selection: Selection | None,
    direction: ZOrderDirection,
) -> bool:
    _check_direction(direction)
    if selection is None:
        return False
    sequence = sequence_for_kind(drawing, selection.kind)
    if len(sequence) < 2:
        return False
    index = next((i for i, entry in enumerate(sequence) if entry.id == selection.id), -1)
    if index < 0:
        return False
    return index < len(sequence) - 1 if direction == "front" else index > 0


def move_selection_to_z_edge(drawing: Drawing, selection: Selection, direction: ZOrderDirection) -> bool:
    """Move one entity to the top ('front') or bottom ('back') of its list."""
    if not can_move_selection_to_z_edge(drawing, selection, direction):
        return False
    sequence = sequence_for_kind(drawing, selection.kind)
    index = next(i for i, entry in enumerate(sequence) if entry.id == selection.id)
    target = sequence.pop(index)
    if direction == "front":
        sequence.append(target)
    else:
        sequence.insert(0, target)
    logger.debug("moved %s to the %s", selection.key, direction)
    return True


__all__ = [
    "ZOrderDirection",
    "can_move_ids_by_z_step",
    "can_move_selection_to_z_edge",
    "can_move_selections_by_z_step",
    "move_ids_by_z_step",
    "move_selection_to_z_edge",
    "move_selections_by_z_step",
]
