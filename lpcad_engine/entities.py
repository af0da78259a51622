"""Drawing entities, the per-kind paint-order lists and selection references.

Each entity kind lives in its own list on :class:`Drawing`; list position is
paint order (index 0 paints first, at the bottom). A :class:`Selection` names
exactly one entity by kind and id and does not own it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set, Tuple

Point = Tuple[float, float]


def _origin() -> Point:
    return (0.0, 0.0)


# ---- Linear / curved conductors -------------------------------------------

@dataclass
class Line:
    id: str = ""
    start: Point = field(default_factory=_origin)
    end: Point = field(default_factory=_origin)


@dataclass
class Arc:
    id: str = ""
    start: Point = field(default_factory=_origin)
    through: Point = field(default_factory=_origin)   # on the arc, not a control point
    end: Point = field(default_factory=_origin)


@dataclass
class Curve:
    id: str = ""
    start: Point = field(default_factory=_origin)
    through: Point = field(default_factory=_origin)   # curve point at t = 0.5
    end: Point = field(default_factory=_origin)


@dataclass
class Arrow:
    id: str = ""
    tail: Point = field(default_factory=_origin)
    head: Point = field(default_factory=_origin)


# ---- Point / area annotations ---------------------------------------------

@dataclass
class Symbol:
    id: str = ""
    position: Point = field(default_factory=_origin)
    symbol_type: str = "air_terminal"


@dataclass
class Text:
    id: str = ""
    position: Point = field(default_factory=_origin)  # top-left of the text block
    text: str = ""


@dataclass
class DimensionText:
    id: str = ""
    start: Point = field(default_factory=_origin)
    end: Point = field(default_factory=_origin)
    position: Point = field(default_factory=_origin)  # label center
    override_text: Optional[str] = None


@dataclass
class Mark:
    id: str = ""
    position: Point = field(default_factory=_origin)


@dataclass
class LegendEntry:
    label: str
    count_label: str


@dataclass
class LegendPlacement:
    id: str = ""
    position: Point = field(default_factory=_origin)  # top-left of the box
    entries: List[LegendEntry] = field(default_factory=list)


@dataclass
class NotePlacement:
    id: str = ""
    position: Point = field(default_factory=_origin)  # top-left of the box


@dataclass
class Drawing:
    lines: List[Line] = field(default_factory=list)
    arcs: List[Arc] = field(default_factory=list)
    curves: List[Curve] = field(default_factory=list)
    symbols: List[Symbol] = field(default_factory=list)
    texts: List[Text] = field(default_factory=list)
    arrows: List[Arrow] = field(default_factory=list)
    dimension_texts: List[DimensionText] = field(default_factory=list)
    marks: List[Mark] = field(default_factory=list)
    legend_placements: List[LegendPlacement] = field(default_factory=list)
    note_placements: List[NotePlacement] = field(default_factory=list)
    general_notes: List[str] = field(default_factory=list)


# ---- Selection ------------------------------------------------------------

class SelectionKind(str, Enum):
    LINE = "line"
    ARC = "arc"
    CURVE = "curve"
    ARROW = "arrow"
    SYMBOL = "symbol"
    TEXT = "text"
    DIMENSION_TEXT = "dimension_text"
    MARK = "mark"
    LEGEND = "legend"
    GENERAL_NOTE = "general_note"


@dataclass(frozen=True)
class Selection:
    kind: SelectionKind
    id: str

    def __post_init__(self) -> None:
        if isinstance(self.kind, SelectionKind):
            return
        try:
            resolved = SelectionKind(str(self.kind))
        except ValueError as exc:
            raise ValueError(f"Unknown selection kind '{self.kind}'") from exc
        object.__setattr__(self, "kind", resolved)

    @classmethod
    def of(cls, kind: str | SelectionKind, entity_id: str) -> "Selection":
        return cls(kind=kind, id=entity_id)

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.id}"


def sequence_for_kind(drawing: Drawing, kind: SelectionKind) -> list:
    """Return the paint-order list holding entities of ``kind``."""
    if kind is SelectionKind.LINE:
        return drawing.lines
    if kind is SelectionKind.ARC:
        return drawing.arcs
    if kind is SelectionKind.CURVE:
        return drawing.curves
    if kind is SelectionKind.ARROW:
        return drawing.arrows
    if kind is SelectionKind.SYMBOL:
        return drawing.symbols
    if kind is SelectionKind.TEXT:
        return drawing.texts
    if kind is SelectionKind.DIMENSION_TEXT:
        return drawing.dimension_texts
    if kind is SelectionKind.MARK:
        return drawing.marks
    if kind is SelectionKind.LEGEND:
        return drawing.legend_placements
    if kind is SelectionKind.GENERAL_NOTE:
        return drawing.note_placements
    raise ValueError(f"Unhandled selection kind '{kind}'")


def find_entity(drawing: Drawing, selection: Selection):
    """Entity referenced by ``selection``, or ``None`` when it is stale."""
    for entry in sequence_for_kind(drawing, selection.kind):
        if entry.id == selection.id:
            return entry
    return None


def selection_key_for(kind: SelectionKind, entity_id: str) -> str:
    return f"{kind.value}:{entity_id}"


def selections_key_set(selections: Iterable[Selection]) -> Set[str]:
    return {selection.key for selection in selections}


def same_selection(a: Selection, b: Selection) -> bool:
    return a.kind is b.kind and a.id == b.id


def selection_in_list(selections: Sequence[Selection], target: Selection) -> bool:
    return any(same_selection(entry, target) for entry in selections)


__all__ = [
    "Arc",
    "Arrow",
    "Curve",
    "DimensionText",
    "Drawing",
    "LegendEntry",
    "LegendPlacement",
    "Line",
    "Mark",
    "NotePlacement",
    "Selection",
    "SelectionKind",
    "Symbol",
    "Text",
    "find_entity",
    "same_selection",
    "selection_in_list",
    "selection_key_for",
    "selections_key_set",
    "sequence_for_kind",
]
