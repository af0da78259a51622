# lpcad_engine/annotation_layout.py
"""
Approximate on-screen sizes of text annotations, dimension labels, legends and
general-notes boxes. Hit testing uses these to build the clickable boxes; all
sizes are screen pixels at zoom 1 multiplied by the annotation scale.

Public API (minimal):
- DESIGN_SCALE_FACTORS, annotation_scale_factor(name)
- split_text_into_lines(text), text_block_size(text, scale)
- ScaleState, dimension_text_label(entry, scale_state)
- legend_box_size(entries, scale), general_notes_box_size(notes, scale)
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Sequence, Tuple

from lpcad_engine.entities import DimensionText, LegendEntry
from lpcad_engine.intersect2d import distance

Size = Tuple[float, float]
DisplayUnits = Literal["ft-in", "decimal-ft", "m"]

# ---- Scale -----------------------------------------------------------------

DESIGN_SCALE_FACTORS: Dict[str, float] = {
    "small": 1.0,
    "medium": 1.5,
    "large": 2.0,
}

TEXT_LINE_HEIGHT_PX = 16.0
TEXT_CHAR_WIDTH_PX = 7.4
TEXT_MIN_WIDTH_PX = 24.0

GENERAL_NOTES_TITLE = "General Notes"
MAX_DIMENSION_OVERRIDE_LENGTH = 24


def annotation_scale_factor(design_scale: Optional[str]) -> float:
    if not design_scale:
        return DESIGN_SCALE_FACTORS["small"]
    return DESIGN_SCALE_FACTORS.get(design_scale, DESIGN_SCALE_FACTORS["small"])

# ---- Text ------------------------------------------------------------------

def split_text_into_lines(text: str) -> List[str]:
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.split("\n")


def text_line_height(scale: float) -> float:
    return TEXT_LINE_HEIGHT_PX * scale


def approximate_text_width(text: str, scale: float) -> float:
    visible = len(text.strip())
    min_width = TEXT_MIN_WIDTH_PX * scale
    if visible == 0:
        return min_width
    return max(min_width, visible * TEXT_CHAR_WIDTH_PX * scale)


def text_block_size(text: str, scale: float) -> Size:
    """Width of the widest line and the height of all lines."""
    lines = split_text_into_lines(text)
    width = max(approximate_text_width(line, scale) for line in lines)
    height = max(1, len(lines)) * text_line_height(scale)
    return (width, height)

# ---- Dimension labels --------------------------------------------------------

@dataclass
class ScaleState:
    real_units_per_point: Optional[float] = None
    display_units: Optional[DisplayUnits] = None

    @property
    def is_set(self) -> bool:
        return bool(self.real_units_per_point) and self.display_units is not None


def format_distance(value: float, units: DisplayUnits) -> str:
    if units == "decimal-ft":
        return f"{value:.2f} ft"
    if units == "m":
        return f"{value:.3f} m"
    total_inches = max(0, int(math.floor(value * 12.0 + 0.5)))
    feet, inches = divmod(total_inches, 12)
    return f"{feet}' {inches}\""


def normalize_override_text(value: Optional[str]) -> Optional[str]:
    normalized = (value or "").strip()[:MAX_DIMENSION_OVERRIDE_LENGTH]
    return normalized or None


def dimension_text_label(entry: DimensionText, scale_state: Optional[ScaleState]) -> str:
    override = normalize_override_text(entry.override_text)
    if override:
        return override
    if scale_state is None or not scale_state.is_set:
        return "unscaled"
    length_pt = distance(entry.start, entry.end)
    return format_distance(length_pt * float(scale_state.real_units_per_point), scale_state.display_units)

# ---- Legend and general notes -------------------------------------------------

def _legend_line_width(text: str, scale: float) -> float:
    return max(64.0 * scale, len(text) * 6.7 * scale)


def legend_box_size(entries: Sequence[LegendEntry], scale: float) -> Size:
    padding_x = 8.0 * scale
    padding_y = 8.0 * scale
    title_height = 18.0 * scale
    row_height = 20.0 * scale
    text_offset_x = 30.0 * scale

    descriptions = [entry.label for entry in entries] or ["No components used yet."]
    description_width = max(_legend_line_width(line, scale) for line in ["Description", *descriptions])
    if entries:
        count_width = max(_legend_line_width(line, scale) for line in ["Count", *(e.count_label for e in entries)])
    else:
        count_width = _legend_line_width("", scale)

    width = (
        padding_x * 2
        + text_offset_x
        + description_width
        + 12.0 * scale
        + max(42.0 * scale, count_width)
        + 6.0 * scale
    )
    rows = len(entries) + 1 if entries else 1
    height = padding_y * 2 + title_height + rows * row_height
    return (max(180.0 * scale, width), height)


def general_notes_display_lines(notes: Sequence[str]) -> List[str]:
    if not notes:
        return ["No notes added."]
    return [f"{index + 1}. {note}" for index, note in enumerate(notes)]


def general_notes_box_size(notes: Sequence[str], scale: float) -> Size:
    lines = general_notes_display_lines(notes)
    widest = max(approximate_text_width(line, scale) for line in [GENERAL_NOTES_TITLE, *lines])
    width = max(220.0 * scale, 8.0 * scale * 2 + widest + 12.0 * scale)
    height = 8.0 * scale * 2 + 18.0 * scale + len(lines) * 20.0 * scale
    return (width, height)
