"""Geometry and selection engine for the LP drafting canvas."""

from .annotation_layout import (
    DESIGN_SCALE_FACTORS,
    ScaleState,
    annotation_scale_factor,
    dimension_text_label,
    general_notes_box_size,
    legend_box_size,
    split_text_into_lines,
    text_block_size,
)
from .circular_arc import (
    CircularArcGeometry,
    circular_arc_geometry_from_three_points,
    circular_arc_path_from_three_points,
    distance_to_circular_arc,
    nearest_point_on_circular_arc,
    sample_circular_arc_polyline,
)
from .config import EngineConfig, get_engine_config, load_engine_config, set_engine_config
from .edit_ops import move_selection_by_delta, move_selections_by_delta
from .entities import (
    Arc,
    Arrow,
    Curve,
    DimensionText,
    Drawing,
    LegendEntry,
    LegendPlacement,
    Line,
    Mark,
    NotePlacement,
    Selection,
    SelectionKind,
    Symbol,
    Text,
    find_entity,
    same_selection,
    selection_in_list,
    selections_key_set,
    sequence_for_kind,
)
from .geometry import (
    angle_degrees,
    clamp,
    distance,
    distance_to_quadratic,
    nearest_point_on_polyline,
    nearest_point_on_quadratic,
    quadratic_control_point_for_through,
    quadratic_point,
    sample_quadratic_polyline,
    snap_angle_degrees,
)
from .hit_test import HitTestContext, hit_test
from .intersect2d import distance_to_segment, line_segment_intersection, project_point_onto_segment
from .lengths import (
    arc_length_from_three_points,
    curve_length_from_through,
    polyline_length,
    quadratic_length_adaptive,
)
from .snapping import SnapResolution, apply_line_angle_constraint, resolve_snap_point
from .viewport import ViewState, doc_to_screen, event_to_screen_point, screen_to_doc, to_qpointf, zoom_about
from .z_order import (
    can_move_selection_to_z_edge,
    can_move_selections_by_z_step,
    move_selection_to_z_edge,
    move_selections_by_z_step,
)

__all__ = [
    "Arc",
    "Arrow",
    "CircularArcGeometry",
    "Curve",
    "DESIGN_SCALE_FACTORS",
    "DimensionText",
    "Drawing",
    "EngineConfig",
    "HitTestContext",
    "LegendEntry",
    "LegendPlacement",
    "Line",
    "Mark",
    "NotePlacement",
    "ScaleState",
    "Selection",
    "SelectionKind",
    "SnapResolution",
    "Symbol",
    "Text",
    "ViewState",
    "angle_degrees",
    "annotation_scale_factor",
    "apply_line_angle_constraint",
    "arc_length_from_three_points",
    "can_move_selection_to_z_edge",
    "can_move_selections_by_z_step",
    "circular_arc_geometry_from_three_points",
    "circular_arc_path_from_three_points",
    "clamp",
    "curve_length_from_through",
    "dimension_text_label",
    "distance",
    "distance_to_circular_arc",
    "distance_to_quadratic",
    "distance_to_segment",
    "doc_to_screen",
    "event_to_screen_point",
    "find_entity",
    "general_notes_box_size",
    "get_engine_config",
    "hit_test",
    "legend_box_size",
    "line_segment_intersection",
    "load_engine_config",
    "move_selection_by_delta",
    "move_selection_to_z_edge",
    "move_selections_by_delta",
    "move_selections_by_z_step",
    "nearest_point_on_circular_arc",
    "nearest_point_on_polyline",
    "nearest_point_on_quadratic",
    "polyline_length",
    "project_point_onto_segment",
    "quadratic_control_point_for_through",
    "quadratic_length_adaptive",
    "quadratic_point",
    "resolve_snap_point",
    "same_selection",
    "sample_circular_arc_polyline",
    "sample_quadratic_polyline",
    "screen_to_doc",
    "selection_in_list",
    "selections_key_set",
    "sequence_for_kind",
    "set_engine_config",
    "snap_angle_degrees",
    "split_text_into_lines",
    "text_block_size",
    "to_qpointf",
    "zoom_about",
]
