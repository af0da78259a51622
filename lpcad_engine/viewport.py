"""Document/screen mapping for the drafting canvas.

Document space is the drawing's own coordinate system; screen space is
viewport pixels after pan and zoom. Every conversion between pointer device
coordinates and document coordinates goes through this module.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from PySide6.QtCore import QPointF

Point = Tuple[float, float]


@dataclass
class ViewState:
    zoom: float = 1.0
    pan: Point = field(default_factory=lambda: (0.0, 0.0))


def doc_to_screen(point: Point, view: ViewState) -> Point:
    px, py = view.pan
    return (point[0] * view.zoom + px, point[1] * view.zoom + py)


def screen_to_doc(point: Point, view: ViewState) -> Point:
    # zoom must be positive and finite; callers validate it when the view is built
    px, py = view.pan
    return ((point[0] - px) / view.zoom, (point[1] - py) / view.zoom)


def _as_point(value) -> Point:
    if hasattr(value, "x") and callable(value.x):
        return (float(value.x()), float(value.y()))
    return (float(value[0]), float(value[1]))


def _client_position(event) -> Point:
    global_position = getattr(event, "globalPosition", None)
    if callable(global_position):
        return _as_point(global_position())
    return _as_point(event)


def _rect_top_left(rect) -> Point:
    left = getattr(rect, "left", None)
    if callable(left):
        return (float(rect.left()), float(rect.top()))
    return (float(rect[0]), float(rect[1]))


def event_to_screen_point(event, origin_rect) -> Point:
    """Return the pointer position relative to the canvas origin.

    ``event`` is a Qt pointer event (anything exposing ``globalPosition()``)
    or a plain ``(x, y)`` client position. ``origin_rect`` is the canvas
    rectangle in the same coordinates, as a ``QRect``/``QRectF`` or a
    ``(left, top, ...)`` tuple.
    """
    cx, cy = _client_position(event)
    left, top = _rect_top_left(origin_rect)
    return (cx - left, cy - top)


def zoom_about(
    view: ViewState,
    factor: float,
    pivot_screen: Point,
    *,
    min_zoom: float = 0.1,
    max_zoom: float = 20.0,
) -> ViewState:
    """Return a view zoomed by ``factor`` keeping ``pivot_screen`` fixed."""
    target = max(min_zoom, min(max_zoom, view.zoom * factor))
    if abs(target - view.zoom) <= 1e-12:
        return ViewState(zoom=view.zoom, pan=(view.pan[0], view.pan[1]))
    pivot_doc = screen_to_doc(pivot_screen, view)
    pan = (pivot_screen[0] - pivot_doc[0] * target, pivot_screen[1] - pivot_doc[1] * target)
    return ViewState(zoom=target, pan=pan)


def to_qpointf(point: Point) -> QPointF:
    return QPointF(float(point[0]), float(point[1]))


def document_point_from_event(event, origin_rect, view: ViewState) -> Point:
    """Localize a pointer event and map it into document space."""
    return screen_to_doc(event_to_screen_point(event, origin_rect), view)


__all__ = [
    "Point",
    "ViewState",
    "doc_to_screen",
    "document_point_from_event",
    "event_to_screen_point",
    "screen_to_doc",
    "to_qpointf",
    "zoom_about",
]
