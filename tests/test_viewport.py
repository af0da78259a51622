import random

import pytest
from PySide6.QtCore import QPointF, QRect, QRectF

from lpcad_engine.viewport import (
    ViewState,
    doc_to_screen,
    document_point_from_event,
    event_to_screen_point,
    screen_to_doc,
    to_qpointf,
    zoom_about,
)


class _PointerEvent:
    def __init__(self, x, y):
        self._pos = QPointF(x, y)

    def globalPosition(self):
        return self._pos


def _close(actual, expected, eps=1e-9):
    assert abs(actual[0] - expected[0]) <= eps
    assert abs(actual[1] - expected[1]) <= eps


VIEW = ViewState(zoom=2.5, pan=(120.0, -40.0))


def test_doc_to_screen_applies_zoom_then_pan():
    _close(doc_to_screen((10.0, 20.0), VIEW), (145.0, 10.0))


def test_screen_to_doc_inverts_the_mapping():
    _close(screen_to_doc((145.0, 10.0), VIEW), (10.0, 20.0))


def test_roundtrip_for_random_points_and_zooms():
    rng = random.Random(7)
    for _ in range(200):
        view = ViewState(zoom=rng.uniform(0.1, 20.0), pan=(rng.uniform(-500, 500), rng.uniform(-500, 500)))
        point = (rng.uniform(-5000, 5000), rng.uniform(-5000, 5000))
        back = screen_to_doc(doc_to_screen(point, view), view)
        assert back[0] == pytest.approx(point[0], abs=1e-9)
        assert back[1] == pytest.approx(point[1], abs=1e-9)


def test_event_position_is_relative_to_canvas_origin():
    event = _PointerEvent(310.5, 95.0)
    _close(event_to_screen_point(event, QRectF(300.0, 80.0, 640.0, 480.0)), (10.5, 15.0))
    _close(event_to_screen_point(event, QRect(300, 80, 640, 480)), (10.5, 15.0))


def test_event_localization_accepts_plain_tuples():
    _close(event_to_screen_point((50.0, 60.0), (20.0, 25.0, 100.0, 100.0)), (30.0, 35.0))


def test_document_point_from_event():
    event = _PointerEvent(345.0, 90.0)
    _close(document_point_from_event(event, (200.0, 80.0), VIEW), (10.0, 20.0))


def test_zoom_about_keeps_pivot_fixed():
    pivot = (200.0, 150.0)
    before = screen_to_doc(pivot, VIEW)
    zoomed = zoom_about(VIEW, 1.2, pivot)
    assert zoomed.zoom == pytest.approx(3.0)
    _close(screen_to_doc(pivot, zoomed), before)


def test_zoom_about_clamps_to_limits():
    zoomed = zoom_about(ViewState(zoom=19.0), 4.0, (0.0, 0.0), max_zoom=20.0)
    assert zoomed.zoom == pytest.approx(20.0)


def test_to_qpointf_maps_screen_points_for_painting():
    painted = to_qpointf(doc_to_screen((10.0, 20.0), VIEW))
    assert isinstance(painted, QPointF)
    assert (painted.x(), painted.y()) == pytest.approx((145.0, 10.0))
    # a QPointF position is accepted back as a client position
    _close(event_to_screen_point(painted, (100.0, 0.0)), (45.0, 10.0))
