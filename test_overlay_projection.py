#!/usr/bin/env python3
"""
Tests for projecting measurements onto a rendered page
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

# Use offscreen platform for headless test environments
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtGui import QGuiApplication, QImage, QPainter, QColor

from drawing.coordinates import InvalidScaleError
from drawing.drawing_overlay import (DrawableSegment, SegmentKind, MEASUREMENT_STYLE,
                                     PREVIEW_STYLE, hit_test, paint_segments, project)
from drawing.drawing_tools import DragSession, IDLE_SESSION
from models.measurement import Measurement, Point


def measurement(x1, y1, x2, y2, page=1):
    return Measurement.from_points(Point(x1, y1, page), Point(x2, y2, page))


def test_empty_page_projects_nothing():
    others = [measurement(0, 0, 10, 10, page=2)]
    drag = DragSession(Point(0, 0, 2), Point(5, 5, 2), 2, True)
    assert project(1, [], IDLE_SESSION, 1.0, None, None) == []
    assert project(1, others, drag, 1.25, 0.125, None) == []


def test_segments_scale_with_zoom():
    a = measurement(0, 0, 3, 4)
    [segment] = project(1, [a], IDLE_SESSION, 2.0, None, None)
    assert segment.kind is SegmentKind.MEASUREMENT
    assert (segment.x1, segment.y1, segment.x2, segment.y2) == (0, 0, 6, 8)
    assert segment.measurement_id == a.id
    assert segment.style == MEASUREMENT_STYLE
    assert segment.label is None


def test_hovered_measurement_gets_midpoint_label():
    a, b = measurement(0, 0, 3, 4), measurement(10, 10, 10, 20)
    segments = project(1, [a, b], IDLE_SESSION, 2.0, 0.125, a.id)

    label = segments[0].label
    assert label.text == "0.63 m"
    assert (label.x, label.y) == (3, 4)
    assert label.box == (-37, -20, 80, 20)
    assert label.text_anchor == (3, -6)
    assert segments[1].label is None


def test_uncalibrated_label_uses_pixels():
    a = measurement(0, 0, 3, 4)
    [segment] = project(1, [a], IDLE_SESSION, 1.0, None, a.id)
    assert segment.label.text == "5.00 px"


def test_label_carries_given_unit():
    a = measurement(0, 0, 3, 4)
    [segment] = project(1, [a], IDLE_SESSION, 1.0, 0.125, a.id, unit="ft")
    assert segment.label.text == "0.63 ft"
    [segment] = project(1, [a], IDLE_SESSION, 1.0, None, a.id, unit="ft")
    assert segment.label.text == "5.00 px"


def test_hovering_missing_id_shows_no_label():
    ms = [measurement(0, 0, 3, 4), measurement(1, 1, 5, 5)]
    segments = project(1, ms, IDLE_SESSION, 1.0, 0.125, -999)
    assert all(s.label is None for s in segments)


def test_preview_segment_is_last():
    a, b = measurement(0, 0, 3, 4), measurement(1, 1, 2, 2)
    drag = DragSession(Point(10, 10, 1), Point(20, 10, 1), 1, True)
    segments = project(1, [a, b], drag, 1.5, None, None)

    assert [s.measurement_id for s in segments[:2]] == [a.id, b.id]
    preview = segments[-1]
    assert preview.kind is SegmentKind.PREVIEW
    assert preview.style == PREVIEW_STYLE
    assert (preview.x1, preview.y1, preview.x2, preview.y2) == (15, 15, 30, 15)
    assert preview.label is None


def test_preview_requires_active_drag_with_both_points_on_page():
    no_end = DragSession(Point(10, 10, 1), None, 1, True)
    inactive = DragSession(Point(10, 10, 1), Point(20, 20, 1), 1, False)
    other_page = DragSession(Point(10, 10, 2), Point(20, 20, 2), 2, True)
    for drag in (no_end, inactive, other_page):
        assert project(1, [], drag, 1.0, None, None) == []


def test_projection_does_not_mutate_inputs():
    ms = [measurement(0, 0, 3, 4)]
    before = list(ms)
    project(1, ms, IDLE_SESSION, 3.0, 0.1661, ms[0].id)
    assert ms == before


def test_invalid_zoom_raises():
    with pytest.raises(InvalidScaleError):
        project(1, [], IDLE_SESSION, 0, None, None)


def test_hit_test_finds_topmost_measurement():
    a, b = measurement(0, 0, 100, 0), measurement(50, -50, 50, 50)
    drag = DragSession(Point(0, 0, 1), Point(100, 0, 1), 1, True)
    segments = project(1, [a, b], drag, 1.0, None, None)
    assert hit_test(segments, 20, 2) == a.id
    assert hit_test(segments, 50, 0) == b.id
    assert hit_test(segments, 20, 30) is None


def test_paint_segments_draws_lines_and_labels():
    app = QGuiApplication.instance() or QGuiApplication([])
    a = measurement(10, 50, 190, 50)
    segments = project(1, [a], IDLE_SESSION, 1.0, 0.125, a.id)

    image = QImage(200, 100, QImage.Format.Format_ARGB32)
    image.fill(QColor(0, 0, 0, 0))
    painter = QPainter(image)
    try:
        paint_segments(painter, segments)
    finally:
        painter.end()

    line_pixel = image.pixelColor(40, 50)
    assert line_pixel.alpha() > 0
    assert line_pixel.red() > line_pixel.blue()
    # Label box sits above the midpoint
    label_pixel = image.pixelColor(100, 30)
    assert label_pixel.alpha() > 0
    assert app is not None
