#!/usr/bin/env python3
"""
Tests for the drag-to-measure gesture state machine
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from drawing.drawing_tools import DragState, MeasureTool, IDLE_SESSION
from models.measurement import Point


def make_tool(**kwargs):
    tool = MeasureTool(**kwargs)
    events = {'finished': [], 'cancelled': 0, 'updated': 0}

    def on_cancel():
        events['cancelled'] += 1

    def on_update():
        events['updated'] += 1

    tool.finished.connect(events['finished'].append)
    tool.cancelled.connect(on_cancel)
    tool.updated.connect(on_update)
    return tool, events


def test_drag_commits_measurement():
    tool, events = make_tool()
    tool.start(Point(0, 0, 1))
    assert tool.state is DragState.DRAGGING
    tool.update(Point(3, 4, 1))

    session = tool.session()
    assert session.active
    assert session.page == 1
    assert session.end == Point(3, 4, 1)

    measurement = tool.finish()
    assert measurement.pixel_distance == 5
    assert measurement.points == (Point(0, 0, 1), Point(3, 4, 1))
    assert events['finished'] == [measurement]
    assert tool.state is DragState.IDLE
    assert tool.session() == IDLE_SESSION


def test_click_without_movement_aborts_silently():
    tool, events = make_tool()
    tool.start(Point(10, 10, 2))
    assert tool.finish() is None
    assert events['finished'] == []
    assert events['cancelled'] == 1
    assert tool.state is DragState.IDLE


def test_zero_length_drag_is_discarded_by_default():
    tool, events = make_tool()
    tool.start(Point(5, 5, 1))
    tool.update(Point(5, 5, 1))
    assert tool.finish() is None
    assert events['finished'] == []


def test_zero_length_drag_commits_when_allowed():
    tool, events = make_tool(allow_zero_length=True)
    tool.start(Point(5, 5, 1))
    tool.update(Point(5, 5, 1))
    measurement = tool.finish()
    assert measurement is not None
    assert measurement.pixel_distance == 0
    assert len(events['finished']) == 1


def test_moves_on_another_page_are_ignored():
    tool, events = make_tool()
    tool.start(Point(0, 0, 1))
    tool.update(Point(6, 8, 1))
    tool.update(Point(100, 100, 2))

    assert tool.session().end == Point(6, 8, 1)
    measurement = tool.finish()
    assert measurement.page == 1
    assert measurement.pixel_distance == 10


def test_cross_page_before_any_in_page_move_aborts():
    tool, events = make_tool()
    tool.start(Point(0, 0, 1))
    tool.update(Point(50, 50, 2))
    assert tool.finish() is None


def test_new_press_aborts_active_drag():
    tool, events = make_tool()
    tool.start(Point(0, 0, 1))
    tool.update(Point(30, 40, 1))
    tool.start(Point(100, 100, 3))

    assert events['cancelled'] == 1
    session = tool.session()
    assert session.start == Point(100, 100, 3)
    assert session.end is None
    assert session.page == 3

    tool.update(Point(100, 110, 3))
    measurement = tool.finish()
    assert measurement.points[0] == Point(100, 100, 3)
    assert measurement.pixel_distance == 10


def test_cancel_discards_gesture():
    tool, events = make_tool()
    tool.start(Point(0, 0, 1))
    tool.update(Point(3, 4, 1))
    tool.cancel()
    assert tool.state is DragState.IDLE
    assert tool.start_point is None and tool.current_point is None
    assert tool.finish() is None
    assert events['finished'] == []
    assert events['cancelled'] == 1


def test_events_while_idle_are_ignored():
    tool, events = make_tool()
    tool.update(Point(1, 1, 1))
    assert tool.finish() is None
    tool.cancel()
    assert events == {'finished': [], 'cancelled': 0, 'updated': 0}
