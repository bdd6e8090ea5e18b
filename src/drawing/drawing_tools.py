"""
Drawing Tools - Drag-to-measure gesture handling
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PySide6.QtCore import QObject, Signal

from models.measurement import Measurement, Point
from utils.debug_logger import debug_logger


class DragState(Enum):
    """States of a measuring gesture"""
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragSession:
    """Read-only view of an in-progress gesture, used by the overlay"""
    start: Optional[Point] = None
    end: Optional[Point] = None
    page: Optional[int] = None
    active: bool = False


IDLE_SESSION = DragSession()


class MeasureTool(QObject):
    """Two-point measuring tool driven by press/move/release

    Moves reported on a page other than the one the drag started on are
    ignored, so the end point holds its last in-page value. Pressing
    again while a drag is active aborts the earlier drag first.
    """

    finished = Signal(object)  # Measurement committed
    updated = Signal()  # Drag preview changed
    cancelled = Signal()  # Gesture aborted without a measurement

    def __init__(self, allow_zero_length: bool = False):
        super().__init__()
        self.allow_zero_length = allow_zero_length
        self.state = DragState.IDLE
        self.start_point: Optional[Point] = None
        self.current_point: Optional[Point] = None
        self.page: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.state is DragState.DRAGGING

    def session(self) -> DragSession:
        if not self.active:
            return IDLE_SESSION
        return DragSession(self.start_point, self.current_point, self.page, True)

    def _set_state(self, state: DragState):
        if state is not self.state:
            debug_logger.log_state_change("MeasureTool", self.state.value, state.value)
        self.state = state

    def _reset(self):
        self.start_point = None
        self.current_point = None
        self.page = None
        self._set_state(DragState.IDLE)

    def start(self, point: Point):
        """Begin a drag at the given page-local point"""
        if self.active:
            debug_logger.debug("MeasureTool", "Press during active drag; aborting previous",
                               {'page': self.page})
            self.cancel()
        self.start_point = point
        self.current_point = None
        self.page = point.page
        self._set_state(DragState.DRAGGING)
        self.updated.emit()

    def update(self, point: Point):
        """Move the end of the active drag"""
        if not self.active:
            return
        if point.page != self.page:
            debug_logger.debug("MeasureTool", "Ignoring move on another page",
                               {'page': point.page, 'drag_page': self.page})
            return
        self.current_point = point
        self.updated.emit()

    def finish(self) -> Optional[Measurement]:
        """Release the drag, returning the committed measurement if any"""
        if not self.active:
            return None

        result = self.get_result()
        self._reset()
        if result is None:
            self.cancelled.emit()
            return None

        debug_logger.info("MeasureTool", "Measurement committed",
                          {'id': result.id, 'page': result.page,
                           'pixel_distance': result.pixel_distance})
        self.finished.emit(result)
        return result

    def cancel(self):
        """Abort the current gesture without committing"""
        was_active = self.active
        self._reset()
        if was_active:
            self.cancelled.emit()

    def get_result(self) -> Optional[Measurement]:
        if not self.start_point or not self.current_point:
            return None
        length_pixels = self.start_point.distance_to(self.current_point)
        if length_pixels <= 0 and not self.allow_zero_length:
            debug_logger.debug("MeasureTool", "Discarding zero-length drag", {'page': self.page})
            return None
        return Measurement.from_points(self.start_point, self.current_point)
