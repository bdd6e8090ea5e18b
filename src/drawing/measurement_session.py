"""
Measurement Session - owns measuring state for one open document
"""

from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from drawing.coordinates import check_zoom, normalize
from drawing.drawing_overlay import DrawableSegment, project
from drawing.drawing_tools import DragSession, MeasureTool
from drawing.scale_manager import CalibrationRegistry, ScaleManager, UnknownScaleError
from models.history import HistoryManager
from models.measurement import Measurement, Point
from models.measurement_store import (MeasurementStore, Snapshot,
                                      display_distance, format_distance, round_distance)
from utils.debug_logger import debug_logger
from utils.settings_manager import get_settings_manager


class MeasurementSession(QObject):
    """Single owner of measurements, history, calibration and drag state

    Hosts feed pointer events in and read projections and list rows out.
    All state changes happen synchronously on the calling thread.
    """

    measurements_changed = Signal(object)  # tuple of Measurement
    calibration_changed = Signal(object)  # factor or None
    drag_changed = Signal()
    hover_changed = Signal(object)  # measurement id or None
    zoom_changed = Signal(float)
    document_reset = Signal()

    def __init__(self, registry: Optional[CalibrationRegistry] = None,
                 default_scale: Optional[str] = None, zoom: float = 1.0,
                 allow_zero_length: bool = False, page_count: Optional[int] = None):
        super().__init__()
        self.store = MeasurementStore()
        self.history = HistoryManager()
        self.scale_manager = ScaleManager(registry)
        self.tool = MeasureTool(allow_zero_length=allow_zero_length)
        self._zoom = check_zoom(zoom)
        self._hovered_id = None
        self._page_count = page_count

        self.tool.finished.connect(self._on_measurement_finished)
        self.tool.updated.connect(self.drag_changed)
        self.tool.cancelled.connect(self.drag_changed)
        self.scale_manager.scale_changed.connect(self._on_scale_changed)

        if default_scale:
            try:
                self.scale_manager.select_scale(default_scale)
            except UnknownScaleError:
                # A stale stored default must not block opening a session
                debug_logger.warning("MeasurementSession", "Starting uncalibrated",
                                     {'default_scale': default_scale})

    @classmethod
    def from_settings(cls, settings=None, registry: Optional[CalibrationRegistry] = None):
        """Build a session from a SettingsManager, the shared one by default"""
        if settings is None:
            settings = get_settings_manager()
        return cls(
            registry=registry,
            default_scale=settings.get_default_scale(),
            zoom=settings.get_default_zoom(),
            allow_zero_length=settings.allow_zero_length(),
        )

    # State accessors

    @property
    def measurements(self) -> Snapshot:
        return self.store.list()

    @property
    def calibration_factor(self) -> Optional[float]:
        return self.scale_manager.calibration_factor

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def drag(self) -> DragSession:
        return self.tool.session()

    @property
    def hovered_id(self):
        return self._hovered_id

    @property
    def page_count(self) -> Optional[int]:
        return self._page_count

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    # Document lifecycle

    def set_page_count(self, page_count: Optional[int]):
        if page_count is not None and page_count < 0:
            raise ValueError(f"Page count cannot be negative, got {page_count}")
        self._page_count = page_count

    def has_page(self, page: int) -> bool:
        if page < 1:
            return False
        return self._page_count is None or page <= self._page_count

    def document_changed(self, page_count: Optional[int] = None):
        """Reset everything for a newly loaded document"""
        self.tool.cancel()
        self.store.clear()
        self.history.clear()
        self._hovered_id = None
        self._page_count = page_count
        self.scale_manager.clear_scale()
        debug_logger.info("MeasurementSession", "Document changed", {'count': page_count})
        self.document_reset.emit()
        self.measurements_changed.emit(self.store.list())

    # Zoom and calibration

    def set_zoom(self, zoom: float):
        self._zoom = check_zoom(zoom)
        self.zoom_changed.emit(self._zoom)

    def select_scale(self, scale_id) -> float:
        return self.scale_manager.select_scale(scale_id)

    def clear_scale(self):
        self.scale_manager.clear_scale()

    def _on_scale_changed(self, factor, scale_id):
        self.calibration_changed.emit(factor)

    # Gestures with page-local points

    def _accepts_press(self, page: int) -> bool:
        if self.has_page(page):
            return True
        debug_logger.warning("MeasurementSession", "Press on unknown page ignored",
                             {'page': page, 'count': self._page_count})
        return False

    def begin_drag(self, point: Point) -> bool:
        if not self._accepts_press(point.page):
            return False
        self.tool.start(point)
        return True

    def update_drag(self, point: Point):
        self.tool.update(point)

    def end_drag(self) -> Optional[Measurement]:
        return self.tool.finish()

    def cancel_drag(self):
        self.tool.cancel()

    def _on_measurement_finished(self, measurement: Measurement):
        self.history.push_undo(self.store.snapshot())
        self.store.append(measurement)
        self.measurements_changed.emit(self.store.list())

    # Gestures with raw pointer coordinates

    def pointer_pressed(self, screen_x: float, screen_y: float,
                        page_origin_x: float, page_origin_y: float, page: int) -> bool:
        # Page 0 cannot become a Point, so check before normalizing
        if not self._accepts_press(page):
            return False
        point = normalize(screen_x, screen_y, page_origin_x, page_origin_y, self._zoom, page)
        self.tool.start(point)
        return True

    def pointer_moved(self, screen_x: float, screen_y: float,
                      page_origin_x: float, page_origin_y: float, page: int):
        if not self.tool.active or not self.has_page(page):
            return
        point = normalize(screen_x, screen_y, page_origin_x, page_origin_y, self._zoom, page)
        self.update_drag(point)

    def pointer_released(self) -> Optional[Measurement]:
        return self.end_drag()

    def pointer_left(self):
        self.cancel_drag()

    # Undo / redo

    def undo(self) -> bool:
        snapshot = self.history.undo(self.store.snapshot())
        if snapshot is None:
            return False
        self.store.replace_all(snapshot)
        debug_logger.debug("MeasurementSession", "Undo", {'count': len(snapshot)})
        self.measurements_changed.emit(self.store.list())
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo(self.store.snapshot())
        if snapshot is None:
            return False
        self.store.replace_all(snapshot)
        debug_logger.debug("MeasurementSession", "Redo", {'count': len(snapshot)})
        self.measurements_changed.emit(self.store.list())
        return True

    # Outputs

    def set_hovered(self, measurement_id):
        if measurement_id == self._hovered_id:
            return
        self._hovered_id = measurement_id
        self.hover_changed.emit(measurement_id)

    def project(self, page: int) -> List[DrawableSegment]:
        """Overlay geometry for one page with the current session state"""
        return project(page, self.store.list(), self.tool.session(), self._zoom,
                       self.calibration_factor, self._hovered_id, self.scale_manager.units)

    def measurement_rows(self):
        """Rows for a measurement list, in display order"""
        factor = self.calibration_factor
        rows = []
        for index, m in enumerate(self.store, start=1):
            rows.append({
                'index': index,
                'id': m.id,
                'page': m.page,
                'pixel_distance': m.pixel_distance,
                'distance': round_distance(display_distance(m, factor)),
                'label': format_distance(m, factor, self.scale_manager.units),
            })
        return rows
