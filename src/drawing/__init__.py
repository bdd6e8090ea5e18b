"""
Drawing components for measuring on rendered document pages
"""

from .coordinates import TakeoffError, InvalidScaleError, normalize, denormalize
from .scale_manager import CalibrationRegistry, ScaleManager, UnknownScaleError
from .drawing_tools import DragSession, DragState, MeasureTool
from .drawing_overlay import DrawableSegment, OverlayLabel, SegmentKind, project, paint_segments
from .measurement_session import MeasurementSession
from .pdf_document import PDFDocument

__all__ = [
    'TakeoffError',
    'InvalidScaleError',
    'UnknownScaleError',
    'normalize',
    'denormalize',
    'CalibrationRegistry',
    'ScaleManager',
    'DragSession',
    'DragState',
    'MeasureTool',
    'DrawableSegment',
    'OverlayLabel',
    'SegmentKind',
    'project',
    'paint_segments',
    'MeasurementSession',
    'PDFDocument'
]
