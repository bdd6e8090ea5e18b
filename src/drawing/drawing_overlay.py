"""
Drawing Overlay - Projects measurements onto a rendered page
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QPainter, QPen, QBrush, QColor, QFont

from drawing.coordinates import check_zoom, denormalize
from drawing.drawing_tools import DragSession
from models.measurement import Measurement
from models.measurement_store import format_distance


class SegmentKind(Enum):
    MEASUREMENT = "measurement"
    PREVIEW = "preview"


@dataclass(frozen=True)
class SegmentStyle:
    color: Tuple[int, int, int]
    width: float
    opacity: float
    dash: Optional[Tuple[float, float]] = None
    round_cap: bool = False


MEASUREMENT_STYLE = SegmentStyle(color=(255, 0, 0), width=4, opacity=0.5, round_cap=True)
PREVIEW_STYLE = SegmentStyle(color=(0, 0, 255), width=2, opacity=0.7, dash=(5, 5))

# Hover label box, relative to the segment midpoint
LABEL_WIDTH = 80
LABEL_HEIGHT = 20
LABEL_OFFSET_X = -40
LABEL_OFFSET_Y = -24
LABEL_TEXT_OFFSET_Y = -10
LABEL_FILL = (47, 130, 172)
LABEL_OPACITY = 0.8
LABEL_FONT_SIZE = 12


@dataclass(frozen=True)
class OverlayLabel:
    text: str
    x: float  # midpoint, screen pixels relative to the page origin
    y: float

    @property
    def box(self) -> Tuple[float, float, float, float]:
        return (self.x + LABEL_OFFSET_X, self.y + LABEL_OFFSET_Y, LABEL_WIDTH, LABEL_HEIGHT)

    @property
    def text_anchor(self) -> Tuple[float, float]:
        return self.x, self.y + LABEL_TEXT_OFFSET_Y


@dataclass(frozen=True)
class DrawableSegment:
    kind: SegmentKind
    x1: float
    y1: float
    x2: float
    y2: float
    style: SegmentStyle
    measurement_id: Optional[int] = None
    label: Optional[OverlayLabel] = None

    @property
    def midpoint(self) -> Tuple[float, float]:
        return (self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2


def project(page: int, measurements: Iterable[Measurement], drag_session: DragSession,
            zoom_scale: float, calibration_factor: Optional[float],
            hovered_id=None, unit: str = "m") -> List[DrawableSegment]:
    """Drawable geometry for one page at the given zoom

    Measurements keep insertion order; the drag preview, when there is
    one on this page, comes last.
    """
    check_zoom(zoom_scale)
    segments = []

    for m in measurements:
        if not m.is_on_page(page):
            continue
        x1, y1 = denormalize(m.points[0], zoom_scale)
        x2, y2 = denormalize(m.points[1], zoom_scale)
        label = None
        if hovered_id is not None and m.id == hovered_id:
            label = OverlayLabel(
                text=format_distance(m, calibration_factor, unit),
                x=(x1 + x2) / 2,
                y=(y1 + y2) / 2,
            )
        segments.append(DrawableSegment(
            kind=SegmentKind.MEASUREMENT,
            x1=x1, y1=y1, x2=x2, y2=y2,
            style=MEASUREMENT_STYLE,
            measurement_id=m.id,
            label=label,
        ))

    drag = drag_session
    if drag.active and drag.page == page and drag.start is not None and drag.end is not None:
        x1, y1 = denormalize(drag.start, zoom_scale)
        x2, y2 = denormalize(drag.end, zoom_scale)
        segments.append(DrawableSegment(
            kind=SegmentKind.PREVIEW,
            x1=x1, y1=y1, x2=x2, y2=y2,
            style=PREVIEW_STYLE,
        ))

    return segments


def hit_test(segments: Iterable[DrawableSegment], x: float, y: float, tolerance: float = 4.0):
    """Id of the topmost measurement segment within tolerance of (x, y), or None

    Used by hosts to drive hover state from pointer position.
    """
    hit = None
    for seg in segments:
        if seg.kind is not SegmentKind.MEASUREMENT:
            continue
        if _distance_to_segment(x, y, seg) <= max(tolerance, seg.style.width / 2):
            hit = seg.measurement_id
    return hit


def _distance_to_segment(px: float, py: float, seg: DrawableSegment) -> float:
    dx = seg.x2 - seg.x1
    dy = seg.y2 - seg.y1
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        t = 0.0
    else:
        t = max(0.0, min(1.0, ((px - seg.x1) * dx + (py - seg.y1) * dy) / length_sq))
    cx = seg.x1 + t * dx
    cy = seg.y1 + t * dy
    return ((px - cx) ** 2 + (py - cy) ** 2) ** 0.5


def _pen_for(style: SegmentStyle) -> QPen:
    color = QColor(*style.color)
    color.setAlphaF(style.opacity)
    pen = QPen(color, style.width)
    if style.dash:
        # Qt dash patterns are in units of the pen width
        pen.setDashPattern([d / style.width for d in style.dash])
    if style.round_cap:
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    return pen


def paint_segments(painter: QPainter, segments: Iterable[DrawableSegment]):
    """Draw a projection with a QPainter positioned at the page origin"""
    painter.save()
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        for seg in segments:
            painter.setPen(_pen_for(seg.style))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawLine(QPointF(seg.x1, seg.y1), QPointF(seg.x2, seg.y2))

            if seg.label is None:
                continue
            fill = QColor(*LABEL_FILL)
            fill.setAlphaF(LABEL_OPACITY)
            painter.setPen(QPen(fill, 0.5))
            painter.setBrush(QBrush(fill))
            painter.drawRoundedRect(QRectF(*seg.label.box), 4, 4)

            font = QFont("sans-serif")
            font.setPixelSize(LABEL_FONT_SIZE)
            painter.setFont(font)
            painter.setPen(QPen(QColor(255, 255, 255)))
            tx, ty = seg.label.text_anchor
            text_width = painter.fontMetrics().horizontalAdvance(seg.label.text)
            painter.drawText(QPointF(tx - text_width / 2, ty), seg.label.text)
    finally:
        painter.restore()
