"""
Coordinate normalization between screen pixels and page-local units
"""

from typing import Tuple

from models.measurement import Point


class TakeoffError(Exception):
    """Base exception for take-off engine errors"""
    pass


class InvalidScaleError(TakeoffError, ValueError):
    """Raised when a non-positive zoom scale reaches the engine"""

    def __init__(self, zoom_scale):
        super().__init__(f"Zoom scale must be positive, got {zoom_scale}")
        self.zoom_scale = zoom_scale


def check_zoom(zoom_scale: float) -> float:
    if not zoom_scale > 0:
        raise InvalidScaleError(zoom_scale)
    return zoom_scale


def normalize(screen_x: float, screen_y: float, page_origin_x: float, page_origin_y: float,
              zoom_scale: float, page_number: int) -> Point:
    """Convert a pointer position on a rendered page to a page-local point at zoom 1.0"""
    check_zoom(zoom_scale)
    return Point(
        x=(screen_x - page_origin_x) / zoom_scale,
        y=(screen_y - page_origin_y) / zoom_scale,
        page=page_number,
    )


def denormalize(point: Point, zoom_scale: float) -> Tuple[float, float]:
    """Page-local point to on-screen offset from the page origin"""
    check_zoom(zoom_scale)
    return point.x * zoom_scale, point.y * zoom_scale
