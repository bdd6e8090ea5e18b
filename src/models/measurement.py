"""
Measurement records captured on drawing pages
"""

import itertools
import math
from dataclasses import dataclass
from typing import Tuple


# Ids only need to be unique for the lifetime of the process
_measurement_ids = itertools.count(1)


def next_measurement_id() -> int:
    """Issue a new measurement id"""
    return next(_measurement_ids)


@dataclass(frozen=True)
class Point:
    """Page-local coordinate at zoom 1.0, tagged with its 1-indexed page"""
    x: float
    y: float
    page: int

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"Page numbers are 1-indexed, got {self.page}")

    def distance_to(self, other: 'Point') -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class Measurement:
    """A committed two-point linear measurement

    pixel_distance is fixed at commit time and is the canonical value;
    it is never recomputed from the points.
    """
    id: int
    points: Tuple[Point, Point]
    pixel_distance: float

    @classmethod
    def from_points(cls, start: Point, end: Point) -> 'Measurement':
        if start.page != end.page:
            raise ValueError(
                f"Measurement points must share a page ({start.page} != {end.page})"
            )
        return cls(
            id=next_measurement_id(),
            points=(start, end),
            pixel_distance=start.distance_to(end),
        )

    @property
    def page(self) -> int:
        return self.points[0].page

    @property
    def midpoint(self) -> Tuple[float, float]:
        start, end = self.points
        return (start.x + end.x) / 2, (start.y + end.y) / 2

    def is_on_page(self, page: int) -> bool:
        return self.points[0].page == page and self.points[1].page == page
