"""
Measurement store - ordered collection of committed measurements
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Optional, Sequence, Tuple

from .measurement import Measurement


Snapshot = Tuple[Measurement, ...]


def display_distance(measurement: Measurement, calibration_factor: Optional[float]) -> float:
    """Real-world distance for a measurement; uncalibrated uses a multiplier of 1"""
    return measurement.pixel_distance * (calibration_factor or 1)


def round_distance(value: float) -> float:
    """Round to 2 decimals with halves rounded up (0.625 -> 0.63)"""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_distance(measurement: Measurement, calibration_factor: Optional[float], unit: str = "m") -> str:
    """Format a measurement's display distance for labels and lists

    Calibrated values carry the real-world unit, uncalibrated ones are
    shown as raw pixels.
    """
    value = round_distance(display_distance(measurement, calibration_factor))
    suffix = unit if calibration_factor else "px"
    return f"{value:.2f} {suffix}"


class MeasurementStore:
    """Ordered measurements in insertion (display) order

    Only grows through append(); undo/redo swap the whole contents
    via replace_all().
    """

    def __init__(self, measurements: Sequence[Measurement] = ()):
        self._measurements = list(measurements)

    def append(self, measurement: Measurement):
        self._measurements.append(measurement)

    def replace_all(self, snapshot: Sequence[Measurement]):
        self._measurements = list(snapshot)

    def list(self) -> Snapshot:
        return tuple(self._measurements)

    # Snapshots are immutable tuples, so list() already is one
    snapshot = list

    def clear(self):
        self._measurements = []

    def get(self, measurement_id) -> Optional[Measurement]:
        for measurement in self._measurements:
            if measurement.id == measurement_id:
                return measurement
        return None

    def for_page(self, page: int) -> Snapshot:
        return tuple(m for m in self._measurements if m.is_on_page(page))

    def __len__(self) -> int:
        return len(self._measurements)

    def __iter__(self) -> Iterator[Measurement]:
        return iter(tuple(self._measurements))
