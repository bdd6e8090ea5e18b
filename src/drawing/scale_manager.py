"""
Scale Manager - Drawing scale calibration and pixel to real-world conversion
"""

from typing import Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from drawing.coordinates import TakeoffError
from models.measurement_store import round_distance
from utils.debug_logger import debug_logger


# Drawing ratio id -> metres per page pixel at zoom 1.0
DRAWING_CALIBRATIONS = {
    "125": 0.1661,  # 1:125
    "100": 0.125,   # 1:100
    "75": 0.0933,   # 1:75
}

DEFAULT_SCALE_ID = "125"


class UnknownScaleError(TakeoffError, KeyError):
    """Raised when a scale id is not in the calibration registry"""

    def __init__(self, scale_id):
        super().__init__(scale_id)
        self.scale_id = scale_id

    def __str__(self):
        return f"Unknown drawing scale: {self.scale_id!r}"


class CalibrationRegistry:
    """Table of drawing scales and their pixel-to-metre factors"""

    def __init__(self, calibrations: Optional[Dict[str, float]] = None):
        self._calibrations: Dict[str, float] = {}
        for scale_id, factor in (DRAWING_CALIBRATIONS if calibrations is None else calibrations).items():
            self.register(scale_id, factor)

    @staticmethod
    def _key(scale_id) -> str:
        return str(scale_id).strip()

    def register(self, scale_id, factor: float):
        """Add or replace a scale entry"""
        if not factor > 0:
            raise ValueError(f"Calibration factor must be positive, got {factor}")
        self._calibrations[self._key(scale_id)] = float(factor)

    def resolve(self, scale_id) -> float:
        """Return the factor for a scale id, raising UnknownScaleError if missing"""
        try:
            return self._calibrations[self._key(scale_id)]
        except KeyError:
            raise UnknownScaleError(scale_id) from None

    def scale_ids(self) -> List[str]:
        return list(self._calibrations)

    def label(self, scale_id) -> str:
        """Display label such as '1:125'"""
        self.resolve(scale_id)
        return f"1:{self._key(scale_id)}"

    def __contains__(self, scale_id) -> bool:
        return self._key(scale_id) in self._calibrations

    def __len__(self) -> int:
        return len(self._calibrations)


class ScaleManager(QObject):
    """Holds the session calibration factor and converts distances"""

    scale_changed = Signal(object, str)  # calibration factor (or None), scale id

    def __init__(self, registry: Optional[CalibrationRegistry] = None, units: str = "m"):
        super().__init__()
        self.registry = registry or CalibrationRegistry()
        self.units = units
        self._scale_id: Optional[str] = None
        self._calibration_factor: Optional[float] = None

    @property
    def calibration_factor(self) -> Optional[float]:
        return self._calibration_factor

    @property
    def scale_id(self) -> Optional[str]:
        return self._scale_id

    @property
    def is_calibrated(self) -> bool:
        return self._calibration_factor is not None

    def select_scale(self, scale_id) -> float:
        """Calibrate from a registered scale id

        An unknown id leaves the current calibration untouched and
        re-raises UnknownScaleError to the caller.
        """
        try:
            factor = self.registry.resolve(scale_id)
        except UnknownScaleError:
            debug_logger.warning("ScaleManager", "Rejected scale selection",
                                 {'scale_id': scale_id, 'kept': self._scale_id})
            raise

        self._scale_id = CalibrationRegistry._key(scale_id)
        self._calibration_factor = factor
        debug_logger.info("ScaleManager", "Scale selected",
                          {'scale_id': self._scale_id, 'factor': factor})
        self.scale_changed.emit(factor, self._scale_id)
        return factor

    def clear_scale(self):
        """Return to uncalibrated pixel units"""
        if self._calibration_factor is None and self._scale_id is None:
            return
        self._scale_id = None
        self._calibration_factor = None
        debug_logger.info("ScaleManager", "Calibration cleared")
        self.scale_changed.emit(None, "")

    def pixels_to_real(self, pixels: float) -> float:
        """Convert page pixels to real-world units"""
        return pixels * (self._calibration_factor or 1)

    def format_distance(self, pixels: float) -> str:
        """Format a pixel distance with the current calibration"""
        suffix = self.units if self.is_calibrated else "px"
        return f"{round_distance(self.pixels_to_real(pixels)):.2f} {suffix}"

    def get_scale_info(self):
        """Get current scale information"""
        return {
            'scale_id': self._scale_id,
            'scale_string': self.registry.label(self._scale_id) if self._scale_id else None,
            'calibration_factor': self._calibration_factor,
            'units': self.units if self.is_calibrated else "px",
        }
