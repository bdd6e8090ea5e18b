"""
Measurement models for the Takeoff Calculator
"""

from .measurement import Point, Measurement, next_measurement_id
from .measurement_store import (MeasurementStore, display_distance,
                                round_distance, format_distance)
from .history import HistoryManager

__all__ = [
	'Point',
	'Measurement',
	'next_measurement_id',
	'MeasurementStore',
	'display_distance',
	'round_distance',
	'format_distance',
	'HistoryManager'
]
