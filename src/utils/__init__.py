"""
Utils package - Utility modules for the Takeoff Calculator
"""

from .debug_logger import TakeoffDebugLogger, debug_logger, get_debug_logger
from .settings_manager import SettingsManager, get_settings_manager

__all__ = [
    'TakeoffDebugLogger',
    'debug_logger',
    'get_debug_logger',
    'SettingsManager',
    'get_settings_manager'
]
