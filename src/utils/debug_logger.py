"""
Debug logging for the take-off measurement engine
Component-tagged output controlled through environment variables
"""

import os
import logging
from typing import Any, Dict, Optional
import json


class TakeoffDebugLogger:
    """Centralized debug logger for the measurement engine"""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._setup_logger()
            TakeoffDebugLogger._initialized = True

    def _setup_logger(self):
        """Initialize the logging configuration"""
        env_val = str(os.environ.get("TAKEOFF_DEBUG", "")).strip().lower()
        self.debug_enabled = env_val in {"1", "true", "yes", "on"}

        debug_level = os.environ.get("TAKEOFF_DEBUG_LEVEL", "INFO").upper()

        self.logger = logging.getLogger('takeoff_debug')
        self.logger.setLevel(getattr(logging, debug_level, logging.INFO))

        self.logger.handlers.clear()

        if self.debug_enabled:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.DEBUG)

            formatter = logging.Formatter(
                '%(asctime)s [TAKEOFF-%(levelname)s] %(component)s: %(message)s',
                datefmt='%H:%M:%S'
            )
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

            if os.environ.get("TAKEOFF_DEBUG_FILE"):
                file_handler = logging.FileHandler('takeoff_debug.log')
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

    def _log(self, level: int, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        if not self.debug_enabled:
            return
        if data:
            message = f"{message} {self._format_debug_data(data)}"
        self.logger.log(level, message, extra={'component': component})

    def debug(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log debug message with component context"""
        self._log(logging.DEBUG, component, message, data)

    def info(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log info message with component context"""
        self._log(logging.INFO, component, message, data)

    def warning(self, component: str, message: str, data: Optional[Dict[str, Any]] = None):
        """Log warning message with component context"""
        self._log(logging.WARNING, component, message, data)

    def error(self, component: str, message: str, error: Optional[Exception] = None, data: Optional[Dict[str, Any]] = None):
        """Log error message with component context"""
        if error:
            message += f" Error: {str(error)}"
        self._log(logging.ERROR, component, message, data)

    def _format_debug_data(self, data: Dict[str, Any]) -> str:
        """Format debug data for logging"""
        try:
            formatted = {}
            for key, value in data.items():
                if key.endswith('_distance') or key in ('x', 'y', 'zoom'):
                    # Distances and coordinates read better trimmed
                    if isinstance(value, float):
                        formatted[key] = round(value, 3)
                    else:
                        formatted[key] = value
                elif key in ('id', 'page', 'count'):
                    formatted[key] = int(value) if value is not None else None
                else:
                    formatted[key] = value

            return json.dumps(formatted, separators=(',', ':'), default=str)
        except (TypeError, ValueError):
            return str(data)

    def log_state_change(self, component: str, old_state: str, new_state: str, data: Optional[Dict[str, Any]] = None):
        """Log a state machine transition"""
        payload = {'from': old_state, 'to': new_state}
        if data:
            payload.update(data)
        self.debug(component, "State change", payload)


def get_debug_logger() -> TakeoffDebugLogger:
    """Get the shared debug logger instance"""
    return TakeoffDebugLogger()


# Global logger instance
debug_logger = TakeoffDebugLogger()
