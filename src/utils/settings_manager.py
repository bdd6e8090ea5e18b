"""
Settings Manager - Handles take-off calculator settings using QSettings
"""

from typing import Optional

from PySide6.QtCore import QSettings


class SettingsManager:
    """Manages application settings using QSettings"""

    ORGANIZATION = "Takeoff Tools"
    APPLICATION = "Takeoff Calculator"

    # Settings keys
    KEY_DEFAULT_SCALE = "calibration/default_scale"
    KEY_ALLOW_ZERO_LENGTH = "measurement/allow_zero_length"
    KEY_DEFAULT_ZOOM = "view/default_zoom"

    # Defaults match the viewer's first-open state: 1:125 at 125% zoom
    DEFAULT_SCALE = "125"
    DEFAULT_ZOOM = 1.25

    def __init__(self, ini_path: Optional[str] = None):
        """
        Initialize the settings manager

        Args:
            ini_path (str, optional): Store settings in this INI file instead
                of the per-user native location
        """
        if ini_path:
            self.settings = QSettings(ini_path, QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(SettingsManager.ORGANIZATION, SettingsManager.APPLICATION)

    def get_default_scale(self) -> Optional[str]:
        """
        Get the scale id a new session starts calibrated with

        Returns:
            str or None: Scale id, or None to start uncalibrated
        """
        value = self.settings.value(self.KEY_DEFAULT_SCALE, self.DEFAULT_SCALE, type=str)
        return value or None

    def set_default_scale(self, scale_id: Optional[str]):
        self.settings.setValue(self.KEY_DEFAULT_SCALE, scale_id or "")
        self.settings.sync()

    def allow_zero_length(self) -> bool:
        return self.settings.value(self.KEY_ALLOW_ZERO_LENGTH, False, type=bool)

    def set_allow_zero_length(self, allowed: bool):
        self.settings.setValue(self.KEY_ALLOW_ZERO_LENGTH, bool(allowed))
        self.settings.sync()

    def get_default_zoom(self) -> float:
        """
        Get the zoom factor a new session starts with

        Returns:
            float: Zoom factor, falls back to the default when the stored
                value is not positive
        """
        zoom = self.settings.value(self.KEY_DEFAULT_ZOOM, self.DEFAULT_ZOOM, type=float)
        if zoom <= 0:
            return self.DEFAULT_ZOOM
        return zoom

    def set_default_zoom(self, zoom: float):
        if zoom <= 0:
            raise ValueError(f"Zoom must be positive, got {zoom}")
        self.settings.setValue(self.KEY_DEFAULT_ZOOM, float(zoom))
        self.settings.sync()

    def reset(self):
        """Clear stored values and revert to defaults"""
        for key in (self.KEY_DEFAULT_SCALE, self.KEY_ALLOW_ZERO_LENGTH, self.KEY_DEFAULT_ZOOM):
            self.settings.remove(key)
        self.settings.sync()


# Global instance
_settings_manager = None


def get_settings_manager():
    """Get the global settings manager instance"""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager
