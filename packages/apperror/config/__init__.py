"""Public API for apperror configuration utilities."""

from .loader import default_settings, load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    AppErrorSettings,
    LoggingSettings,
    WireSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppErrorSettings",
    "LoggingSettings",
    "WireSettings",
    "default_settings",
    "load_settings",
]
