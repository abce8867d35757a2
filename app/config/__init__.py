"""Configuration package for runtime settings and startup validation."""

from .logging_setup import config_configure_logging
from .settings import AmountCoercionPolicy, AppSettings, SettingsLoadError, config_load_settings

__all__ = [
    "AmountCoercionPolicy",
    "AppSettings",
    "SettingsLoadError",
    "config_configure_logging",
    "config_load_settings",
]
