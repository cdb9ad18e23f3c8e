"""
Configuration module.

Provides:
- YAML settings loading with validation
- Environment variable substitution
"""

from .loader import (
    ConfigLoader,
    LoggingSettings,
    PortalSettings,
    ServerSettings,
    Settings,
    load_settings,
)

__all__ = [
    "ConfigLoader",
    "LoggingSettings",
    "PortalSettings",
    "ServerSettings",
    "Settings",
    "load_settings",
]
