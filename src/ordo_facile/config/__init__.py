# ============================================================================
# src/ordo_facile/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .loader import load_settings
from .base_config import base_settings, BaseSettingsConfig
from .search_config import search_settings, SearchSettings
from .logging_config import logging_settings, LoggingSettings

__all__ = [
    "load_settings",
    "base_settings",
    "BaseSettingsConfig",
    "search_settings",
    "SearchSettings",
    "logging_settings",
    "LoggingSettings",
]
