"""Configuration management for charrom.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- HistoryConfig: Undo/redo bounds
- ShareConfig: Share token compression and URL length limits
- FontImportConfig: Vector font rasterisation settings
- ImageImportConfig: Character sheet image slicing settings
- LoggingConfig: Logging settings
- CharRomSettings: Main application settings
"""

from charrom.config.settings import (
    CharRomSettings,
    FontImportConfig,
    HistoryConfig,
    ImageImportConfig,
    LoggingConfig,
    ReadingOrder,
    ShareConfig,
    get_default_settings,
)

__all__ = [
    "CharRomSettings",
    "FontImportConfig",
    "HistoryConfig",
    "ImageImportConfig",
    "LoggingConfig",
    "ReadingOrder",
    "ShareConfig",
    "get_default_settings",
]
