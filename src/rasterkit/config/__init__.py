"""Configuration management for rasterkit.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- LineAlgorithm / ClipAlgorithm: Closed sets of algorithm variants
- LineConfig: Line rasterization settings
- ClipConfig: Clipping settings (iteration cap, parallel epsilon)
- ProcessingConfig: Job processing settings
- LogLevel: Accepted logging levels
- LoggingConfig: Logging settings
- RasterKitSettings: Main application settings
"""

from rasterkit.config.settings import (
    ClipAlgorithm,
    ClipConfig,
    LineAlgorithm,
    LineConfig,
    LogLevel,
    LoggingConfig,
    ProcessingConfig,
    RasterKitSettings,
    get_default_settings,
)

__all__ = [
    "ClipAlgorithm",
    "ClipConfig",
    "LineAlgorithm",
    "LineConfig",
    "LogLevel",
    "LoggingConfig",
    "ProcessingConfig",
    "RasterKitSettings",
    "get_default_settings",
]
