"""Configuration management for mapgeom.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Numerical tolerances for geometry algorithms
- EngineConfig: Boolean/offset engine selection
- BufferParameters: Cap, join and side options for buffering
- LoggingConfig: Logging settings
- LogLevel: Accepted logging levels
- MapGeomSettings: Main application settings
"""

from mapgeom.config.settings import (
    BufferParameters,
    CapStyle,
    EngineBackend,
    EngineConfig,
    GeometryConfig,
    JoinStyle,
    LoggingConfig,
    LogLevel,
    MapGeomSettings,
    get_default_settings,
)

__all__ = [
    "BufferParameters",
    "CapStyle",
    "EngineBackend",
    "EngineConfig",
    "GeometryConfig",
    "JoinStyle",
    "LoggingConfig",
    "LogLevel",
    "MapGeomSettings",
    "get_default_settings",
]
