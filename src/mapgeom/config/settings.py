"""Configuration settings for mapgeom."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class CapStyle(str, Enum):
    """Shape of buffered line endpoints."""

    DEFAULT = "default"
    SQUARE = "square"
    ROUND = "round"
    FLAT = "flat"


class JoinStyle(str, Enum):
    """Shape of buffered corners."""

    ROUND = "round"
    MITRE = "mitre"
    BEVEL = "bevel"


class EngineBackend(str, Enum):
    """Boolean/offset engine implementation."""

    SHAPELY = "shapely"
    NONE = "none"


class LogLevel(str, Enum):
    """Console and file logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class GeometryConfig(BaseModel):
    """Numerical tolerances used by the geometry algorithms."""

    orientation_epsilon: float = Field(
        default=1e-10,
        ge=0.0,
        description="Signed area magnitude below which a ring is degenerate",
    )
    colinear_tolerance: float = Field(
        default=1e-9,
        ge=0.0,
        description="Maximum distance from the neighbour segment for a point to count as colinear",
    )


class EngineConfig(BaseModel):
    """Configuration for the boolean/offset engine."""

    backend: EngineBackend = Field(
        default=EngineBackend.SHAPELY,
        description="Engine used for buffer, crop, union, difference and intersects",
    )


class BufferParameters(BaseModel):
    """Options for the buffer operation."""

    cap_style: CapStyle = Field(
        default=CapStyle.DEFAULT,
        description="Shape of buffered line endpoints",
    )
    join_style: JoinStyle = Field(
        default=JoinStyle.ROUND,
        description="Shape of buffered corners",
    )
    corner_segs: int = Field(
        default=0,
        ge=0,
        description="Segments per quarter circle for rounded joins/caps (0 = engine default)",
    )
    single_sided: bool = Field(
        default=False,
        description="Offset only one side of a line",
    )
    left_side: bool = Field(
        default=True,
        description="Side to offset when single_sided is set",
    )
    mitre_limit: float = Field(
        default=5.0,
        gt=0.0,
        description="Ratio limiting the length of mitred corners",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Console log level",
    )
    file_log_level: LogLevel = Field(
        default=LogLevel.DEBUG,
        description="File log level (more verbose)",
    )


class MapGeomSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    buffer: BufferParameters = Field(default_factory=BufferParameters)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> MapGeomSettings:
    """Get default application settings."""
    return MapGeomSettings()
