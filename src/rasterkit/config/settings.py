"""Configuration settings for RasterKit."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class LineAlgorithm(str, Enum):
    """Line scan-conversion variant."""

    DDA = "dda"
    BRESENHAM_OCTANT1 = "bresenham_octant1"
    BRESENHAM_ALL_SLOPES = "bresenham_all_slopes"


class ClipAlgorithm(str, Enum):
    """Line clipping variant."""

    COHEN_SUTHERLAND = "cohen_sutherland"
    LIANG_BARSKY = "liang_barsky"


class LogLevel(str, Enum):
    """Accepted logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LineConfig(BaseModel):
    """Configuration for line rasterization."""

    default_algorithm: LineAlgorithm = Field(
        default=LineAlgorithm.DDA,
        description="Variant used when a caller does not pick one",
    )


class ClipConfig(BaseModel):
    """Configuration for line clipping."""

    default_algorithm: ClipAlgorithm = Field(
        default=ClipAlgorithm.COHEN_SUTHERLAND,
        description="Variant used when a caller does not pick one",
    )
    iteration_cap: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Cohen-Sutherland safety cap on endpoint re-intersections",
    )
    parallel_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        le=0.1,
        description="Liang-Barsky threshold below which a direction is parallel to a boundary",
    )


class ProcessingConfig(BaseModel):
    """Configuration for job processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes for batches (None = auto)",
    )
    record_trace: bool = Field(
        default=False,
        description="Record derivation traces for rasterizers (clippers always trace)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file (None = no file output)",
    )
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Console log level",
    )
    file_log_level: LogLevel = Field(
        default=LogLevel.DEBUG,
        description="File log level (more verbose)",
    )


class RasterKitSettings(BaseModel):
    """Main application settings."""

    line: LineConfig = Field(default_factory=LineConfig)
    clip: ClipConfig = Field(default_factory=ClipConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RasterKitSettings:
    """Get default application settings."""
    return RasterKitSettings()
