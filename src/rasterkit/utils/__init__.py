"""Utility functions for rasterkit.

This module provides utility functions including:

- Logging setup and configuration
- Job statistics collection
"""

from rasterkit.utils.logging import (
    JobLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "JobLogger",
    "ProcessingStats",
    "configure_logging",
]
