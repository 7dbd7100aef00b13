"""Utility functions for mapgeom.

This module provides utility functions including:

- Logging setup and configuration
- Spatial operation statistics
"""

from mapgeom.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
