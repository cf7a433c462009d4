"""Utility functions for charrom.

This module provides logging setup and import progress tracking.
"""

from charrom.utils.logging import (
    ImportLogger,
    ImportStats,
    configure_logging,
)

__all__ = [
    "ImportLogger",
    "ImportStats",
    "configure_logging",
]
