"""
Logging utilities for cartmesh.

Usage:
    >>> from cartmesh.utils.mesh_logging import get_logger, configure_logging
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.debug("Building grid...")
"""

from __future__ import annotations

from .logger import (
    LoggedOperation,
    LogSettings,
    MeshFormatter,
    MeshLogger,
    configure_development_logging,
    configure_logging,
    get_logger,
)

__all__ = [
    "configure_development_logging",
    "configure_logging",
    "get_logger",
    "LoggedOperation",
    "LogSettings",
    "MeshFormatter",
    "MeshLogger",
]
