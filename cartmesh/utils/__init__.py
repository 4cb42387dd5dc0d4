"""Utilities shared across cartmesh: exceptions and logging."""

from __future__ import annotations

from .exceptions import (
    CartMeshError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionsError,
    InvalidDtypeError,
    InvalidSpacingError,
)
from .mesh_logging import configure_logging, get_logger

__all__ = [
    "CartMeshError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "InvalidDimensionsError",
    "InvalidDtypeError",
    "InvalidSpacingError",
    "configure_logging",
    "get_logger",
]
