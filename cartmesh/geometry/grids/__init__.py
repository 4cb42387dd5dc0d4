"""
Cartesian grid geometries.

This module provides regular N-dimensional grids of axis-aligned cells, the
builders that normalize the different construction forms, and inclusive index
ranges used for sub-grid extraction.
"""

from .cartesian_grid import (
    DEFAULT_DTYPE,
    DEFAULT_OFFSET_INDEX,
    DEFAULT_ORIGIN_VALUE,
    DEFAULT_RESOLUTION,
    DEFAULT_SPACING_VALUE,
    CartesianGrid,
    from_bounds,
    from_dims,
    from_spacing,
)
from .index_range import IndexRange

__all__ = [
    "CartesianGrid",
    "DEFAULT_DTYPE",
    "DEFAULT_OFFSET_INDEX",
    "DEFAULT_ORIGIN_VALUE",
    "DEFAULT_RESOLUTION",
    "DEFAULT_SPACING_VALUE",
    "IndexRange",
    "from_bounds",
    "from_dims",
    "from_spacing",
]
