"""
cartmesh: regular N-dimensional Cartesian grids.

Structured discretizations of space built from uniform axis-aligned cells,
with index-to-coordinate transforms, per-cell shapes and centroids, and
zero-copy sub-grid extraction by index ranges.

Quick start:
    >>> from cartmesh import CartesianGrid, from_bounds
    >>> grid = CartesianGrid((4, 4), (0.0, 0.0), (1.0, 1.0))
    >>> grid[2:3, 2:3].minimum()
    Point(1.0, 1.0)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cartmesh")  # Matches the name in pyproject.toml
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0-dev"

from .config import CartesianGridConfig, GridForm  # noqa: E402
from .geometry import (  # noqa: E402
    CartesianGrid,
    GeometryType,
    GridTopology,
    Hexahedron,
    IndexRange,
    Mesh,
    Orthotope,
    Point,
    Polytope,
    Quadrangle,
    Segment,
    from_bounds,
    from_dims,
    from_spacing,
)
from .utils.exceptions import (  # noqa: E402
    CartMeshError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionsError,
    InvalidDtypeError,
    InvalidSpacingError,
)
from .utils.mesh_logging import configure_logging, get_logger  # noqa: E402

__all__ = [
    "__version__",
    # Grids
    "CartesianGrid",
    "CartesianGridConfig",
    "GridForm",
    "from_bounds",
    "from_dims",
    "from_spacing",
    # Geometry primitives
    "GeometryType",
    "GridTopology",
    "IndexRange",
    "Mesh",
    "Point",
    "Polytope",
    "Segment",
    "Quadrangle",
    "Hexahedron",
    "Orthotope",
    # Errors
    "CartMeshError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "InvalidDimensionsError",
    "InvalidDtypeError",
    "InvalidSpacingError",
    # Logging
    "configure_logging",
    "get_logger",
]
