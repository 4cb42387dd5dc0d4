"""
Regular Cartesian grids of axis-aligned boxes.

A CartesianGrid is fully described by four per-axis quantities:

    dims     number of cells along each axis
    origin   position of the vertex whose integer index equals ``offset``
    spacing  cell size along each axis
    offset   integer vertex index sitting at ``origin``

Every geometric query goes through a single coordinate transform:

    point[k] = origin[k] + (idx[k] - offset[k]) * spacing[k]

Because points are expressed relative to ``offset``, extracting a sub-grid only
changes ``dims`` and ``offset``. Origin and spacing are carried over unchanged.

Construction forms:
    CartesianGrid(dims, origin, spacing, offset)   canonical, validated
    from_spacing(start, finish, spacing)           dims rounded up to cover [start, finish]
    from_bounds(start, finish, dims=...)           spacing = (finish - start) / dims
    from_dims(*dims, dtype=...)                    unit cells at the zero origin

Examples:
    >>> # 3D grid with 100x100x50 hexahedra
    >>> grid = from_dims(100, 100, 50)

    >>> # 2D grid with 100x100 quadrangles and origin at (10., 20.)
    >>> grid = CartesianGrid((100, 100), (10.0, 20.0), (1.0, 1.0))

    >>> # 1D grid from -1 to 1 with 100 segments
    >>> grid = from_bounds((-1.0,), (1.0,), dims=(100,))
"""

from __future__ import annotations

import logging
from itertools import product
from operator import index as as_index
from typing import TYPE_CHECKING, Any

import numpy as np

from cartmesh.geometry.base import Mesh
from cartmesh.geometry.grids.index_range import IndexRange
from cartmesh.geometry.point import Point
from cartmesh.geometry.protocol import GeometryType
from cartmesh.geometry.topology import GridTopology, corner_offsets
from cartmesh.utils.exceptions import (
    DimensionMismatchError,
    InvalidDtypeError,
    validate_dims,
    validate_linear_index,
    validate_same_length,
    validate_spacing,
)
from cartmesh.utils.mesh_logging import LoggedOperation, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from numpy.typing import ArrayLike, DTypeLike, NDArray

    from cartmesh.geometry.polytopes import Polytope

logger = get_logger(__name__)

# Origin sits at the first vertex along every axis
DEFAULT_OFFSET_INDEX = 1
# Cells per axis for from_bounds()
DEFAULT_RESOLUTION = 100
DEFAULT_ORIGIN_VALUE = 0
DEFAULT_SPACING_VALUE = 1
DEFAULT_DTYPE = np.float64


class CartesianGrid(Mesh):
    """
    Regular N-dimensional grid of uniform axis-aligned cells.

    The grid is immutable. Sub-grids obtained by slicing are new grids that
    share nothing mutable with their parent.

    Attributes:
        origin: Point at vertex index ``offset``
        spacing: Cell size per axis
        offset: Integer vertex index located at ``origin``
        topology: GridTopology holding the cell counts
        dtype: Floating point type of all coordinates

    Example:
        >>> grid = CartesianGrid((2, 2), (0.0, 0.0), (1.0, 1.0))
        >>> grid.minimum(), grid.maximum()
        (Point(0.0, 0.0), Point(2.0, 2.0))
        >>> grid.element(1)
        Quadrangle(Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0), Point(0.0, 1.0))
        >>> sub = grid[2:2, 1:2]  # inclusive index ranges
        >>> sub.size()
        (1, 2)
    """

    __slots__ = ("_dtype", "_offset", "_origin", "_spacing", "_topology")

    def __init__(
        self,
        dims: Sequence[int],
        origin: Point | Sequence[float],
        spacing: Sequence[float],
        offset: Sequence[int] | None = None,
        dtype: DTypeLike | None = None,
    ):
        """
        Initialize Cartesian grid.

        Args:
            dims: Number of cells along each axis (all > 0)
            origin: Point at vertex index ``offset``
            spacing: Cell size along each axis (all > 0)
            offset: Vertex index at ``origin``, defaults to all ones
            dtype: Floating coordinate dtype, inferred from origin/spacing if omitted

        Raises:
            InvalidDimensionsError: If any dims[k] is not a positive integer
            InvalidSpacingError: If any spacing[k] <= 0
            InvalidDtypeError: If dtype is not a floating type
            DimensionMismatchError: If the per-axis arguments differ in length
        """
        dims = validate_dims(dims, component="CartesianGrid")
        ndim = len(dims)
        if offset is None:
            offset = (DEFAULT_OFFSET_INDEX,) * ndim
        validate_same_length(ndim, component="CartesianGrid", origin=origin, spacing=spacing, offset=offset)
        validate_spacing(spacing, component="CartesianGrid")

        if dtype is None:
            dtype = _infer_dtype(origin, spacing)
        dtype = np.dtype(dtype)
        if not np.issubdtype(dtype, np.floating):
            raise InvalidDtypeError(dtype.name, component="CartesianGrid")

        origin_coords = origin.coordinates() if isinstance(origin, Point) else origin
        self._origin = Point(np.asarray(origin_coords, dtype=dtype), dtype=dtype)
        self._spacing = _readonly(np.asarray(spacing, dtype=dtype))
        self._offset = tuple(as_index(o) for o in offset)
        self._topology = GridTopology(dims)
        self._dtype = dtype

    # ============================================================================
    # Accessors
    # ============================================================================

    @property
    def origin(self) -> Point:
        return self._origin

    @property
    def spacing(self) -> tuple[float, ...]:
        return tuple(self._spacing.tolist())

    @property
    def offset(self) -> tuple[int, ...]:
        return self._offset

    @property
    def topology(self) -> GridTopology:
        return self._topology

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def dimension(self) -> int:
        return self._topology.dimension

    @property
    def geometry_type(self) -> GeometryType:
        """Type of geometry (always CARTESIAN_GRID)."""
        return GeometryType.CARTESIAN_GRID

    def size(self) -> tuple[int, ...]:
        """Number of cells along each axis."""
        return self._topology.size()

    def nelements(self) -> int:
        return self._topology.nelements()

    def nvertices(self) -> int:
        return self._topology.nvertices()

    def element_type(self) -> type[Polytope]:
        """Shape class of the cells (Segment, Quadrangle, Hexahedron or Orthotope)."""
        return self._topology.pltype()

    def get_grid_spacing(self) -> list[float]:
        """Grid spacing per dimension as a list."""
        return self._spacing.tolist()

    def get_grid_shape(self) -> tuple[int, ...]:
        """Number of cells per dimension."""
        return self.size()

    # ============================================================================
    # Coordinate transform
    # ============================================================================

    def index_to_point(self, idx: Sequence[int]) -> Point:
        """
        Map an integer vertex index to its position.

        No bounds checking is done: any integer index is mapped, including
        indices outside ``1..dims[k]+1``.

        Args:
            idx: Cartesian vertex index, one integer per axis

        Returns:
            origin + (idx - offset) * spacing
        """
        validate_same_length(self.dimension, component="CartesianGrid", idx=idx)
        shift = np.asarray(idx, dtype=np.int64) - np.asarray(self._offset, dtype=np.int64)
        return Point(self._origin.coordinates() + shift * self._spacing, dtype=self._dtype)

    def index_to_points(self, indices: ArrayLike) -> NDArray:
        """
        Vectorized :meth:`index_to_point`.

        Args:
            indices: Integer array of shape (n, dimension)

        Returns:
            Array of shape (n, dimension) with one point per row
        """
        indices = np.asarray(indices, dtype=np.int64)
        if indices.ndim != 2 or indices.shape[1] != self.dimension:
            raise DimensionMismatchError(
                argument_name="indices",
                provided_length=indices.shape[-1] if indices.ndim else 0,
                expected_length=self.dimension,
                component="CartesianGrid",
                context=f"expected shape (n, {self.dimension}), got {indices.shape}",
            )
        shift = indices - np.asarray(self._offset, dtype=np.int64)
        return (self._origin.coordinates() + shift * self._spacing).astype(self._dtype, copy=False)

    # ============================================================================
    # Bounds
    # ============================================================================

    def minimum(self) -> Point:
        """Lower corner: the vertex with index 1 along every axis."""
        return self.index_to_point((1,) * self.dimension)

    def maximum(self) -> Point:
        """Upper corner: the vertex with index dims[k] + 1 along every axis."""
        return self.index_to_point(self._topology.vertex_size())

    def extrema(self) -> tuple[Point, Point]:
        return self.minimum(), self.maximum()

    def get_bounds(self) -> tuple[NDArray, NDArray]:
        """
        Return bounding box of grid.

        Returns:
            (min_coords, max_coords) tuple of arrays

        Examples:
            >>> grid = CartesianGrid((10, 20), (0.0, 0.0), (0.1, 0.1))
            >>> min_coords, max_coords = grid.get_bounds()
            >>> max_coords
            array([1., 2.])
        """
        lower, upper = self.extrema()
        return np.array(lower.coordinates()), np.array(upper.coordinates())

    def boundingbox(self) -> Polytope:
        """The whole grid as a single box of the cell shape class."""
        lower, upper = self.extrema()
        extent = upper - lower
        corners = [lower + np.asarray(o) * extent for o in corner_offsets(self.dimension)]
        return self.element_type()(corners)

    # ============================================================================
    # Vertices and elements
    # ============================================================================

    def vertices(self) -> Iterator[Point]:
        """
        Iterate over all vertices in C order of their Cartesian indices.

        A fresh generator is returned on every call.
        """
        ranges = [range(1, n + 1) for n in self._topology.vertex_size()]
        return (self.index_to_point(idx) for idx in product(*ranges))

    def vertex_array(self) -> NDArray:
        """All vertices as an (nvertices, dimension) array, in the order of :meth:`vertices`."""
        with LoggedOperation(logger, "vertex array", logging.DEBUG):
            vsize = self._topology.vertex_size()
            indices = np.indices(vsize).reshape(self.dimension, -1).T + 1
            return self.index_to_points(indices)

    def element(self, ind: int) -> Polytope:
        """
        Get cell ``ind`` as a polytope.

        Args:
            ind: Linear element index in [1, nelements()]

        Raises:
            IndexOutOfRangeError: If ind is outside [1, nelements()]
        """
        validate_linear_index(ind, self.nelements(), component="CartesianGrid")
        connectivity = self._topology.element(ind)
        points = [
            self.index_to_point(self._topology.cartesian_vertex_index(i)) for i in connectivity.indices
        ]
        return connectivity.pltype(points)

    def centroid(self, ind: int) -> Point:
        """
        Center of cell ``ind``, computed without building its vertices.

        Raises:
            IndexOutOfRangeError: If ind is outside [1, nelements()]
        """
        validate_linear_index(ind, self.nelements(), component="CartesianGrid")
        cell = np.asarray(self._topology.cartesian_element_index(ind), dtype=np.int64)
        cell_origin = self._origin.coordinates() + self._spacing / 2
        shift = cell - np.asarray(self._offset, dtype=np.int64)
        return Point(cell_origin + shift * self._spacing, dtype=self._dtype)

    def centroids(self) -> NDArray:
        """All cell centroids as an (nelements, dimension) array, row i for cell i + 1."""
        with LoggedOperation(logger, "centroids", logging.DEBUG):
            cells = np.indices(self.size()).reshape(self.dimension, -1).T + 1
            cell_origin = self._origin.coordinates() + self._spacing / 2
            shift = cells - np.asarray(self._offset, dtype=np.int64)
            return (cell_origin + shift * self._spacing).astype(self._dtype, copy=False)

    # ============================================================================
    # Sub-grids
    # ============================================================================

    def __getitem__(self, key: Any) -> CartesianGrid:
        """
        Sub-grid over inclusive index ranges.

        ``grid[2:3, 2:3]`` selects cells 2 and 3 along both axes. Each axis
        accepts an inclusive ``slice(start, stop)``, a ``(start, stop)`` pair,
        a ``range`` or a single integer. A whole ``IndexRange`` is accepted
        as well. Ranges may extend beyond the grid.

        Python passes ``grid[(2, 3)]`` exactly like ``grid[2, 3]``, so on a
        1-D grid a pair reads as two axes. Use ``grid[2:3]``,
        ``grid[((2, 3),)]`` or ``grid.view((2, 3))`` there.

        Raises:
            InvalidDimensionsError: If a range has a non-positive extent
            DimensionMismatchError: If the number of ranges differs from the dimension
        """
        irange = key if isinstance(key, IndexRange) else self._index_range(key)
        if len(irange.first) != self.dimension:
            raise DimensionMismatchError(
                argument_name="index ranges",
                provided_length=len(irange.first),
                expected_length=self.dimension,
                component="CartesianGrid",
            )

        dims = irange.shape
        offset = tuple(o - a + 1 for o, a in zip(self._offset, irange.first, strict=True))
        logger.debug("Sub-grid %s of %s: dims=%s, offset=%s", irange, self, dims, offset)
        return CartesianGrid(dims, self._origin, self._spacing, offset, dtype=self._dtype)

    def view(self, *ranges: Any) -> CartesianGrid:
        """
        Sub-grid with one range argument per axis.

        ``grid.view(r1, r2)`` is ``grid[r1, r2]``, and ``grid.view(IndexRange(...))``
        is ``grid[IndexRange(...)]``. Every other single argument is one axis, so
        ``grid.view((2, 3))`` works on 1-D grids.
        """
        if len(ranges) == 1 and isinstance(ranges[0], IndexRange):
            return self[ranges[0]]
        return self[ranges]

    @staticmethod
    def _index_range(key: Any) -> IndexRange:
        if not isinstance(key, tuple):
            key = (key,)
        bounds = [_axis_bounds(k) for k in key]
        return IndexRange(tuple(a for a, _ in bounds), tuple(b for _, b in bounds))

    # ============================================================================
    # Equality and display
    # ============================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CartesianGrid):
            return NotImplemented
        if self._topology != other._topology or not np.array_equal(self._spacing, other._spacing):
            return False
        offset_shift = np.asarray(self._offset, dtype=np.int64) - np.asarray(other._offset, dtype=np.int64)
        return bool(np.array_equal(self._origin - other._origin, offset_shift * self._spacing))

    def __hash__(self) -> int:
        return hash((self.size(), self.spacing))

    def __str__(self) -> str:
        dims = "×".join(str(n) for n in self.size())
        return f"{dims} CartesianGrid({self.dimension}, {self._dtype.name})"

    def __repr__(self) -> str:
        return (
            f"CartesianGrid(dims={self.size()}, origin={tuple(self._origin)}, "
            f"spacing={self.spacing}, offset={self._offset})"
        )

    def describe(self) -> str:
        """Multi-line summary with extrema and spacing."""
        lines = [
            str(self),
            f"  minimum: {self.minimum()}",
            f"  maximum: {self.maximum()}",
            f"  spacing: {self.spacing}",
        ]
        return "\n".join(lines)


# ============================================================================
# Builders
# ============================================================================


def from_spacing(
    start: Point | Sequence[float],
    finish: Point | Sequence[float],
    spacing: Sequence[float],
    dtype: DTypeLike | None = None,
) -> CartesianGrid:
    """
    Grid from ``start`` towards ``finish`` with a given cell size.

    The number of cells is rounded up, so the grid covers at least
    ``[start, finish]`` and may extend beyond ``finish``.

    Example:
        >>> grid = from_spacing((0.0,), (1.0,), (0.3,))
        >>> grid.size(), grid.maximum()
        ((4,), Point(1.2))
    """
    start_coords, finish_coords = _coords(start), _coords(finish)
    validate_same_length(len(start_coords), component="from_spacing", finish=finish_coords, spacing=spacing)
    validate_spacing(spacing, component="from_spacing")

    extent = finish_coords - start_coords
    dims = np.ceil(extent / np.asarray(spacing, dtype=np.float64)).astype(np.int64)
    dims = tuple(dims.tolist())

    overshoot = np.asarray(dims) * np.asarray(spacing, dtype=np.float64) - extent
    if np.any(overshoot > 0):
        logger.debug("from_spacing: dims %s overshoot finish by %s", dims, overshoot.tolist())

    if dtype is None:
        dtype = _infer_dtype(start, spacing)
    return CartesianGrid(dims, start, spacing, dtype=dtype)


def from_bounds(
    start: Point | Sequence[float],
    finish: Point | Sequence[float],
    dims: Sequence[int] | None = None,
    dtype: DTypeLike | None = None,
) -> CartesianGrid:
    """
    Grid from ``start`` to ``finish`` split into ``dims`` cells per axis.

    Args:
        start: Lower corner
        finish: Upper corner
        dims: Cells per axis, defaults to DEFAULT_RESOLUTION on every axis
        dtype: Coordinate dtype

    Example:
        >>> from_bounds((-1.0,), (1.0,), dims=(100,)).spacing
        (0.02,)
    """
    start_coords, finish_coords = _coords(start), _coords(finish)
    if dims is None:
        dims = (DEFAULT_RESOLUTION,) * len(start_coords)
    dims = validate_dims(dims, component="from_bounds")
    validate_same_length(len(start_coords), component="from_bounds", finish=finish_coords, dims=dims)

    spacing = tuple(((finish_coords - start_coords) / np.asarray(dims)).tolist())
    logger.debug("from_bounds: dims=%s, spacing=%s", dims, spacing)

    if dtype is None:
        dtype = start.dtype if isinstance(start, Point) else DEFAULT_DTYPE
    return CartesianGrid(dims, start, spacing, dtype=dtype)


def from_dims(*dims: int | Sequence[int], dtype: DTypeLike = DEFAULT_DTYPE) -> CartesianGrid:
    """
    Grid of unit cells with the first vertex at the zero origin.

    Accepts a tuple ``from_dims((10, 20))`` or separate sizes ``from_dims(10, 20)``.
    """
    if len(dims) == 1 and not _is_integer(dims[0]):
        dims = tuple(dims[0])
    ndim = len(dims)
    origin = np.full(ndim, DEFAULT_ORIGIN_VALUE, dtype=dtype)
    spacing = np.full(ndim, DEFAULT_SPACING_VALUE, dtype=dtype)
    return CartesianGrid(dims, origin, spacing, dtype=dtype)


# ============================================================================
# Helpers
# ============================================================================


def _readonly(array: NDArray) -> NDArray:
    array = array.copy()
    array.flags.writeable = False
    return array


def _coords(point: Point | Sequence[float]) -> NDArray:
    if isinstance(point, Point):
        return point.coordinates().astype(np.float64)
    return np.asarray(point, dtype=np.float64)


def _infer_dtype(origin: Point | Sequence[float], spacing: Sequence[float]) -> np.dtype:
    if isinstance(origin, Point):
        return origin.dtype
    dtype = np.result_type(np.asarray(origin), np.asarray(spacing))
    if not np.issubdtype(dtype, np.floating):
        return np.dtype(DEFAULT_DTYPE)
    return dtype


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _axis_bounds(key: Any) -> tuple[int, int]:
    """Inclusive (start, stop) of one axis of a slicing key."""
    if isinstance(key, slice):
        if key.start is None or key.stop is None:
            raise ValueError(f"Index ranges need explicit start and stop, got {key}")
        if key.step not in (None, 1):
            raise ValueError(f"Index ranges must have unit step, got {key}")
        return as_index(key.start), as_index(key.stop)
    if isinstance(key, range):
        if key.step != 1:
            raise ValueError(f"Index ranges must have unit step, got {key}")
        return key.start, key.stop - 1
    if _is_integer(key):
        return int(key), int(key)
    if isinstance(key, tuple) and len(key) == 2:
        return as_index(key[0]), as_index(key[1])
    raise TypeError(f"Unsupported index range {key!r}")
