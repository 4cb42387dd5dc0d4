"""
Immutable points in N-dimensional Euclidean space.

A Point is an ordered tuple of real coordinates backed by a read-only numpy
array. Differences of points are plain numpy vectors; adding or subtracting a
vector to a point gives a new point.

Example:
    >>> p = Point(1.0, 2.0)
    >>> q = Point([0.5, 0.5])
    >>> p - q
    array([0.5, 1.5])
    >>> q + np.array([1.0, 0.0])
    Point(1.5, 0.5)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import ArrayLike, DTypeLike, NDArray


class Point:
    """
    Point with ``Dim`` coordinates of a floating dtype.

    Accepts either separate coordinates ``Point(x, y, z)`` or a single sequence
    ``Point((x, y, z))``. Integer input is promoted to ``float64`` unless a
    dtype is given.
    """

    __slots__ = ("_coords",)

    def __init__(self, *coords: Any, dtype: DTypeLike | None = None):
        if len(coords) == 1 and np.ndim(coords[0]) == 1:
            coords = coords[0]
        array = np.asarray(coords, dtype=dtype)
        if array.ndim != 1 or array.size == 0:
            raise ValueError(f"Point needs at least one coordinate, got shape {array.shape}")
        if dtype is None and not np.issubdtype(array.dtype, np.floating):
            array = array.astype(np.float64)
        else:
            array = array.copy()
        array.flags.writeable = False
        self._coords = array

    @property
    def dimension(self) -> int:
        """Number of coordinates."""
        return self._coords.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._coords.dtype

    def coordinates(self) -> NDArray:
        """Read-only coordinate array of shape (dimension,)."""
        return self._coords

    def isapprox(self, other: Point, atol: float = 1e-10) -> bool:
        """Check whether two points coincide up to ``atol`` in every coordinate."""
        return isinstance(other, Point) and self.dimension == other.dimension and bool(
            np.allclose(self._coords, other._coords, rtol=0.0, atol=atol)
        )

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __sub__(self, other: Point | ArrayLike) -> NDArray | Point:
        if isinstance(other, Point):
            return self._coords - other._coords
        return Point(self._coords - np.asarray(other), dtype=self.dtype)

    def __add__(self, other: ArrayLike) -> Point:
        if isinstance(other, Point):
            return NotImplemented
        return Point(self._coords + np.asarray(other), dtype=self.dtype)

    __radd__ = __add__

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.dimension

    def __getitem__(self, key):
        return self._coords[key]

    def __iter__(self) -> Iterator:
        return iter(self._coords.tolist())

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._coords.copy()
        return self._coords.astype(dtype)

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.dimension == other.dimension and bool(np.array_equal(self._coords, other._coords))

    def __hash__(self) -> int:
        return hash(tuple(self._coords.tolist()))

    def __repr__(self) -> str:
        return f"Point({', '.join(repr(c) for c in self._coords.tolist())})"

    __str__ = __repr__
