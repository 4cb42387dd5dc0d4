"""
Cell shapes of Cartesian grids.

Every cell of a Cartesian grid is an axis-aligned box whose corners come from
the grid topology. The shape class depends only on the parametric dimension
of the cell:

    rank 1 -> Segment     (2 vertices)
    rank 2 -> Quadrangle  (4 vertices, counter-clockwise)
    rank 3 -> Hexahedron  (8 vertices, bottom face then top face)
    rank n -> Orthotope   (2^n vertices in binary corner order)

Since the cells are axis-aligned, the measure and bounding box follow directly
from the coordinate extents of the vertices.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np

from cartmesh.geometry.point import Point
from cartmesh.utils.exceptions import DimensionMismatchError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray


class Polytope:
    """
    Axis-aligned polytope defined by an ordered list of vertices.

    Subclasses fix the parametric dimension ``paramdim``. The generic
    ``Orthotope`` takes it from the number of vertices instead.
    """

    paramdim: ClassVar[int]

    def __init__(self, vertices: Sequence[Point]):
        vertices = tuple(v if isinstance(v, Point) else Point(v) for v in vertices)
        expected = 2**self.paramdim
        if len(vertices) != expected:
            raise DimensionMismatchError(
                argument_name="vertices",
                provided_length=len(vertices),
                expected_length=expected,
                component=type(self).__name__,
            )
        embeddims = {v.dimension for v in vertices}
        if len(embeddims) != 1:
            raise ValueError(f"All vertices must have the same dimension, got {sorted(embeddims)}")
        self._vertices = vertices

    @property
    def embeddim(self) -> int:
        """Dimension of the space the polytope lives in."""
        return self._vertices[0].dimension

    def vertices(self) -> tuple[Point, ...]:
        return self._vertices

    def nvertices(self) -> int:
        return len(self._vertices)

    def _coordinate_array(self) -> NDArray:
        return np.stack([v.coordinates() for v in self._vertices])

    def centroid(self) -> Point:
        """Mean of the vertices (the box center for axis-aligned cells)."""
        return Point(self._coordinate_array().mean(axis=0), dtype=self._vertices[0].dtype)

    def boundingbox(self) -> tuple[Point, Point]:
        """Lower and upper corners of the axis-aligned bounding box."""
        coords = self._coordinate_array()
        dtype = self._vertices[0].dtype
        return Point(coords.min(axis=0), dtype=dtype), Point(coords.max(axis=0), dtype=dtype)

    def measure(self) -> float:
        """Length, area or volume of the cell."""
        lower, upper = self.boundingbox()
        extents = upper - lower
        # Degenerate axes (embeddim > paramdim) do not contribute
        extents = extents[extents > 0]
        return float(np.prod(extents))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polytope):
            return NotImplemented
        return type(self) is type(other) and self._vertices == other._vertices

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._vertices))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(v) for v in self._vertices)})"


class Segment(Polytope):
    """Line segment between two points."""

    paramdim = 1

    def length(self) -> float:
        return float(np.linalg.norm(self._vertices[1] - self._vertices[0]))

    def measure(self) -> float:
        return self.length()


class Quadrangle(Polytope):
    """Quadrilateral with vertices in counter-clockwise order."""

    paramdim = 2


class Hexahedron(Polytope):
    """Hexahedron with the bottom face first, then the top face."""

    paramdim = 3


class Orthotope(Polytope):
    """Axis-aligned box of any rank, with 2^rank vertices in binary corner order."""

    def __init__(self, vertices: Sequence[Point]):
        n = len(vertices)
        rank = n.bit_length() - 1
        if n < 2 or 2**rank != n:
            raise DimensionMismatchError(
                argument_name="vertices",
                provided_length=n,
                expected_length=2 ** max(rank, 1),
                component="Orthotope",
                context="vertex count must be a power of two",
            )
        self._paramdim = rank
        super().__init__(vertices)

    @property
    def paramdim(self) -> int:
        return self._paramdim


_POLYTOPE_TYPES: dict[int, type[Polytope]] = {
    1: Segment,
    2: Quadrangle,
    3: Hexahedron,
}


def polytope_type(rank: int) -> type[Polytope]:
    """
    Shape class of a box cell with parametric dimension ``rank``.

    Args:
        rank: Number of cell axes (>= 1)

    Returns:
        Segment, Quadrangle, Hexahedron, or Orthotope for rank >= 4
    """
    if rank < 1:
        raise ValueError(f"Polytope rank must be positive, got {rank}")
    return _POLYTOPE_TYPES.get(rank, Orthotope)
