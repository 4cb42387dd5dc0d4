"""
Combinatorial topology of Cartesian grids.

A GridTopology knows only the number of cells along each axis. From that it
derives element and vertex counts, converts between linear and Cartesian
indices, and lists the vertices bounding each element. It carries no
coordinates; those come from the grid that owns the topology.

Index conventions:
    - Cartesian cell indices run 1..dims[k], vertex indices 1..dims[k]+1
    - Linear indices run 1..count
    - Linear <-> Cartesian conversion uses C order (last axis fastest)
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from itertools import product
from math import prod
from typing import TYPE_CHECKING

import numpy as np

from cartmesh.geometry.polytopes import polytope_type
from cartmesh.utils.exceptions import validate_dims, validate_linear_index, validate_same_length

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cartmesh.geometry.polytopes import Polytope


@dataclass(frozen=True)
class Connectivity:
    """Ordered vertex indices of one element together with its shape class."""

    indices: tuple[int, ...]
    pltype: type[Polytope]

    def __len__(self) -> int:
        return len(self.indices)


@cache
def corner_offsets(rank: int) -> tuple[tuple[int, ...], ...]:
    """
    Unit offsets of the corners of a rank-``rank`` box, in polytope vertex order.

    Segments and orthotopes use binary order. Quadrangles go counter-clockwise
    and hexahedra list the bottom face counter-clockwise, then the top face.
    """
    if rank == 2:
        return ((0, 0), (1, 0), (1, 1), (0, 1))
    if rank == 3:
        face = ((0, 0), (1, 0), (1, 1), (0, 1))
        return tuple((i, j, 0) for i, j in face) + tuple((i, j, 1) for i, j in face)
    return tuple(product((0, 1), repeat=rank))


class GridTopology:
    """
    Topology of a grid with ``dims[k]`` cells along axis ``k``.

    Example:
        >>> topo = GridTopology((2, 3))
        >>> topo.nelements(), topo.nvertices()
        (6, 12)
        >>> topo.cartesian_element_index(4)
        (2, 1)
        >>> topo.element_vertex_indices(1)
        (1, 5, 6, 2)
    """

    __slots__ = ("_dims",)

    def __init__(self, dims: Sequence[int]):
        self._dims = validate_dims(dims, component="GridTopology")

    @property
    def dimension(self) -> int:
        return len(self._dims)

    def size(self) -> tuple[int, ...]:
        """Number of cells along each axis."""
        return self._dims

    def vertex_size(self) -> tuple[int, ...]:
        """Number of vertices along each axis."""
        return tuple(n + 1 for n in self._dims)

    def nelements(self) -> int:
        return prod(self._dims)

    def nvertices(self) -> int:
        return prod(self.vertex_size())

    def pltype(self) -> type[Polytope]:
        """Shape class shared by all elements."""
        return polytope_type(self.dimension)

    # ------------------------------------------------------------------
    # Index conversion
    # ------------------------------------------------------------------

    def cartesian_element_index(self, ind: int) -> tuple[int, ...]:
        validate_linear_index(ind, self.nelements(), what="element", component="GridTopology")
        return _unravel(ind, self._dims)

    def linear_element_index(self, cart: Sequence[int]) -> int:
        validate_same_length(self.dimension, component="GridTopology", index=cart)
        return _ravel(cart, self._dims)

    def cartesian_vertex_index(self, ind: int) -> tuple[int, ...]:
        validate_linear_index(ind, self.nvertices(), what="vertex", component="GridTopology")
        return _unravel(ind, self.vertex_size())

    def linear_vertex_index(self, cart: Sequence[int]) -> int:
        validate_same_length(self.dimension, component="GridTopology", index=cart)
        return _ravel(cart, self.vertex_size())

    # ------------------------------------------------------------------
    # Connectivity
    # ------------------------------------------------------------------

    def element_vertex_indices(self, ind: int) -> tuple[int, ...]:
        """Linear vertex indices bounding element ``ind``, in polytope order."""
        cell = self.cartesian_element_index(ind)
        vsize = self.vertex_size()
        return tuple(
            _ravel(tuple(c + o for c, o in zip(cell, offset, strict=True)), vsize)
            for offset in corner_offsets(self.dimension)
        )

    def element(self, ind: int) -> Connectivity:
        return Connectivity(self.element_vertex_indices(ind), self.pltype())

    # ------------------------------------------------------------------
    # Magic
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridTopology):
            return NotImplemented
        return self._dims == other._dims

    def __hash__(self) -> int:
        return hash(self._dims)

    def __repr__(self) -> str:
        return f"GridTopology({self._dims})"


def _unravel(ind: int, shape: tuple[int, ...]) -> tuple[int, ...]:
    return tuple(int(i) + 1 for i in np.unravel_index(ind - 1, shape))


def _ravel(cart: Sequence[int], shape: tuple[int, ...]) -> int:
    return int(np.ravel_multi_index(tuple(int(c) - 1 for c in cart), shape)) + 1
