"""
Geometry protocol for cartmesh meshes.

Defines the geometry type enumeration and the structural protocol any mesh
must satisfy to be consumed by code that only needs element-level access.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from cartmesh.geometry.point import Point
    from cartmesh.geometry.polytopes import Polytope


class GeometryType(Enum):
    """
    Enumeration of supported geometry types.

    Attributes:
        CARTESIAN_GRID: Regular rectilinear grid of axis-aligned boxes
    """

    CARTESIAN_GRID = "cartesian_grid"


@runtime_checkable
class MeshProtocol(Protocol):
    """
    Protocol that all meshes must satisfy.

    Core methods:
        - dimension: int - Spatial dimension
        - geometry_type: GeometryType - Type of geometry
        - nelements() / nvertices() - Element and vertex counts
        - element(ind) / centroid(ind) - Per-element queries (1-based)
        - vertices() - Iterator over all vertex points
    """

    @property
    def dimension(self) -> int:
        """Spatial dimension of the mesh."""
        ...

    @property
    def geometry_type(self) -> GeometryType:
        """Type of geometry."""
        ...

    def nelements(self) -> int: ...

    def nvertices(self) -> int: ...

    def element(self, ind: int) -> Polytope: ...

    def centroid(self, ind: int) -> Point: ...

    def vertices(self) -> Iterator[Point]: ...
