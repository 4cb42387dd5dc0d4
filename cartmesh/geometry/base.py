"""
Abstract base class for meshes.

``Mesh`` fixes the element-level interface (counts, elements, centroids,
vertices, bounds) and derives bulk queries from it. Concrete meshes override
the bulk queries when they can compute them faster.

Element and vertex indices are 1-based throughout.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import NDArray

    from cartmesh.geometry.point import Point
    from cartmesh.geometry.polytopes import Polytope
    from cartmesh.geometry.protocol import GeometryType


class Mesh(ABC):
    """
    Abstract base class for all meshes.

    Subclasses must implement:
        dimension, geometry_type, nelements, nvertices, element, centroid,
        vertices, get_bounds

    Provided on top of those:
        elements, centroids, vertex_array, num_spatial_points
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Spatial dimension of the mesh."""
        ...

    @property
    @abstractmethod
    def geometry_type(self) -> GeometryType:
        """Type of geometry."""
        ...

    @abstractmethod
    def nelements(self) -> int:
        """Number of elements (cells)."""
        ...

    @abstractmethod
    def nvertices(self) -> int:
        """Number of vertices."""
        ...

    @abstractmethod
    def element(self, ind: int) -> Polytope:
        """
        Get element ``ind`` as a polytope.

        Args:
            ind: Linear element index in [1, nelements()]
        """
        ...

    @abstractmethod
    def centroid(self, ind: int) -> Point:
        """Centroid of element ``ind``."""
        ...

    @abstractmethod
    def vertices(self) -> Iterator[Point]:
        """Iterate over all vertex points."""
        ...

    @abstractmethod
    def get_bounds(self) -> tuple[NDArray, NDArray]:
        """
        Get bounding box of the mesh.

        Returns:
            (min_coords, max_coords) tuple of arrays of shape (dimension,)
        """
        ...

    @property
    def num_spatial_points(self) -> int:
        """Total number of vertices."""
        return self.nvertices()

    def elements(self) -> Iterator[Polytope]:
        """Iterate over all elements in linear index order."""
        for ind in range(1, self.nelements() + 1):
            yield self.element(ind)

    def centroids(self) -> NDArray:
        """All element centroids as an array of shape (nelements, dimension)."""
        return np.stack([self.centroid(ind).coordinates() for ind in range(1, self.nelements() + 1)])

    def vertex_array(self) -> NDArray:
        """All vertices as an array of shape (nvertices, dimension)."""
        return np.stack([p.coordinates() for p in self.vertices()])
