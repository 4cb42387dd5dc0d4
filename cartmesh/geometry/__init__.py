"""
Geometry package for cartmesh.

Key Components:
- CartesianGrid: Regular N-dimensional grid of axis-aligned cells
- GridTopology: Cell/vertex counts and connectivity of a grid
- Point: Immutable point with numpy-backed coordinates
- Segment, Quadrangle, Hexahedron, Orthotope: Cell shapes
- Mesh: Abstract base class of all meshes (in base.py)
"""

from __future__ import annotations

from .base import Mesh
from .grids import (
    CartesianGrid,
    IndexRange,
    from_bounds,
    from_dims,
    from_spacing,
)
from .point import Point
from .polytopes import Hexahedron, Orthotope, Polytope, Quadrangle, Segment, polytope_type
from .protocol import GeometryType, MeshProtocol
from .topology import Connectivity, GridTopology

__all__ = [
    # Meshes
    "CartesianGrid",
    "Mesh",
    "MeshProtocol",
    "GeometryType",
    "from_bounds",
    "from_dims",
    "from_spacing",
    # Indexing and topology
    "Connectivity",
    "GridTopology",
    "IndexRange",
    # Primitives
    "Point",
    "Polytope",
    "Segment",
    "Quadrangle",
    "Hexahedron",
    "Orthotope",
    "polytope_type",
]
