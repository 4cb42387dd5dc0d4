"""
Unit tests for GridTopology.

Tests:
- Element and vertex counts
- Linear <-> Cartesian index conversion (1-based, C order)
- Element connectivity and shape classes
"""

import pytest

from cartmesh.geometry import Hexahedron, Orthotope, Quadrangle, Segment
from cartmesh.geometry.topology import Connectivity, GridTopology, corner_offsets
from cartmesh.utils.exceptions import IndexOutOfRangeError, InvalidDimensionsError


class TestCounts:
    """Test sizes and counts."""

    def test_2d_counts(self) -> None:
        topo = GridTopology((2, 3))

        assert topo.size() == (2, 3)
        assert topo.vertex_size() == (3, 4)
        assert topo.nelements() == 6
        assert topo.nvertices() == 12
        assert topo.dimension == 2

    def test_invalid_dims_raise(self) -> None:
        with pytest.raises(InvalidDimensionsError):
            GridTopology((2, 0))
        with pytest.raises(InvalidDimensionsError):
            GridTopology(())

    def test_equality(self) -> None:
        assert GridTopology((2, 3)) == GridTopology([2, 3])
        assert GridTopology((2, 3)) != GridTopology((3, 2))
        assert hash(GridTopology((2, 3))) == hash(GridTopology((2, 3)))


class TestIndexConversion:
    """Test linear/Cartesian index conversion."""

    def test_element_indices_c_order(self) -> None:
        topo = GridTopology((2, 3))
        carts = [topo.cartesian_element_index(i) for i in range(1, 7)]

        assert carts == [(1, 1), (1, 2), (1, 3), (2, 1), (2, 2), (2, 3)]

    def test_round_trip(self) -> None:
        topo = GridTopology((3, 2, 4))

        for ind in range(1, topo.nelements() + 1):
            assert topo.linear_element_index(topo.cartesian_element_index(ind)) == ind
        for ind in range(1, topo.nvertices() + 1):
            assert topo.linear_vertex_index(topo.cartesian_vertex_index(ind)) == ind

    def test_last_vertex(self) -> None:
        topo = GridTopology((2, 3))

        assert topo.cartesian_vertex_index(topo.nvertices()) == (3, 4)

    def test_out_of_range(self) -> None:
        topo = GridTopology((2, 2))

        with pytest.raises(IndexOutOfRangeError):
            topo.cartesian_element_index(0)
        with pytest.raises(IndexOutOfRangeError):
            topo.cartesian_element_index(5)
        with pytest.raises(IndexOutOfRangeError, match="Vertex index 10"):
            topo.cartesian_vertex_index(10)


class TestConnectivity:
    """Test element connectivity."""

    def test_quadrangle_connectivity(self) -> None:
        topo = GridTopology((2, 3))
        connectivity = topo.element(1)

        assert isinstance(connectivity, Connectivity)
        assert connectivity.indices == (1, 5, 6, 2)
        assert connectivity.pltype is Quadrangle
        assert len(connectivity) == 4

    def test_segment_connectivity(self) -> None:
        topo = GridTopology((5,))

        assert topo.element_vertex_indices(3) == (3, 4)
        assert topo.pltype() is Segment

    def test_hexahedron_connectivity(self) -> None:
        topo = GridTopology((1, 1, 1))

        # vertex size (2, 2, 2): linear index = 4*i + 2*j + k + 1 (0-based i, j, k)
        assert topo.element_vertex_indices(1) == (1, 5, 7, 3, 2, 6, 8, 4)
        assert topo.pltype() is Hexahedron

    def test_high_rank_uses_orthotope(self) -> None:
        topo = GridTopology((1, 1, 1, 1))

        assert topo.pltype() is Orthotope
        assert len(topo.element(1)) == 16

    def test_corner_offsets(self) -> None:
        assert corner_offsets(1) == ((0,), (1,))
        assert corner_offsets(2) == ((0, 0), (1, 0), (1, 1), (0, 1))
        assert len(corner_offsets(3)) == 8
        assert len(set(corner_offsets(4))) == 16
