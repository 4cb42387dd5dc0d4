"""
Mathematical property tests for Cartesian grids.

Properties are checked on randomly drawn grids. Spacings are powers of two and
origins are integers so that the exact comparisons used by grid equality are
free of rounding.
"""

import pytest

import numpy as np

from cartmesh import CartesianGrid, IndexRange

N_SAMPLES = 25


def random_grid(rng, ndim):
    dims = tuple(int(n) for n in rng.integers(1, 5, size=ndim))
    origin = tuple(float(x) for x in rng.integers(-10, 10, size=ndim))
    spacing = tuple(float(h) for h in rng.choice([0.25, 0.5, 1.0, 2.0], size=ndim))
    offset = tuple(int(o) for o in rng.integers(-3, 4, size=ndim))
    return CartesianGrid(dims, origin, spacing, offset)


@pytest.fixture(params=[1, 2, 3, 4], ids=["1d", "2d", "3d", "4d"])
def random_grids(request, rng):
    return [random_grid(rng, request.param) for _ in range(N_SAMPLES)]


class TestExtentProperties:
    """Properties of the grid extent."""

    @pytest.mark.mathematical
    def test_minimum_below_maximum(self, random_grids):
        for grid in random_grids:
            lower, upper = grid.extrema()
            assert np.all(lower.coordinates() < upper.coordinates()), grid

    @pytest.mark.mathematical
    def test_extent_is_dims_times_spacing(self, random_grids):
        for grid in random_grids:
            extent = grid.maximum() - grid.minimum()
            np.testing.assert_array_equal(extent, np.asarray(grid.size()) * np.asarray(grid.spacing))

    @pytest.mark.mathematical
    def test_centroids_inside_extent(self, random_grids):
        for grid in random_grids:
            lower, upper = grid.get_bounds()
            centroids = grid.centroids()
            assert np.all(centroids > lower) and np.all(centroids < upper)


class TestOffsetInvariance:
    """Shifting origin and offset together describes the same grid."""

    @pytest.mark.mathematical
    def test_shifted_offset_equal(self, random_grids, rng):
        for grid in random_grids:
            shift = rng.integers(-5, 6, size=grid.dimension)
            origin = grid.origin.coordinates() + shift * np.asarray(grid.spacing)
            offset = tuple(int(o) for o in np.asarray(grid.offset) + shift)
            shifted = CartesianGrid(grid.size(), origin, grid.spacing, offset)

            assert shifted == grid
            assert hash(shifted) == hash(grid)
            assert shifted.minimum() == grid.minimum()
            assert shifted.maximum() == grid.maximum()

    @pytest.mark.mathematical
    def test_full_extent_slice_equal(self, random_grids):
        for grid in random_grids:
            sub = grid[IndexRange.from_shape(grid.size())]

            assert sub == grid
            assert sub.offset == grid.offset


class TestSubGridProperties:
    """Sub-grids keep the parent's geometry."""

    @pytest.mark.mathematical
    def test_sub_grid_corners(self, random_grids, rng):
        for grid in random_grids:
            first = tuple(int(rng.integers(1, n + 1)) for n in grid.size())
            last = tuple(int(rng.integers(a, n + 1)) for a, n in zip(first, grid.size(), strict=True))
            sub = grid[IndexRange(first, last)]

            assert sub.size() == tuple(b - a + 1 for a, b in zip(first, last, strict=True))
            assert sub.minimum() == grid.index_to_point(first)
            assert sub.maximum() == grid.index_to_point(tuple(b + 1 for b in last))
            assert sub.origin == grid.origin

    @pytest.mark.mathematical
    def test_sub_grid_cells_are_parent_cells(self, random_grids):
        for grid in random_grids:
            if min(grid.size()) < 2:
                continue
            sub = grid[IndexRange((2,) * grid.dimension, grid.size())]
            parent_cell = grid.topology.linear_element_index((2,) * grid.dimension)

            assert sub.element(1) == grid.element(parent_cell)


class TestVertexProperties:
    """Vertex counts and ordering."""

    @pytest.mark.mathematical
    def test_vertex_count(self, random_grids):
        for grid in random_grids:
            assert grid.nvertices() == int(np.prod(np.asarray(grid.size()) + 1))
            assert len(list(grid.vertices())) == grid.nvertices()

    @pytest.mark.mathematical
    def test_vertex_array_matches_iteration(self, random_grids):
        for grid in random_grids:
            expected = np.stack([p.coordinates() for p in grid.vertices()])
            np.testing.assert_allclose(grid.vertex_array(), expected)

    @pytest.mark.mathematical
    def test_centroid_matches_element(self, random_grids):
        for grid in random_grids:
            for ind in (1, grid.nelements()):
                assert grid.centroid(ind).isapprox(grid.element(ind).centroid())
