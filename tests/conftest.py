"""
Pytest configuration and shared fixtures for the cartmesh test suite.
"""

import pytest

import numpy as np

from cartmesh import CartesianGrid, from_dims

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "mathematical: Mathematical property validation tests")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/mathematical/" in test_path:
            item.add_marker(pytest.mark.mathematical)

        if "large" in item.name or "slow" in item.name:
            item.add_marker(pytest.mark.slow)


# =============================================================================
# Grid Fixtures
# =============================================================================


@pytest.fixture
def unit_square_grid():
    """2x2 grid of unit cells with the origin at zero."""
    return CartesianGrid((2, 2), (0.0, 0.0), (1.0, 1.0))


@pytest.fixture
def grid_4x4():
    """4x4 grid of unit cells with the origin at zero."""
    return from_dims(4, 4)


@pytest.fixture
def shifted_grid_3d():
    """3D grid with non-trivial origin, spacing and offset."""
    return CartesianGrid((3, 2, 4), (1.0, -2.0, 0.5), (0.5, 2.0, 0.25), offset=(2, 0, -1))


@pytest.fixture(
    params=[
        ((5,), (0.0,), (0.5,), (1,)),
        ((3, 4), (1.0, 2.0), (0.5, 0.25), (1, 1)),
        ((2, 3, 2), (-1.0, 0.0, 1.0), (1.0, 2.0, 0.5), (0, 3, -2)),
        ((2, 1, 2, 1), (0.0, 0.0, 0.0, 0.0), (1.0, 1.0, 1.0, 1.0), (1, 1, 1, 1)),
    ],
    ids=["1d", "2d", "3d", "4d"],
)
def any_grid(request):
    """Parametrized grids of dimension 1 through 4."""
    dims, origin, spacing, offset = request.param
    return CartesianGrid(dims, origin, spacing, offset)


@pytest.fixture
def rng():
    """Seeded random generator for reproducible property tests."""
    return np.random.default_rng(42)
