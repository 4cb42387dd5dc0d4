"""
Unit tests for the Pydantic grid configuration.

Tests:
- Form detection for every construction form
- Rejection of ambiguous or incomplete field combinations
- dtype normalization
- build() and from_grid()
"""

import pytest

import numpy as np
from pydantic import ValidationError

from cartmesh import CartesianGrid, InvalidDimensionsError, InvalidSpacingError
from cartmesh.config import CartesianGridConfig, GridForm


class TestFormDetection:
    """Test which construction form a configuration describes."""

    def test_canonical(self) -> None:
        config = CartesianGridConfig(dims=(2, 3), origin=(0.0, 1.0), spacing=(0.5, 0.5))
        assert config.form is GridForm.CANONICAL

    def test_canonical_with_offset(self) -> None:
        config = CartesianGridConfig(dims=(2,), origin=(0.0,), spacing=(1.0,), offset=(3,))
        assert config.form is GridForm.CANONICAL

    def test_start_finish_spacing(self) -> None:
        config = CartesianGridConfig(start=(0.0, 0.0), finish=(1.0, 2.0), spacing=(0.5, 0.5))
        assert config.form is GridForm.START_FINISH_SPACING

    def test_start_finish_dims(self) -> None:
        config = CartesianGridConfig(start=(0.0,), finish=(1.0,), dims=(4,))
        assert config.form is GridForm.START_FINISH_DIMS

    def test_start_finish_default_dims(self) -> None:
        config = CartesianGridConfig(start=(0.0,), finish=(1.0,))
        assert config.form is GridForm.START_FINISH_DIMS

    def test_dims_only(self) -> None:
        config = CartesianGridConfig(dims=[10, 20])
        assert config.form is GridForm.DIMS_ONLY
        assert config.dims == (10, 20)


class TestInvalidCombinations:
    """Test rejection of field combinations that match no form."""

    @pytest.mark.parametrize(
        ("fields", "message"),
        [
            ({"start": (0.0,)}, "start and finish"),
            ({"start": (0.0,), "finish": (1.0,), "origin": (0.0,)}, "origin/offset"),
            ({"start": (0.0,), "finish": (1.0,), "spacing": (0.1,), "dims": (10,)}, "not both"),
            ({}, "dims is required"),
            ({"dims": (2,), "origin": (0.0,)}, "origin and spacing"),
            ({"dims": (2,), "offset": (1,)}, "offset requires"),
            ({"dims": (2, 2), "origin": (0.0,), "spacing": (1.0, 1.0)}, "same length"),
            ({"dims": ()}, "must not be empty"),
        ],
    )
    def test_rejected(self, fields, message) -> None:
        with pytest.raises(ValidationError, match=message):
            CartesianGridConfig(**fields)

    def test_frozen(self) -> None:
        config = CartesianGridConfig(dims=(2,))
        with pytest.raises(ValidationError):
            config.dims = (3,)


class TestDtype:
    """Test dtype validation."""

    def test_default(self) -> None:
        assert CartesianGridConfig(dims=(2,)).dtype == "float64"

    def test_normalized(self) -> None:
        assert CartesianGridConfig(dims=(2,), dtype="f4").dtype == "float32"

    def test_integer_rejected(self) -> None:
        with pytest.raises(ValidationError, match="floating"):
            CartesianGridConfig(dims=(2,), dtype="int64")

    def test_unknown_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown dtype"):
            CartesianGridConfig(dims=(2,), dtype="not-a-dtype")


class TestBuild:
    """Test building grids from configurations."""

    def test_build_canonical(self) -> None:
        config = CartesianGridConfig(dims=(2, 3), origin=(1.0, 2.0), spacing=(0.5, 0.25), offset=(2, 1))
        grid = config.build()

        assert grid == CartesianGrid((2, 3), (1.0, 2.0), (0.5, 0.25), (2, 1))
        assert grid.offset == (2, 1)

    def test_build_start_finish_spacing(self) -> None:
        grid = CartesianGridConfig(start=(0.0, 0.0), finish=(1.0, 2.0), spacing=(0.5, 0.5)).build()

        assert grid.size() == (2, 4)
        assert grid.maximum() == grid.index_to_point((3, 5))

    def test_build_start_finish_dims(self) -> None:
        grid = CartesianGridConfig(start=(-1.0,), finish=(1.0,), dims=(4,)).build()

        assert grid.size() == (4,)
        assert grid.spacing == (0.5,)

    def test_build_default_resolution(self) -> None:
        grid = CartesianGridConfig(start=(0.0, 0.0), finish=(1.0, 1.0)).build()
        assert grid.size() == (100, 100)

    def test_build_dims_only(self) -> None:
        grid = CartesianGridConfig(dims=(3, 4), dtype="float32").build()

        assert grid.size() == (3, 4)
        assert grid.dtype == np.float32
        assert grid.spacing == (1.0, 1.0)

    def test_build_propagates_domain_errors(self) -> None:
        with pytest.raises(InvalidDimensionsError):
            CartesianGridConfig(dims=(2, 0)).build()
        with pytest.raises(InvalidSpacingError):
            CartesianGridConfig(dims=(2,), origin=(0.0,), spacing=(-1.0,)).build()

    def test_from_grid_round_trip(self, shifted_grid_3d) -> None:
        config = CartesianGridConfig.from_grid(shifted_grid_3d)

        assert config.form is GridForm.CANONICAL
        assert config.offset == shifted_grid_3d.offset
        assert config.build() == shifted_grid_3d
