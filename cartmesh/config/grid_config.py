"""
Declarative Cartesian grid configuration using Pydantic.

A CartesianGridConfig describes a grid in any of the supported construction
forms. The model validator works out which form the given fields describe and
rejects ambiguous or incomplete combinations. ``build()`` then delegates to
the matching builder, so the domain checks (positive dims and spacing) stay in
the canonical CartesianGrid constructor.

Example:
    >>> config = CartesianGridConfig(start=(0.0, 0.0), finish=(1.0, 2.0), spacing=(0.5, 0.5))
    >>> config.form
    <GridForm.START_FINISH_SPACING: 'start_finish_spacing'>
    >>> config.build().size()
    (2, 4)
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cartmesh.geometry.grids import CartesianGrid, from_bounds, from_dims, from_spacing
from cartmesh.utils.mesh_logging import get_logger

logger = get_logger(__name__)


class GridForm(Enum):
    """Construction forms of a Cartesian grid."""

    CANONICAL = "canonical"
    START_FINISH_SPACING = "start_finish_spacing"
    START_FINISH_DIMS = "start_finish_dims"
    DIMS_ONLY = "dims_only"


class CartesianGridConfig(BaseModel):
    """
    Cartesian grid configuration with automatic form detection.

    Valid field combinations:
        dims, origin, spacing[, offset]   -> CANONICAL
        start, finish, spacing            -> START_FINISH_SPACING
        start, finish[, dims]             -> START_FINISH_DIMS
        dims                              -> DIMS_ONLY
    """

    dims: tuple[int, ...] | None = Field(None, description="Number of cells per axis")
    origin: tuple[float, ...] | None = Field(None, description="Position of vertex index `offset`")
    spacing: tuple[float, ...] | None = Field(None, description="Cell size per axis")
    offset: tuple[int, ...] | None = Field(None, description="Vertex index located at `origin`")
    start: tuple[float, ...] | None = Field(None, description="Lower corner for start/finish forms")
    finish: tuple[float, ...] | None = Field(None, description="Upper corner for start/finish forms")
    dtype: str = Field("float64", description="Numpy floating dtype of coordinates")

    model_config = ConfigDict(frozen=True)

    @field_validator("dtype")
    @classmethod
    def validate_dtype(cls, v: str) -> str:
        """Normalize dtype names and require a floating type."""
        try:
            dtype = np.dtype(v)
        except TypeError as e:
            raise ValueError(f"Unknown dtype '{v}'") from e
        if not np.issubdtype(dtype, np.floating):
            raise ValueError(f"dtype must be a floating type, got '{dtype.name}'")
        return dtype.name

    @model_validator(mode="after")
    def validate_form(self) -> CartesianGridConfig:
        """Check that the fields describe exactly one construction form."""
        self._detect_form()

        lengths = {
            name: len(value)
            for name, value in (
                ("dims", self.dims),
                ("origin", self.origin),
                ("spacing", self.spacing),
                ("offset", self.offset),
                ("start", self.start),
                ("finish", self.finish),
            )
            if value is not None
        }
        if len(set(lengths.values())) > 1:
            raise ValueError(f"All per-axis fields must have the same length, got {lengths}")
        if 0 in lengths.values():
            raise ValueError("Per-axis fields must not be empty")
        return self

    def _detect_form(self) -> GridForm:
        has_start, has_finish = self.start is not None, self.finish is not None
        if has_start != has_finish:
            raise ValueError("start and finish must be given together")

        if has_start:
            if self.origin is not None or self.offset is not None:
                raise ValueError("origin/offset cannot be combined with start/finish")
            if self.spacing is not None and self.dims is not None:
                raise ValueError("Give either spacing or dims with start/finish, not both")
            if self.spacing is not None:
                return GridForm.START_FINISH_SPACING
            return GridForm.START_FINISH_DIMS

        if self.dims is None:
            raise ValueError("dims is required unless start and finish are given")
        if (self.origin is None) != (self.spacing is None):
            raise ValueError("origin and spacing must be given together")
        if self.origin is not None:
            return GridForm.CANONICAL
        if self.offset is not None:
            raise ValueError("offset requires origin and spacing")
        return GridForm.DIMS_ONLY

    @property
    def form(self) -> GridForm:
        """Construction form described by this configuration."""
        return self._detect_form()

    def build(self) -> CartesianGrid:
        """
        Build the grid described by this configuration.

        Raises:
            InvalidDimensionsError: If any dims[k] <= 0
            InvalidSpacingError: If any spacing[k] <= 0
        """
        form = self.form
        logger.debug("Building CartesianGrid from %s configuration", form.value)

        if form is GridForm.CANONICAL:
            return CartesianGrid(self.dims, self.origin, self.spacing, self.offset, dtype=self.dtype)
        if form is GridForm.START_FINISH_SPACING:
            return from_spacing(self.start, self.finish, self.spacing, dtype=self.dtype)
        if form is GridForm.START_FINISH_DIMS:
            return from_bounds(self.start, self.finish, dims=self.dims, dtype=self.dtype)
        return from_dims(self.dims, dtype=self.dtype)

    @classmethod
    def from_grid(cls, grid: CartesianGrid) -> CartesianGridConfig:
        """Canonical configuration reproducing ``grid``."""
        return cls(
            dims=grid.size(),
            origin=tuple(grid.origin),
            spacing=grid.spacing,
            offset=grid.offset,
            dtype=grid.dtype.name,
        )
