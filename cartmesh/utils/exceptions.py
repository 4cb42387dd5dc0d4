"""
Exception classes for cartmesh with helpful error messages and user guidance.

Every exception carries a short message, an optional suggested action, an
error code and a dictionary of diagnostic data. All of it is folded into
``str(error)`` so that a failing construction explains itself.
"""

from __future__ import annotations

from operator import index as as_index
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence


class CartMeshError(Exception):
    """
    Base exception for cartmesh errors with context and suggestions.

    Provides structured error information including:
    - Clear error description
    - Name of the component that raised it
    - Suggested action for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.component = component or "cartmesh"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.component}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class InvalidDimensionsError(CartMeshError, ValueError):
    """Exception raised when a per-axis cell count is not a strictly positive integer."""

    def __init__(self, dims: Sequence[int], component: str | None = None):
        dims = tuple(dims)
        bad_axes = [axis for axis, n in enumerate(dims) if not _is_cell_count(n)]
        diagnostic_data = {
            "dims": str(dims),
            "invalid_axes": str(bad_axes),
        }

        super().__init__(
            message=f"Dimensions must be positive integers, got {dims}",
            component=component,
            suggested_action=_generate_dimension_suggestions(dims, bad_axes),
            error_code="INVALID_DIMENSIONS",
            diagnostic_data=diagnostic_data,
        )
        self.dims = dims


class InvalidSpacingError(CartMeshError, ValueError):
    """Exception raised when a per-axis spacing is not strictly positive."""

    def __init__(self, spacing: Sequence[float], component: str | None = None):
        spacing = tuple(spacing)
        bad_axes = [axis for axis, h in enumerate(spacing) if not h > 0]
        diagnostic_data = {
            "spacing": str(spacing),
            "invalid_axes": str(bad_axes),
        }

        if any(h < 0 for h in spacing):
            suggested_action = "Spacing is a cell size, use absolute values or swap start and finish"
        else:
            suggested_action = "Every axis needs a strictly positive cell size"

        super().__init__(
            message=f"Spacing must be positive, got {spacing}",
            component=component,
            suggested_action=suggested_action,
            error_code="INVALID_SPACING",
            diagnostic_data=diagnostic_data,
        )
        self.spacing = spacing


class InvalidDtypeError(CartMeshError, ValueError):
    """Exception raised when coordinates are requested in a non-floating dtype."""

    def __init__(self, dtype_name: str, component: str | None = None):
        super().__init__(
            message=f"dtype must be a floating type, got '{dtype_name}'",
            component=component,
            suggested_action="Use float64 (default) or float32; centroids fall between integer coordinates",
            error_code="INVALID_DTYPE",
            diagnostic_data={"dtype": dtype_name},
        )
        self.dtype_name = dtype_name


class IndexOutOfRangeError(CartMeshError, IndexError):
    """Exception raised when a linear index falls outside ``[1, count]``."""

    def __init__(self, index: int, count: int, what: str = "element", component: str | None = None):
        diagnostic_data = {
            "index": index,
            "valid_range": f"[1, {count}]",
        }

        super().__init__(
            message=f"{what.capitalize()} index {index} out of range [1, {count}]",
            component=component,
            suggested_action=f"Linear {what} indices are 1-based and end at {count}",
            error_code="INDEX_OUT_OF_RANGE",
            diagnostic_data=diagnostic_data,
        )
        self.index = index
        self.count = count


class DimensionMismatchError(CartMeshError, ValueError):
    """Exception raised when per-axis arguments disagree in length."""

    def __init__(
        self,
        argument_name: str,
        provided_length: int,
        expected_length: int,
        component: str | None = None,
        context: str | None = None,
    ):
        diagnostic_data = {
            "argument": argument_name,
            "provided_length": provided_length,
            "expected_length": expected_length,
        }

        if context:
            diagnostic_data["context"] = context

        super().__init__(
            message=f"Dimension mismatch for {argument_name}",
            component=component,
            suggested_action=f"Provide exactly {expected_length} entries for '{argument_name}'",
            error_code="DIMENSION_MISMATCH",
            diagnostic_data=diagnostic_data,
        )


def _generate_dimension_suggestions(dims: tuple, bad_axes: list[int]) -> str:
    """Generate specific suggestions for invalid grid dimensions."""
    if not dims:
        return "A grid needs at least one axis"
    if not all(_is_integer(dims[axis]) for axis in bad_axes):
        return "Cell counts must be integers, round them explicitly"
    if any(dims[axis] < 0 for axis in bad_axes):
        return "Negative cell counts usually come from a reversed index range or reversed start/finish"
    return "Each axis needs at least one cell"


# Convenience functions for common validation scenarios


def validate_dims(dims: Sequence[int], component: str | None = None) -> tuple[int, ...]:
    """Validate per-axis cell counts and return them as a tuple of ints."""
    dims = tuple(dims)
    if len(dims) == 0 or not all(_is_cell_count(n) for n in dims):
        raise InvalidDimensionsError(dims, component=component)
    return tuple(as_index(n) for n in dims)


def _is_integer(value: Any) -> bool:
    try:
        as_index(value)
    except TypeError:
        return False
    return True


def _is_cell_count(value: Any) -> bool:
    return _is_integer(value) and as_index(value) > 0


def validate_spacing(spacing: Sequence[float], component: str | None = None) -> None:
    """Validate per-axis spacing values."""
    # `not h > 0` also rejects NaN
    if any(not h > 0 for h in spacing):
        raise InvalidSpacingError(spacing, component=component)


def validate_linear_index(index: int, count: int, what: str = "element", component: str | None = None) -> None:
    """Validate a 1-based linear index against the number of items."""
    if not 1 <= index <= count:
        raise IndexOutOfRangeError(index, count, what=what, component=component)


def validate_same_length(
    expected_length: int,
    component: str | None = None,
    **arguments: Sequence | None,
) -> None:
    """Validate that every given per-axis argument has ``expected_length`` entries."""
    for name, value in arguments.items():
        if value is not None and len(value) != expected_length:
            raise DimensionMismatchError(
                argument_name=name,
                provided_length=len(value),
                expected_length=expected_length,
                component=component,
            )
