"""Inclusive Cartesian ranges of integer grid indices."""

from __future__ import annotations

from itertools import product
from math import prod
from operator import index as as_index
from typing import TYPE_CHECKING

from cartmesh.utils.exceptions import validate_same_length

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


class IndexRange:
    """
    Box of integer indices ``first[k] <= i[k] <= last[k]`` along every axis.

    Both corners are included, so ``IndexRange((2, 2), (3, 3))`` holds four
    indices. Iteration follows C order (last axis fastest).

    Example:
        >>> r = IndexRange((1, 1), (2, 3))
        >>> r.shape
        (2, 3)
        >>> list(r)[:2]
        [(1, 1), (1, 2)]
    """

    __slots__ = ("_first", "_last")

    def __init__(self, first: Sequence[int], last: Sequence[int]):
        validate_same_length(len(first), component="IndexRange", last=last)
        self._first = tuple(as_index(i) for i in first)
        self._last = tuple(as_index(i) for i in last)

    @classmethod
    def from_shape(cls, shape: Sequence[int]) -> IndexRange:
        """Range ``1..shape[k]`` along every axis."""
        return cls((1,) * len(shape), tuple(shape))

    @property
    def first(self) -> tuple[int, ...]:
        return self._first

    @property
    def last(self) -> tuple[int, ...]:
        return self._last

    @property
    def shape(self) -> tuple[int, ...]:
        """Extent along each axis (may be non-positive for an empty range)."""
        return tuple(b - a + 1 for a, b in zip(self._first, self._last, strict=True))

    def __len__(self) -> int:
        return prod(max(n, 0) for n in self.shape)

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        return product(*(range(a, b + 1) for a, b in zip(self._first, self._last, strict=True)))

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != len(self._first):
            return False
        return all(a <= i <= b for a, i, b in zip(self._first, item, self._last, strict=True))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexRange):
            return NotImplemented
        return self._first == other._first and self._last == other._last

    def __hash__(self) -> int:
        return hash((self._first, self._last))

    def __repr__(self) -> str:
        return f"IndexRange({self._first}, {self._last})"
