from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from .axes import find_axis, is_integer
from .exceptions import InvalidIndexSpecError, ScalarIndexingError
from .tensor import Tensor


@dataclass(frozen=True)
class Range:
    """Inclusive ``first..last//step`` range. Only ``step == 1`` can slice."""

    first: int
    last: int
    step: int = 1

    def __str__(self) -> str:
        if self.step == 1:
            return f"{self.first}..{self.last}"
        return f"{self.first}..{self.last}//{self.step}"


class IndexKind(Enum):
    INTEGER = "integer"
    SCALAR_TENSOR = "scalar_tensor"
    RANGE = "range"
    POSITIONAL_LIST = "positional_list"
    NAMED_LIST = "named_list"
    EMPTY = "empty"


AxisSpecs = Tuple[Tuple[int, Any], ...]


@dataclass(frozen=True)
class IndexSpec:
    kind: IndexKind
    axes: AxisSpecs = ()


def is_scalar_index(value: Any) -> bool:
    return isinstance(value, Tensor) and value.rank == 0 and not value.vectorized_axes


def _single_kind(value: Any):
    if is_integer(value):
        return IndexKind.INTEGER
    if isinstance(value, Range):
        return IndexKind.RANGE
    if is_scalar_index(value):
        return IndexKind.SCALAR_TENSOR
    return None


def _is_pair(entry: Any) -> bool:
    return isinstance(entry, tuple) and len(entry) == 2


def classify(tensor: Tensor, index: Any) -> IndexSpec:
    """Rewrite an index expression into ``(axis_position, spec)`` pairs.

    Keyed entries are resolved to positions here; the raw specs themselves are
    only validated when the axes are resolved against the shape. In a list
    mixing both forms, bare entries bind to their list position, so
    ``[0, ("a", 1)]`` targets axis 0 twice and fails during resolution.
    """
    if tensor.rank == 0:
        raise ScalarIndexingError(tensor.shape)

    kind = _single_kind(index)
    if kind is not None:
        return IndexSpec(kind, ((0, index),))

    if isinstance(index, dict):
        if not index:
            return IndexSpec(IndexKind.EMPTY)
        pairs = tuple((find_axis(tensor.names, key), spec) for key, spec in index.items())
        return IndexSpec(IndexKind.NAMED_LIST, pairs)

    # t["b", 1] arrives as one keyed pair
    if _is_pair(index) and isinstance(index[0], str):
        return IndexSpec(IndexKind.NAMED_LIST, ((find_axis(tensor.names, index[0]), index[1]),))

    if isinstance(index, (list, tuple)):
        if not index:
            return IndexSpec(IndexKind.EMPTY)
        keyed = [_is_pair(entry) for entry in index]
        if not any(keyed):
            return IndexSpec(IndexKind.POSITIONAL_LIST, tuple(enumerate(index)))
        pairs = tuple(
            (find_axis(tensor.names, entry[0]), entry[1]) if is_pair else (position, entry)
            for position, (entry, is_pair) in enumerate(zip(index, keyed))
        )
        return IndexSpec(IndexKind.NAMED_LIST, pairs)

    raise InvalidIndexSpecError.for_expression(index)
