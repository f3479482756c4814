from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from .axes import is_integer, normalize_index
from .exceptions import InvalidIndexSpecError, InvalidRangeError, UnknownOrDuplicateAxisError
from .spec import Range, is_scalar_index

_MISSING = object()


@dataclass(frozen=True)
class SlicePlan:
    starts: Tuple[Any, ...]  # ints, or scalar tensors resolved by the backend
    lengths: Tuple[int, ...]
    squeeze_axes: Tuple[int, ...]


def _take(pending: List[Tuple[int, Any]], axis: int) -> Any:
    for position, (key, spec) in enumerate(pending):
        if key == axis:
            del pending[position]
            return spec
    return _MISSING


def resolve_axes(shape: Tuple[int, ...], axis_specs: Sequence[Tuple[int, Any]]) -> SlicePlan:
    """Resolve per-axis specs into starts, lengths and the axes to squeeze.

    Axes are visited from ``rank - 1`` down to ``0``, each consuming the first
    pending spec for that axis. Whatever is left afterwards names an axis that
    is out of range or was given twice.
    """
    rank = len(shape)
    pending = list(axis_specs)
    starts: List[Any] = [0] * rank
    lengths: List[int] = [0] * rank
    squeeze: List[int] = []

    for axis in range(rank - 1, -1, -1):
        spec = _take(pending, axis)
        if spec is _MISSING:
            starts[axis] = 0
            lengths[axis] = shape[axis]
        elif is_scalar_index(spec):
            starts[axis] = spec
            lengths[axis] = 1
            squeeze.append(axis)
        elif is_integer(spec):
            starts[axis] = normalize_index(int(spec), axis, shape)
            lengths[axis] = 1
            squeeze.append(axis)
        elif isinstance(spec, Range):
            first = normalize_index(spec.first, axis, shape)
            last = normalize_index(spec.last, axis, shape)
            if last < first or spec.step != 1:
                raise InvalidRangeError(spec, axis=axis)
            starts[axis] = first
            lengths[axis] = last - first + 1
        else:
            raise InvalidIndexSpecError(
                "slicing a tensor on an axis requires an integer, a scalar tensor or a range, "
                f"got: {spec!r}",
                value=spec,
                axis=axis,
            )

    if pending:
        raise UnknownOrDuplicateAxisError(pending[0][0], shape)

    return SlicePlan(
        starts=tuple(starts),
        lengths=tuple(lengths),
        squeeze_axes=tuple(sorted(squeeze)),
    )
