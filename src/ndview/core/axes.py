from __future__ import annotations

from numbers import Integral
from typing import Any, Optional, Sequence, Tuple

from .exceptions import InvalidIndexSpecError, OutOfBoundsIndexError, UnknownAxisNameError


def is_integer(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def find_axis(names: Sequence[Optional[str]], key: Any) -> int:
    """Return the position of ``key`` in ``names``.

    Integer positions are returned unchanged; range checking happens when the
    axes are resolved against a shape.
    """
    if is_integer(key):
        return int(key)
    if isinstance(key, str):
        for position, name in enumerate(names):
            if name == key:
                return position
        raise UnknownAxisNameError(key, names)
    raise InvalidIndexSpecError(
        f"axis keys must be names or integer positions, got {key!r}", value=key
    )


def normalize_index(index: int, axis: int, shape: Tuple[int, ...]) -> int:
    dim = shape[axis]
    norm = dim + index if index < 0 else index
    if norm < 0 or norm >= dim:
        raise OutOfBoundsIndexError(index, axis, shape)
    return norm
