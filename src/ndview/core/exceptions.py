from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

ACCEPTED_INDEX_FORMS = """\
tensor[index] expects index to be one of:

  * an integer or a scalar tensor representing a zero-based index
  * a Range(first, last) representing inclusive start-stop indexes
  * a list (or tuple) of integers, scalar tensors and ranges
  * a list of (name_or_position, index) pairs, which may be mixed with
    positional entries, or a dict of them"""


class NdviewError(Exception):
    """Base class for ndview-specific exceptions."""


class ScalarIndexingError(NdviewError, TypeError):
    def __init__(self, shape: Tuple[int, ...] = ()):
        super().__init__(f"cannot use the tensor[index] syntax on a scalar tensor (shape {shape})")
        self.shape = shape


class InvalidIndexSpecError(NdviewError, TypeError):
    def __init__(self, message: str, *, value: Any = None, axis: Optional[int] = None):
        super().__init__(message)
        self.value = value
        self.axis = axis

    @classmethod
    def for_expression(cls, value: Any) -> "InvalidIndexSpecError":
        return cls(f"{ACCEPTED_INDEX_FORMS}\n\nGot {value!r}", value=value)


class UnknownAxisNameError(NdviewError, ValueError):
    def __init__(self, name: Any, names: Sequence[Optional[str]]):
        super().__init__(f"axis name {name!r} not found in tensor with names {list(names)!r}")
        self.name = name
        self.names = tuple(names)


class UnknownOrDuplicateAxisError(NdviewError, ValueError):
    def __init__(self, axis: Any, shape: Tuple[int, ...]):
        super().__init__(f"unknown or duplicate axis {axis!r} found when slicing shape {shape}")
        self.axis = axis
        self.shape = shape


class InvalidRangeError(NdviewError, ValueError):
    def __init__(self, value: Any, *, axis: Optional[int] = None):
        super().__init__(
            f"slicing a tensor requires a non-empty range with a step of 1, got: {value!r}"
        )
        self.value = value
        self.axis = axis


class OutOfBoundsIndexError(NdviewError, IndexError):
    def __init__(self, index: int, axis: int, shape: Tuple[int, ...]):
        super().__init__(f"index {index} is out of bounds for axis {axis} in shape {shape}")
        self.index = index
        self.axis = axis
        self.shape = shape


class UnsupportedMutationError(NdviewError, TypeError):
    def __init__(self, operation: str):
        super().__init__(
            f"{operation} is not supported: tensors are immutable. "
            "Please use ndview.put_slice(tensor, starts, update) instead"
        )
        self.operation = operation


class ParseError(NdviewError, ValueError):
    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        line_text: Optional[str] = None,
    ):
        detail = _format_location(line, column, line_text)
        super().__init__(f"{message}{detail}")
        self.line = line
        self.column = column
        self.line_text = line_text


class BackendError(NdviewError, RuntimeError):
    pass


def _format_location(
    line: Optional[int],
    column: Optional[int],
    line_text: Optional[str],
) -> str:
    if line is None and column is None:
        return ""
    location = []
    if line is not None:
        location.append(f"line {line}")
    if column is not None:
        location.append(f"col {column}")
    location_str = f" ({', '.join(location)})"
    if line_text is None or column is None or column < 1:
        return location_str
    caret = " " * (column - 1) + "^"
    return f"{location_str}\n  {line_text}\n  {caret}"
