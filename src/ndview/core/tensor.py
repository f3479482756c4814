"""The tensor descriptor.

A :class:`Tensor` carries the element type, shape and axis names of an array
whose storage belongs to a backend. The engine never touches ``data``
directly: every transformation returns a new descriptor, and only backends
build descriptors holding new payloads.

``vectorized_axes`` lists leading physical dimensions that are hidden from
``shape`` and ``names``. Indexing always sees the logical shape; backends
always see the physical one (see :func:`devectorize`).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Iterable, Optional, Sequence, Tuple, Union

from .axes import find_axis
from .exceptions import UnsupportedMutationError

if TYPE_CHECKING:
    from .backend import Backend
    from .config import IndexingConfig

VectorizedAxes = Tuple[Tuple[str, int], ...]


@dataclass(frozen=True, eq=False)
class Tensor:
    data: Any = field(repr=False)
    type: Any
    shape: Tuple[int, ...]
    names: Tuple[Optional[str], ...]
    backend: "Backend" = field(repr=False)
    vectorized_axes: VectorizedAxes = ()

    def __post_init__(self):
        shape = tuple(int(dim) for dim in self.shape)
        names = tuple(self.names)
        vectorized = tuple((str(name), int(size)) for name, size in self.vectorized_axes)
        if any(dim < 0 for dim in shape):
            raise ValueError(f"tensor dimensions must be non-negative, got {shape}")
        if len(names) != len(shape):
            raise ValueError(f"expected {len(shape)} names for shape {shape}, got {names}")
        vectorized_names = [name for name, _ in vectorized]
        if len(set(vectorized_names)) != len(vectorized_names):
            raise ValueError(f"vectorized axis names must be unique, got {vectorized_names}")
        if any(size < 0 for _, size in vectorized):
            raise ValueError(f"vectorized axis sizes must be non-negative, got {vectorized}")
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "names", names)
        object.__setattr__(self, "vectorized_axes", vectorized)

    @property
    def rank(self) -> int:
        return len(self.shape)

    @property
    def physical_shape(self) -> Tuple[int, ...]:
        return tuple(size for _, size in self.vectorized_axes) + self.shape

    @property
    def physical_names(self) -> Tuple[Optional[str], ...]:
        return tuple(name for name, _ in self.vectorized_axes) + self.names

    def to_numpy(self):
        """Return the physical (devectorized) data as a NumPy array."""
        return self.backend.to_numpy(devectorize(self))

    # Access -------------------------------------------------------------------
    def __getitem__(self, index: Any) -> "Tensor":
        from .access import get

        return get(self, index)

    def __setitem__(self, index: Any, value: Any) -> None:
        raise UnsupportedMutationError("tensor[index] = value")

    def __delitem__(self, index: Any) -> None:
        raise UnsupportedMutationError("del tensor[index]")


def tensor(
    array: Any,
    names: Optional[Sequence[Optional[str]]] = None,
    *,
    backend: Union[str, "Backend", None] = None,
    vectorized_axes: Optional[Iterable[Any]] = None,
    config: Optional["IndexingConfig"] = None,
) -> Tensor:
    """Build a tensor from array-like data on the selected backend.

    ``vectorized_axes`` follows :func:`vectorize`: the leading dimensions of
    ``array`` become vectorized and ``names`` then describes the remaining ones.
    """
    from .backend import get_backend
    from .config import IndexingConfig

    cfg = (config or IndexingConfig()).normalized()
    impl = get_backend(backend if backend is not None else cfg.default_backend)
    vectorized = list(vectorized_axes or [])
    result = impl.from_array(array)
    if vectorized:
        result = vectorize(result, vectorized)
    if names is not None:
        names = tuple(names)
        if len(names) != result.rank:
            raise ValueError(f"expected {result.rank} names for shape {result.shape}, got {names}")
        result = replace(result, names=names)
    return result


def vectorize(tensor: Tensor, axes: Iterable[Any]) -> Tensor:
    """Hide the leading logical dimensions of ``tensor`` behind vectorized axes.

    Entries of ``axes`` are either names, whose size is read from the shape,
    or ``(name, size)`` pairs whose size must match. New vectorized axes are
    appended after the ones ``tensor`` already has.
    """
    entries = list(axes)
    if not entries:
        return tensor
    if len(entries) > tensor.rank:
        raise ValueError(
            f"cannot vectorize {len(entries)} axes of a tensor with shape {tensor.shape}"
        )
    added = []
    for position, entry in enumerate(entries):
        dim = tensor.shape[position]
        if isinstance(entry, str):
            name, size = entry, dim
        else:
            name, size = entry
        if size != dim:
            raise ValueError(
                f"vectorized axis {name!r} expects size {size}, got dimension {dim} "
                f"in shape {tensor.shape}"
            )
        added.append((name, size))
    count = len(added)
    return replace(
        tensor,
        shape=tensor.shape[count:],
        names=tensor.names[count:],
        vectorized_axes=tensor.vectorized_axes + tuple(added),
    )


def devectorize(tensor: Tensor) -> Tensor:
    if not tensor.vectorized_axes:
        return tensor
    return replace(
        tensor,
        shape=tensor.physical_shape,
        names=tensor.physical_names,
        vectorized_axes=(),
    )


def squeeze(tensor: Tensor, axes: Optional[Iterable[Any]] = None) -> Tensor:
    """Remove size-1 logical axes. With ``axes=None`` every size-1 axis goes."""
    if axes is None:
        positions = [axis for axis, dim in enumerate(tensor.shape) if dim == 1]
    else:
        positions = sorted({find_axis(tensor.names, axis) for axis in axes})
        for axis in positions:
            if axis < 0 or axis >= tensor.rank:
                raise ValueError(f"cannot squeeze axis {axis} of shape {tensor.shape}")
            if tensor.shape[axis] != 1:
                raise ValueError(
                    f"cannot squeeze axis {axis} with dimension {tensor.shape[axis]} "
                    f"in shape {tensor.shape}"
                )
    if not positions:
        return tensor
    offset = len(tensor.vectorized_axes)
    squeezed = tensor.backend.squeeze(devectorize(tensor), [offset + axis for axis in positions])
    return vectorize(squeezed, tensor.vectorized_axes)
