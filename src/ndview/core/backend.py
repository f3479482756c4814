"""Backend capability and registry.

A backend owns tensor payloads. The indexing engine only requires
:meth:`Backend.slice`; the remaining hooks have defaults that keep
metadata-only backends working (removing size-1 axes never changes a
row-major layout, so :meth:`Backend.reshape_data` may return the payload
unchanged).
"""

from __future__ import annotations

import importlib.util
import logging
from dataclasses import replace
from typing import Any, Dict, List, Sequence, Tuple, Union

import numpy as np

from .axes import is_integer
from .exceptions import BackendError, InvalidIndexSpecError, OutOfBoundsIndexError
from .tensor import Tensor

logger = logging.getLogger(__name__)

Start = Union[int, Tensor]


class Backend:
    name = "abstract"

    def slice(
        self,
        tensor: Tensor,
        starts: Sequence[Start],
        lengths: Sequence[int],
        strides: Sequence[int],
        *,
        dynamic_index: str = "clamp",
    ) -> Tensor:
        raise NotImplementedError

    def squeeze(self, tensor: Tensor, axes: Sequence[int]) -> Tensor:
        drop = set(axes)
        keep = [axis for axis in range(tensor.rank) if axis not in drop]
        shape = tuple(tensor.shape[axis] for axis in keep)
        names = tuple(tensor.names[axis] for axis in keep)
        return replace(tensor, data=self.reshape_data(tensor.data, shape), shape=shape, names=names)

    def reshape_data(self, data: Any, shape: Tuple[int, ...]) -> Any:
        return data

    def put_slice(
        self,
        tensor: Tensor,
        starts: Sequence[Start],
        update: Tensor,
        *,
        dynamic_index: str = "clamp",
    ) -> Tensor:
        raise BackendError(f"Backend '{self.name}' does not support put_slice")

    def from_array(self, array: Any) -> Tensor:
        raise BackendError(f"Backend '{self.name}' cannot build tensors from arrays")

    def to_numpy(self, tensor: Tensor) -> np.ndarray:
        raise BackendError(f"Backend '{self.name}' cannot export tensors to NumPy")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def scalar_index_value(index: Tensor) -> int:
    """Read a scalar-tensor index from live data."""
    value = np.asarray(index.backend.to_numpy(index))
    if value.shape != () or not np.issubdtype(value.dtype, np.integer):
        raise InvalidIndexSpecError(
            f"tensor indices must be integer scalars, got a {value.dtype} tensor of shape {value.shape}",
            value=index,
        )
    return int(value)


def resolve_start(
    start: Start,
    length: int,
    axis: int,
    shape: Tuple[int, ...],
    dynamic_index: str = "clamp",
) -> int:
    """Turn a slice start into a concrete offset for ``shape[axis]``.

    Integer starts come out of the axis resolver already normalized. Tensor
    starts are read here: ``"clamp"`` pulls them into ``[0, dim - length]``
    while ``"strict"`` normalizes negatives and rejects anything that would
    read past the axis.
    """
    dim = shape[axis]
    if is_integer(start):
        return int(start)
    value = scalar_index_value(start)
    if length > dim:
        raise OutOfBoundsIndexError(value, axis, shape)
    if dynamic_index == "strict":
        norm = dim + value if value < 0 else value
        if norm < 0 or norm + length > dim:
            raise OutOfBoundsIndexError(value, axis, shape)
        return norm
    return min(max(value, 0), dim - length)


def region(
    starts: Sequence[int], lengths: Sequence[int], strides: Sequence[int]
) -> Tuple[slice, ...]:
    return tuple(
        slice(start, start + length, stride)
        for start, length, stride in zip(starts, lengths, strides)
    )


_BACKENDS: Dict[str, Backend] = {}


def available_backends() -> List[str]:
    optional = [name for name in ("torch", "jax") if importlib.util.find_spec(name) is not None]
    return ["numpy"] + optional


def get_backend(backend: Union[str, Backend]) -> Backend:
    if isinstance(backend, Backend):
        return backend
    key = str(backend).strip().lower()
    if key in _BACKENDS:
        return _BACKENDS[key]
    if key == "numpy":
        from ..numpy_backend.backend import NumpyBackend

        impl: Backend = NumpyBackend()
    elif key == "torch":
        from ..torch_backend.backend import TorchBackend, torch

        if torch is None:
            logger.warning("torch backend requested but the 'torch' package is not installed")
            raise BackendError("Backend 'torch' requires the 'torch' package")
        impl = TorchBackend()
    elif key == "jax":
        from ..jax_backend.backend import JaxBackend, jax

        if jax is None:
            logger.warning("jax backend requested but the 'jax' package is not installed")
            raise BackendError("Backend 'jax' requires the 'jax' package")
        impl = JaxBackend()
    else:
        raise BackendError(f"Unknown backend '{backend}'")
    _BACKENDS[key] = impl
    return impl
