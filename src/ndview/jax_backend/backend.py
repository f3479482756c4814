from __future__ import annotations

from dataclasses import replace
from typing import Any, Sequence, Tuple

import numpy as np

from ..core.backend import Backend, Start, resolve_start
from ..core.tensor import Tensor

try:
    import jax
    import jax.numpy as jnp
except Exception:  # pragma: no cover - jax optional
    jax = None
    jnp = None


class JaxBackend(Backend):
    """Backend over ``jax.numpy`` arrays.

    In ``"clamp"`` mode scalar-tensor starts stay on device and go straight to
    ``jax.lax.dynamic_slice``, whose clamping rule is the one ndview uses for
    every backend.
    """

    name = "jax"

    def from_array(self, array: Any) -> Tensor:
        data = jnp.asarray(array)
        return Tensor(
            data=data,
            type=str(data.dtype),
            shape=tuple(data.shape),
            names=(None,) * data.ndim,
            backend=self,
        )

    def to_numpy(self, tensor: Tensor) -> np.ndarray:
        return np.asarray(tensor.data)

    def _device_start(self, start: Start) -> Any:
        if isinstance(start, Tensor):
            if start.backend is self:
                return start.data
            return jnp.asarray(start.backend.to_numpy(start))
        return start

    def slice(
        self,
        tensor: Tensor,
        starts: Sequence[Start],
        lengths: Sequence[int],
        strides: Sequence[int],
        *,
        dynamic_index: str = "clamp",
    ) -> Tensor:
        dynamic = any(isinstance(start, Tensor) for start in starts)
        if dynamic and dynamic_index == "clamp" and all(stride == 1 for stride in strides):
            data = jax.lax.dynamic_slice(
                tensor.data,
                [self._device_start(start) for start in starts],
                [int(length) for length in lengths],
            )
        else:
            offsets = [
                resolve_start(start, length, axis, tensor.shape, dynamic_index)
                for axis, (start, length) in enumerate(zip(starts, lengths))
            ]
            limits = [start + length for start, length in zip(offsets, lengths)]
            data = jax.lax.slice(tensor.data, offsets, limits, [int(s) for s in strides])
        return replace(tensor, data=data, shape=tuple(data.shape))

    def reshape_data(self, data: Any, shape: Tuple[int, ...]) -> Any:
        return jnp.reshape(data, shape)

    def put_slice(
        self,
        tensor: Tensor,
        starts: Sequence[Start],
        update: Tensor,
        *,
        dynamic_index: str = "clamp",
    ) -> Tensor:
        values = jnp.asarray(update.data, dtype=tensor.data.dtype)
        lead = tensor.rank - values.ndim
        values = jnp.broadcast_to(values, tensor.shape[:lead] + tuple(values.shape))
        if dynamic_index == "strict":
            starts = [
                resolve_start(start, length, axis, tensor.shape, dynamic_index)
                for axis, (start, length) in enumerate(zip(starts, values.shape))
            ]
        data = jax.lax.dynamic_update_slice(
            tensor.data, values, [self._device_start(start) for start in starts]
        )
        return replace(tensor, data=data)
