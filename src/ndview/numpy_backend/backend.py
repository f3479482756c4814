from __future__ import annotations

from dataclasses import replace
from typing import Any, Sequence, Tuple

import numpy as np

from ..core.backend import Backend, Start, region, resolve_start
from ..core.tensor import Tensor


class NumpyBackend(Backend):
    name = "numpy"

    def from_array(self, array: Any) -> Tensor:
        data = np.array(array, copy=True)
        data.setflags(write=False)
        return Tensor(
            data=data,
            type=str(data.dtype),
            shape=data.shape,
            names=(None,) * data.ndim,
            backend=self,
        )

    def to_numpy(self, tensor: Tensor) -> np.ndarray:
        return np.asarray(tensor.data)

    def slice(
        self,
        tensor: Tensor,
        starts: Sequence[Start],
        lengths: Sequence[int],
        strides: Sequence[int],
        *,
        dynamic_index: str = "clamp",
    ) -> Tensor:
        offsets = [
            resolve_start(start, length, axis, tensor.shape, dynamic_index)
            for axis, (start, length) in enumerate(zip(starts, lengths))
        ]
        data = np.asarray(tensor.data)[region(offsets, lengths, strides)]
        return replace(tensor, data=data, shape=data.shape)

    def reshape_data(self, data: Any, shape: Tuple[int, ...]) -> Any:
        return np.reshape(data, shape)

    def put_slice(
        self,
        tensor: Tensor,
        starts: Sequence[Start],
        update: Tensor,
        *,
        dynamic_index: str = "clamp",
    ) -> Tensor:
        values = np.asarray(update.data)
        lead = tensor.rank - values.ndim
        lengths = tensor.shape[:lead] + values.shape
        offsets = [
            resolve_start(start, length, axis, tensor.shape, dynamic_index)
            for axis, (start, length) in enumerate(zip(starts, lengths))
        ]
        out = np.array(tensor.data, copy=True)
        out[region(offsets, lengths, [1] * tensor.rank)] = values
        out.setflags(write=False)
        return replace(tensor, data=out)
