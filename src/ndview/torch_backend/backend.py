from __future__ import annotations

from dataclasses import replace
from typing import Any, Sequence, Tuple

import numpy as np

from ..core.backend import Backend, Start, region, resolve_start
from ..core.tensor import Tensor

try:
    import torch
except Exception:  # pragma: no cover - torch optional
    torch = None


def _dtype_name(data: Any) -> str:
    return str(data.dtype).replace("torch.", "")


class TorchBackend(Backend):
    name = "torch"

    def __init__(self, device: str = "cpu"):
        self.device = device

    def __repr__(self) -> str:
        return f"TorchBackend(device={self.device!r})"

    def from_array(self, array: Any) -> Tensor:
        if isinstance(array, torch.Tensor):
            data = array.detach().to(self.device).clone()
        else:
            data = torch.as_tensor(np.array(array, copy=True), device=self.device)
        return Tensor(
            data=data,
            type=_dtype_name(data),
            shape=tuple(data.shape),
            names=(None,) * data.dim(),
            backend=self,
        )

    def to_numpy(self, tensor: Tensor) -> np.ndarray:
        data = tensor.data.detach().cpu()
        try:
            return data.numpy().copy()
        except RuntimeError:
            return np.asarray(data.tolist())

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
        data = tensor.data[region(offsets, lengths, strides)]
        return replace(tensor, data=data, shape=tuple(data.shape))

    def reshape_data(self, data: Any, shape: Tuple[int, ...]) -> Any:
        return data.reshape(shape)

    def put_slice(
        self,
        tensor: Tensor,
        starts: Sequence[Start],
        update: Tensor,
        *,
        dynamic_index: str = "clamp",
    ) -> Tensor:
        values = update.data
        lead = tensor.rank - values.dim()
        lengths = tensor.shape[:lead] + tuple(values.shape)
        offsets = [
            resolve_start(start, length, axis, tensor.shape, dynamic_index)
            for axis, (start, length) in enumerate(zip(starts, lengths))
        ]
        out = tensor.data.clone()
        out[region(offsets, lengths, [1] * tensor.rank)] = values.to(
            device=out.device, dtype=out.dtype
        )
        return replace(tensor, data=out)
