"""Read-only indexing over tensors.

``get`` runs the pipeline: classify the index expression, resolve it against
the logical shape, widen the plan over vectorized axes, hand the physical
slice to the backend, then restore vectorization and squeeze the axes that
were indexed by a single position.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from .axes import find_axis, is_integer
from .backend import Backend
from .config import IndexingConfig
from .exceptions import BackendError, InvalidIndexSpecError, UnsupportedMutationError
from .resolver import SlicePlan, resolve_axes
from .spec import IndexKind, classify, is_scalar_index
from .tensor import Tensor, devectorize, squeeze, vectorize

logger = logging.getLogger(__name__)


def get(tensor: Tensor, index: Any, *, config: Optional[IndexingConfig] = None) -> Tensor:
    spec = classify(tensor, index)
    if spec.kind is IndexKind.EMPTY:
        return tensor
    plan = resolve_axes(tensor.shape, spec.axes)
    logger.debug(
        "slice plan for %s shape=%s: starts=%s lengths=%s squeeze=%s",
        spec.kind.value,
        tensor.shape,
        plan.starts,
        plan.lengths,
        plan.squeeze_axes,
    )
    return apply_with_vectorization(tensor, plan, config=config)


def apply_with_vectorization(
    tensor: Tensor, plan: SlicePlan, *, config: Optional[IndexingConfig] = None
) -> Tensor:
    vectorized_axes = tensor.vectorized_axes
    offset = len(vectorized_axes)
    starts = [0] * offset + list(plan.starts)
    lengths = [size for _, size in vectorized_axes] + list(plan.lengths)

    sliced = dispatch_slice(devectorize(tensor), starts, lengths, config=config)
    result = vectorize(sliced, vectorized_axes)
    if plan.squeeze_axes:
        result = squeeze(result, plan.squeeze_axes)
    return result


def dispatch_slice(
    tensor: Tensor,
    starts: Sequence[Any],
    lengths: Sequence[int],
    *,
    config: Optional[IndexingConfig] = None,
) -> Tensor:
    cfg = (config or IndexingConfig()).normalized()
    strides = [1] * tensor.rank
    backend: Backend = tensor.backend
    logger.debug("dispatching slice to %r: starts=%s lengths=%s", backend, starts, lengths)
    result = backend.slice(tensor, starts, lengths, strides, dynamic_index=cfg.dynamic_index)
    if cfg.validate_backend_output and tuple(result.shape) != tuple(lengths):
        raise BackendError(
            f"Backend '{backend.name}' returned shape {tuple(result.shape)} "
            f"for a slice of lengths {tuple(lengths)}"
        )
    return result


def put_slice(
    tensor: Tensor,
    starts: Any,
    update: Tensor,
    *,
    config: Optional[IndexingConfig] = None,
) -> Tensor:
    """Return a copy of ``tensor`` with the region at ``starts`` replaced by ``update``.

    ``starts`` is a sequence with one entry per logical axis, or a mapping (or
    list of pairs) from axis name/position to start with missing axes at 0.
    Integer starts are clamped so the update fits inside the tensor. Vectorized
    axes of ``tensor`` are always replaced whole; an update without them is
    broadcast across them.
    """
    cfg = (config or IndexingConfig()).normalized()
    if update.rank != tensor.rank:
        raise ValueError(
            f"put_slice expects an update of rank {tensor.rank}, got shape {update.shape}"
        )
    for axis, (dim, size) in enumerate(zip(tensor.shape, update.shape)):
        if size > dim:
            raise ValueError(
                f"update shape {update.shape} does not fit in shape {tensor.shape} at axis {axis}"
            )
    if update.vectorized_axes and update.vectorized_axes != tensor.vectorized_axes:
        raise ValueError(
            f"update vectorized axes {list(update.vectorized_axes)} do not match "
            f"{list(tensor.vectorized_axes)}"
        )

    logical_starts = _put_slice_starts(tensor, starts)
    clamped: List[Any] = []
    for start, dim, size in zip(logical_starts, tensor.shape, update.shape):
        clamped.append(min(max(int(start), 0), dim - size) if is_integer(start) else start)

    if update.backend is not tensor.backend:
        update = _transfer(update, tensor.backend)

    offset = len(tensor.vectorized_axes)
    physical_starts = [0] * offset + clamped
    result = tensor.backend.put_slice(
        devectorize(tensor),
        physical_starts,
        devectorize(update),
        dynamic_index=cfg.dynamic_index,
    )
    return vectorize(result, tensor.vectorized_axes)


def _put_slice_starts(tensor: Tensor, starts: Any) -> List[Any]:
    pairs = None
    if isinstance(starts, dict):
        pairs = list(starts.items())
    elif isinstance(starts, list) and starts and all(
        isinstance(entry, tuple) and len(entry) == 2 for entry in starts
    ):
        pairs = list(starts)

    if pairs is not None:
        resolved: List[Any] = [0] * tensor.rank
        for key, value in pairs:
            axis = find_axis(tensor.names, key)
            if axis < 0 or axis >= tensor.rank:
                raise InvalidIndexSpecError(
                    f"unknown axis {key!r} for put_slice on shape {tensor.shape}", value=key
                )
            resolved[axis] = value
        values = resolved
    elif isinstance(starts, (list, tuple)):
        values = list(starts)
    else:
        raise InvalidIndexSpecError(
            f"put_slice expects a sequence or a mapping of starts, got {starts!r}", value=starts
        )

    if len(values) != tensor.rank:
        raise InvalidIndexSpecError(
            f"put_slice expects {tensor.rank} starts for shape {tensor.shape}, got {values!r}",
            value=starts,
        )
    for value in values:
        if not (is_integer(value) or is_scalar_index(value)):
            raise InvalidIndexSpecError(
                f"put_slice starts must be integers or scalar tensors, got {value!r}",
                value=value,
            )
    return values


def _transfer(source: Tensor, backend: Backend) -> Tensor:
    moved = backend.from_array(source.backend.to_numpy(devectorize(source)))
    return vectorize(moved, source.vectorized_axes)


def update(tensor: Tensor, index: Any, fn: Callable[[Tensor], Any]) -> Tensor:
    raise UnsupportedMutationError("indexed update")


def pop(tensor: Tensor, index: Any) -> Tensor:
    raise UnsupportedMutationError("indexed pop")
