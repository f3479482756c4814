import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _load_version

from .core.access import get, pop, put_slice, update
from .core.axes import find_axis, normalize_index
from .core.backend import Backend, available_backends, get_backend
from .core.config import IndexingConfig
from .core.exceptions import (
    BackendError,
    InvalidIndexSpecError,
    InvalidRangeError,
    NdviewError,
    OutOfBoundsIndexError,
    ParseError,
    ScalarIndexingError,
    UnknownAxisNameError,
    UnknownOrDuplicateAxisError,
    UnsupportedMutationError,
)
from .core.parser import parse_index
from .core.resolver import SlicePlan, resolve_axes
from .core.spec import IndexKind, IndexSpec, Range, classify
from .core.tensor import Tensor, devectorize, squeeze, tensor, vectorize

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__ = _load_version("ndview")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "Tensor",
    "tensor",
    "get",
    "put_slice",
    "update",
    "pop",
    "vectorize",
    "devectorize",
    "squeeze",
    "Range",
    "IndexKind",
    "IndexSpec",
    "SlicePlan",
    "classify",
    "resolve_axes",
    "find_axis",
    "normalize_index",
    "parse_index",
    "IndexingConfig",
    "Backend",
    "get_backend",
    "available_backends",
    "NdviewError",
    "ScalarIndexingError",
    "InvalidIndexSpecError",
    "UnknownAxisNameError",
    "UnknownOrDuplicateAxisError",
    "InvalidRangeError",
    "OutOfBoundsIndexError",
    "UnsupportedMutationError",
    "ParseError",
    "BackendError",
    "__version__",
]
