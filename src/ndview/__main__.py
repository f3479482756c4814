from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .core.access import get
from .core.config import IndexingConfig
from .core.exceptions import NdviewError
from .core.parser import parse_index
from .core.tensor import Tensor, tensor


def _load_array(path: Path) -> np.ndarray:
    try:
        return np.load(path, allow_pickle=False)
    except FileNotFoundError as exc:
        raise SystemExit(f"Array file not found: {path}") from exc


def _write_output(path: Path, result: Tensor) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    array = result.to_numpy()
    suffix = path.suffix.lower()
    if suffix == ".npz":
        np.savez(path, array)
    elif suffix == ".json":
        payload = {
            "shape": list(result.shape),
            "names": list(result.names),
            "vectorized_axes": [list(axis) for axis in result.vectorized_axes],
            "data": array.tolist(),
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    else:
        np.save(path, array)


def _parse_names(spec: Optional[str], rank: int) -> Optional[List[Optional[str]]]:
    if spec is None:
        return None
    names: List[Optional[str]] = [name.strip() or None for name in spec.split(",")]
    if len(names) != rank:
        raise SystemExit(f"--names lists {len(names)} names for a tensor of rank {rank}")
    return names


def _slice(args: argparse.Namespace) -> None:
    array = _load_array(args.array)
    if not 0 <= args.vectorize <= array.ndim:
        raise SystemExit(
            f"--vectorize must be between 0 and {array.ndim} for an array of shape {array.shape}"
        )
    vectorized = [f"v{position}" for position in range(args.vectorize)]
    rank = array.ndim - len(vectorized)
    names = _parse_names(args.names, rank)
    config = IndexingConfig(dynamic_index=args.dynamic_index, default_backend=args.backend)
    try:
        source = tensor(array, names, vectorized_axes=vectorized, config=config)
        result = get(source, parse_index(args.expr), config=config)
    except NdviewError as exc:
        raise SystemExit(f"error: {exc}") from exc

    if args.out is not None:
        _write_output(args.out, result)
        return
    np.set_printoptions(suppress=True)
    header = f"# shape {result.shape} names {result.names}"
    if result.vectorized_axes:
        header += f" vectorized {list(result.vectorized_axes)}"
    print(header)
    print(result.to_numpy())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ndview command line utilities")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log slice plans")
    subparsers = parser.add_subparsers(dest="cmd")

    slice_parser = subparsers.add_parser("slice", help="Index a .npy array")
    slice_parser.add_argument("array", type=Path, help="Path to a .npy array")
    slice_parser.add_argument("expr", help="Index expression, e.g. '[b: 1..2]' or '[0, -1]'")
    slice_parser.add_argument(
        "--names",
        default=None,
        help="Comma-separated axis names for the non-vectorized axes",
    )
    slice_parser.add_argument(
        "--vectorize",
        type=int,
        default=0,
        help="Number of leading axes to treat as vectorized (default: 0)",
    )
    slice_parser.add_argument(
        "--backend",
        default="numpy",
        choices=["numpy", "torch", "jax"],
        help="Backend holding the tensor (default: numpy)",
    )
    slice_parser.add_argument(
        "--dynamic-index",
        default="clamp",
        choices=["clamp", "strict"],
        help="Resolution of scalar-tensor indices (default: clamp)",
    )
    slice_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Optional output path (.npy/.npz/.json). If omitted, prints the result",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.cmd == "slice":
        _slice(args)
        return

    parser.print_help()


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
