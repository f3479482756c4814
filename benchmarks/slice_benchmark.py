#!/usr/bin/env python3
"""
Indexing overhead benchmark for the ndview backends.

Times ``tensor[index]`` for a few representative index expressions on every
installed backend. The engine itself never touches data, so the numbers show
the fixed cost of classification, resolution and dispatch on top of the
backend's own slice.
"""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

import numpy as np

import ndview
from ndview import BackendError, Range

CASES = {
    "integer": lambda t: 3,
    "positional": lambda t: [1, Range(0, -2), -1],
    "named": lambda t: [("c", Range(2, 5)), ("a", 0)],
    "dynamic": lambda t: [ndview.tensor(np.int64(2), backend=t.backend)],
}


@dataclass
class BenchmarkResult:
    backend: str
    case: str
    min_s: float
    mean_s: float
    iterations: int


def bench(fn: Callable[[], Any], *, iterations: int, warmup: int) -> Iterable[float]:
    timings = []
    for step in range(iterations + warmup):
        start = time.perf_counter()
        fn()
        elapsed = time.perf_counter() - start
        if step >= warmup:
            timings.append(elapsed)
    return timings


def run_backend(
    backend: str,
    *,
    shape: List[int],
    vectorize: int,
    iterations: int,
    warmup: int,
) -> List[BenchmarkResult]:
    data = np.random.default_rng(2024).normal(size=shape).astype(np.float32)
    names = ["a", "b", "c", "d"][: len(shape) - vectorize]
    vectorized = [f"v{i}" for i in range(vectorize)]
    source = ndview.tensor(data, names=names, vectorized_axes=vectorized, backend=backend)

    results = []
    for case, build in CASES.items():
        index = build(source)
        timings = list(bench(lambda: source[index], iterations=iterations, warmup=warmup))
        results.append(
            BenchmarkResult(
                backend=backend,
                case=case,
                min_s=min(timings),
                mean_s=sum(timings) / len(timings),
                iterations=iterations,
            )
        )
    return results


def format_results(results: Iterable[BenchmarkResult]) -> str:
    header = f"{'backend':<8} {'case':<12} {'min (us)':>12} {'mean (us)':>12} {'iters':>8}"
    rows = [header]
    for result in results:
        rows.append(
            f"{result.backend:<8} {result.case:<12} {result.min_s * 1e6:12.2f} "
            f"{result.mean_s * 1e6:12.2f} {result.iterations:8d}"
        )
    return "\n".join(rows)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark ndview indexing overhead.")
    parser.add_argument(
        "--backend",
        choices=("numpy", "torch", "jax", "all"),
        default="all",
        help="Backend(s) to benchmark (default: all installed).",
    )
    parser.add_argument(
        "--shape",
        type=int,
        nargs="+",
        default=[8, 16, 32, 64],
        help="Physical tensor shape (default: 8 16 32 64).",
    )
    parser.add_argument(
        "--vectorize", type=int, default=1, help="Leading axes to vectorize (default: 1)."
    )
    parser.add_argument(
        "--iterations", type=int, default=200, help="Timed iterations per case (default: 200)."
    )
    parser.add_argument(
        "--warmup", type=int, default=20, help="Warmup iterations to discard (default: 20)."
    )
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    if len(args.shape) - args.vectorize != 3:
        print("--shape must leave exactly three non-vectorized axes", file=sys.stderr)
        return 1

    requested = ndview.available_backends() if args.backend == "all" else [args.backend]
    results = []
    for backend in requested:
        try:
            results.extend(
                run_backend(
                    backend,
                    shape=args.shape,
                    vectorize=args.vectorize,
                    iterations=args.iterations,
                    warmup=args.warmup,
                )
            )
        except BackendError as exc:
            print(f"[skip] {backend}: {exc}", file=sys.stderr)

    if not results:
        print("No backends were benchmarked.", file=sys.stderr)
        return 1

    print(format_results(results))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
