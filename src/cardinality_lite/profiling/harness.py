"""Accuracy and throughput harness for the estimators.

Feeds a reproducible stream of distinct keys into an estimator from a
pool of worker threads, then compares the estimate with the true
count. The point is to see both numbers side by side: how far off the
estimate is relative to 1.04 / sqrt(m), and what that costs in time
and register memory.
"""
from __future__ import annotations

import random
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass

from cardinality_lite.sketch.hyperloglog import HyperLogLog
from cardinality_lite.sketch.presto import HyperLogLogPresto

VARIANTS = {
    "dense": HyperLogLog,
    "presto": HyperLogLogPresto,
}


@dataclass(slots=True)
class EstimateResult:
    """Outcome of one estimator run."""
    variant: str
    precision: int
    true_count: int
    estimate: int
    relative_error: float
    standard_error: float
    elapsed_ms: float
    memory_bytes: int


def make_estimator(variant: str, precision: int) -> HyperLogLog | HyperLogLogPresto:
    """Build an estimator by variant name ("dense" or "presto")."""
    try:
        cls = VARIANTS[variant]
    except KeyError:
        raise ValueError(
            f"Unknown variant {variant!r}, expected one of {sorted(VARIANTS)}"
        ) from None
    return cls(p=precision)


def generate_keys(n: int, seed: int = 42) -> list[str]:
    """n distinct keys in a shuffled, reproducible order."""
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")
    rng = random.Random(seed)
    keys = [f"key-{seed}-{i}" for i in range(n)]
    rng.shuffle(keys)
    return keys


def run_estimate(
    variant: str,
    precision: int,
    keys: list[str],
    workers: int = 4,
) -> EstimateResult:
    """Add keys from `workers` threads, then compute the cardinality.

    The keys are split into one contiguous chunk per worker. True count
    is len(set(keys)), so duplicates in the input are fine.
    """
    if workers < 1:
        raise ValueError(f"workers must be positive, got {workers}")
    if not keys:
        raise ValueError("keys must not be empty")
    estimator = make_estimator(variant, precision)

    chunk = max(1, -(-len(keys) // workers))  # ceil division
    chunks = [keys[i:i + chunk] for i in range(0, len(keys), chunk)]

    def feed(part: list[str]) -> None:
        for key in part:
            estimator.add(key)

    start = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futs = [pool.submit(feed, part) for part in chunks]
        wait(futs)
        for f in futs:
            f.result()  # re-raise worker exceptions
    estimator.compute_cardinality()
    elapsed_ms = (time.perf_counter() - start) * 1000

    true_count = len(set(keys))
    estimate = estimator.cardinality
    error = abs(estimate - true_count) / true_count

    return EstimateResult(
        variant=variant,
        precision=estimator.precision,
        true_count=true_count,
        estimate=estimate,
        relative_error=error,
        standard_error=estimator.standard_error(),
        elapsed_ms=elapsed_ms,
        memory_bytes=estimator.memory_bytes(),
    )
