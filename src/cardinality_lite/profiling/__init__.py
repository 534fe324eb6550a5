"""Harness for measuring estimator error and throughput.

Public API:
    run_estimate: feed keys from worker threads, return an EstimateResult
    generate_keys: reproducible distinct keys
    format_report / format_comparison: text tables
"""
from cardinality_lite.profiling.harness import (
    EstimateResult,
    generate_keys,
    make_estimator,
    run_estimate,
)
from cardinality_lite.profiling.report import format_comparison, format_report

__all__ = [
    "EstimateResult",
    "format_comparison",
    "format_report",
    "generate_keys",
    "make_estimator",
    "run_estimate",
]
