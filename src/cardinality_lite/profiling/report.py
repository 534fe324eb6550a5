"""Text reports for harness results."""
from __future__ import annotations

from cardinality_lite.profiling.harness import EstimateResult


def format_report(result: EstimateResult, label: str | None = None) -> str:
    """Format one EstimateResult as a readable block."""
    lines = [
        f"=== {label or result.variant} ===",
        f"Precision:         {result.precision} ({1 << result.precision:,} registers)",
        f"True count:        {result.true_count:,}",
        f"Estimate:          {result.estimate:,}",
        f"Relative error:    {result.relative_error * 100:.2f}%",
        f"Standard error:    {result.standard_error * 100:.2f}%",
        f"Elapsed:           {result.elapsed_ms:.1f} ms",
        f"Register memory:   {result.memory_bytes:,} bytes",
    ]
    return "\n".join(lines)


def format_comparison(results: list[EstimateResult]) -> str:
    """Format several results as one table, one row per variant."""
    lines = [
        f"{'Variant':<10} {'True':>10} {'Estimate':>10} {'Error':>8} "
        f"{'Std err':>8} {'Time (ms)':>10} {'Memory':>8}",
        "-" * 70,
    ]
    for r in results:
        lines.append(
            f"{r.variant:<10} {r.true_count:>10,} {r.estimate:>10,} "
            f"{r.relative_error * 100:>7.2f}% {r.standard_error * 100:>7.2f}% "
            f"{r.elapsed_ms:>10.1f} {r.memory_bytes:>8,}"
        )
    return "\n".join(lines)
