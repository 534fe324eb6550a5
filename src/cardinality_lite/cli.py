"""cardinality-lite CLI entry point.

Usage: cardinality-lite [-v] estimate|bench ...
"""
import argparse
import logging
import sys

from cardinality_lite.sketch.hyperloglog import DEFAULT_PRECISION


def _add_estimate_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "estimate",
        help="Estimate the number of distinct lines in a file or stdin.",
    )
    p.add_argument(
        "file", nargs="?", type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="Input file, one key per line (default: stdin)",
    )
    p.add_argument(
        "--variant", choices=("dense", "presto"), default="dense",
        help="Register layout (default: dense)",
    )
    p.add_argument(
        "--precision", type=int, default=DEFAULT_PRECISION,
        help=f"Precision bits, 2^P registers (default: {DEFAULT_PRECISION})",
    )


def _add_bench_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "bench",
        help="Run both variants on synthetic keys and compare.",
    )
    p.add_argument(
        "--keys", type=int, default=100_000,
        help="Distinct keys to generate (default: 100000)",
    )
    p.add_argument(
        "--precision", type=int, default=DEFAULT_PRECISION,
        help=f"Precision bits (default: {DEFAULT_PRECISION})",
    )
    p.add_argument(
        "--workers", type=int, default=4,
        help="Threads feeding the estimator (default: 4)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )


def _run_estimate(args: argparse.Namespace) -> None:
    from cardinality_lite.profiling.harness import make_estimator

    estimator = make_estimator(args.variant, args.precision)
    with args.file as fh:
        for line in fh:
            estimator.add(line.rstrip("\n"))
    estimator.compute_cardinality()
    print(estimator.cardinality)


def _run_bench(args: argparse.Namespace) -> None:
    from cardinality_lite.profiling.harness import generate_keys, run_estimate
    from cardinality_lite.profiling.report import format_comparison, format_report

    keys = generate_keys(args.keys, seed=args.seed)
    results = [
        run_estimate(variant, args.precision, keys, workers=args.workers)
        for variant in ("dense", "presto")
    ]
    for result in results:
        print(format_report(result))
        print()
    print(format_comparison(results))


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="cardinality-lite",
        description="Distinct counting with HyperLogLog -- pure Python.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log register updates at DEBUG level.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_estimate_parser(subparsers)
    _add_bench_parser(subparsers)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "estimate":
        _run_estimate(args)
    elif args.command == "bench":
        _run_bench(args)
