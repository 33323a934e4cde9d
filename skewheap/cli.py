"""
Skew Heap Command-Line Interface (CLI)

Subcommands:
- run:   execute a CREAR/INSERTAR/BORRAR/MIN/MODIFICAR/FIN session
- sort:  heap-sort integers through a SkewHeap
- bench: time the heap operations and write a CSV report

Usage examples:
    python -m skewheap.cli run --input session.txt
    python -m skewheap.cli sort 5 3 8 1
    python -m skewheap.cli --log-level INFO bench --output bench.csv --steps 6
"""

import argparse
import logging
import sys

from . import bench
from .datastructures import SkewHeap
from .session import run_session

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level):
    """Attach a stderr handler to the package logger at *level*."""
    logger = logging.getLogger("skewheap")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


# -------------------------------------------------------------------
# Command handlers
# -------------------------------------------------------------------

def cmd_run(args):
    """Run one protocol session from a file or stdin."""
    src = open(args.input, "r", encoding="utf-8") if args.input else sys.stdin
    dst = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
    try:
        result = run_session(src, dst)
    finally:
        if args.input:
            src.close()
        if args.output:
            dst.close()
    return 0 if result.ok else 1


def cmd_sort(args):
    """Print the given integers in non-decreasing order."""
    heap = SkewHeap.from_iterable(args.values)
    print(" ".join(str(v) for v in heap.drain()))
    return 0


def cmd_bench(args):
    """Benchmark insert/extract_min/peek_min/update_key into a CSV."""
    rows = bench.run_benchmarks(
        args.output,
        base_input=args.base,
        steps=args.steps,
        iterations=args.iterations,
        seed=args.seed,
    )
    for size, op_name, avg_time, std_time, avg_space in rows:
        print(f"{op_name:<11} | Size: {size:<8} | Avg Time: {avg_time} ms | "
              f"Std: {std_time} ms | Avg Space: {avg_space} bytes")
    print(f"\nBenchmark completed. Results saved to {args.output}")
    return 0


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="python -m skewheap.cli", description="Skew heap CLI")
    p.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("run", help="Run a text protocol session")
    s.add_argument("--input", help="Session file (default: stdin)")
    s.add_argument("--output", help="Transcript file (default: stdout)")
    s.set_defaults(func=cmd_run)

    s = sub.add_parser("sort", help="Heap-sort integers")
    s.add_argument("values", type=int, nargs="+")
    s.set_defaults(func=cmd_sort)

    s = sub.add_parser("bench", help="Benchmark heap operations")
    s.add_argument("--output", required=True)
    s.add_argument("--base", type=int, default=100)
    s.add_argument("--steps", type=int, default=8)
    s.add_argument("--iterations", type=int, default=5)
    s.add_argument("--seed", type=int, default=None)
    s.set_defaults(func=cmd_bench)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m skewheap.cli`."""
    argv = argv or sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
