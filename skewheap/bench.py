"""Timing and space benchmark for SkewHeap operations.

Input sizes grow exponentially (``base * 2**i``). Each (operation, size)
cell is measured several times and written as one CSV row.
"""

import csv
import logging
import random
import statistics
import sys
import time
from typing import Callable, Dict, List, Optional

from .datastructures import Direction, SkewHeap

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Input Size",
    "Operation",
    "Average Time (ms)",
    "Standard Deviation (ms)",
    "Average Space (bytes)",
]

# ----------------------------
# Helper Functions
# ----------------------------

def generate_random_list(size: int, rng: random.Random) -> List[int]:
    """Generate a list of random integers of given size."""
    return [rng.randint(0, 1000000) for _ in range(size)]


def measure_space(heap: SkewHeap) -> int:
    """Bytes held by every node of *heap* plus its keys."""
    total = sys.getsizeof(heap)
    for node in heap._iter_nodes():
        if node is not heap:
            total += sys.getsizeof(node)
        total += sys.getsizeof(node._key)
    return total


def measure_operation(operation: Callable[[List[int]], SkewHeap], input_size: int,
                      rng: random.Random, iterations: int = 5):
    """Run the operation multiple times; return (avg ms, std ms, avg bytes)."""
    times = []
    sizes = []
    for _ in range(iterations):
        data = generate_random_list(input_size, rng)
        start = time.perf_counter()
        heap = operation(data)
        end = time.perf_counter()
        times.append((end - start) * 1000)  # convert to milliseconds
        sizes.append(measure_space(heap))

    avg_time = statistics.mean(times)
    std_dev = statistics.stdev(times) if len(times) > 1 else 0.0
    return avg_time, std_dev, statistics.mean(sizes)

# ----------------------------
# Operations to Benchmark
# ----------------------------

def bench_insert(data: List[int]) -> SkewHeap:
    return SkewHeap.from_iterable(data)


def bench_extract_min(data: List[int]) -> SkewHeap:
    heap = SkewHeap.from_iterable(data)
    while not heap.is_empty():
        heap.extract_min()
    return heap


def bench_peek_min(data: List[int]) -> SkewHeap:
    heap = SkewHeap.from_iterable(data)
    for _ in range(min(3, len(data))):
        heap.peek_min()
    return heap


def bench_update_key(data: List[int]) -> SkewHeap:
    heap = SkewHeap.from_iterable(data)
    # Lower the left child's key a few times; each update invalidates the view.
    for i in range(min(3, len(data) - 1)):
        target = heap.navigate([Direction.LEFT])
        heap.update_key(target.key - i - 1, target)
    return heap


OPERATIONS: Dict[str, Callable[[List[int]], SkewHeap]] = {
    "insert": bench_insert,
    "extract_min": bench_extract_min,
    "peek_min": bench_peek_min,
    "update_key": bench_update_key,
}

# ----------------------------
# Benchmark Runner
# ----------------------------

def run_benchmarks(output_file: str, base_input: int = 100, steps: int = 8,
                   iterations: int = 5, seed: Optional[int] = None) -> List[list]:
    """Run exponential performance tests and write them to *output_file*.

    Returns the rows written (without the header).
    """
    rng = random.Random(seed)
    input_sizes = [base_input * (2 ** i) for i in range(steps)]
    rows = []

    with open(output_file, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(CSV_HEADER)

        for op_name, op_func in OPERATIONS.items():
            for size in input_sizes:
                avg_time, std_time, avg_space = measure_operation(op_func, size, rng, iterations)
                row = [size, op_name, f"{avg_time:.3f}", f"{std_time:.3f}", f"{avg_space:.0f}"]
                writer.writerow(row)
                rows.append(row)
                logger.info("%-11s | Size: %-8d | Avg Time: %.3f ms | Std: %.3f ms | Avg Space: %.0f bytes",
                            op_name, size, avg_time, std_time, avg_space)

    return rows
