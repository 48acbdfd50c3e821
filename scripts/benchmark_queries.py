#!/usr/bin/env python3
"""
Performance benchmark for SparseTable queries against a linear fold.

For each array size:
- Build time for every operation
- Average query time over random ranges, sparse table vs linear scan
"""

import random
import time

from rangeQuery.operations import Operation
from rangeQuery.operations import fold
from rangeQuery.sparse_table import SparseTable


def _random_ranges(size: int, count: int, rng: random.Random) -> list[tuple[int, int]]:
    ranges = []
    for _ in range(count):
        left = rng.randrange(size)
        right = rng.randrange(left, size)
        ranges.append((left, right))
    return ranges


def benchmark_query_performance():
    """Compare per-query cost of the table with a linear fold."""
    print(f"\n{'='*70}")
    print("Benchmark: Sparse Table vs Linear Fold")
    print(f"{'='*70}")

    rng = random.Random(42)
    dataset_sizes = [1_000, 10_000, 100_000]

    for size in dataset_sizes:
        print(f"\n--- Dataset: {size:,} values ---")
        values = [rng.randint(-1_000_000, 1_000_000) for _ in range(size)]
        ranges = _random_ranges(size, 200, rng)

        print(f"{'Operation':<10} {'Build (s)':<12} {'Table (μs)':<12} {'Linear (μs)':<12} {'Speedup':<10}")
        print(f"{'-'*58}")
        for operation in Operation:
            start = time.perf_counter()
            table = SparseTable(values, operation)
            build_time = time.perf_counter() - start

            start = time.perf_counter()
            for left, right in ranges:
                table.query(left, right)
            table_time = (time.perf_counter() - start) / len(ranges) * 1_000_000

            start = time.perf_counter()
            for left, right in ranges:
                fold(operation, values[left : right + 1])
            linear_time = (time.perf_counter() - start) / len(ranges) * 1_000_000

            speedup = linear_time / table_time if table_time > 0 else float("inf")
            print(
                f"{operation.value:<10} {build_time:<12.3f} {table_time:<12.2f} "
                f"{linear_time:<12.2f} {speedup:<10.1f}x"
            )


def benchmark_scalability():
    """Min queries should stay flat as the array grows; sum queries grow with log n."""
    print(f"\n{'='*70}")
    print("Benchmark: Query Scalability (O(1) min vs O(log n) sum)")
    print(f"{'='*70}")

    rng = random.Random(7)
    print(f"\n{'Values':<12} {'Min (μs)':<12} {'Sum (μs)':<12}")
    print(f"{'-'*36}")
    for size in [256, 4_096, 65_536]:
        values = [rng.randint(-100, 100) for _ in range(size)]
        min_table = SparseTable(values, Operation.MIN)
        sum_table = SparseTable(values, Operation.SUM)

        iterations = 10_000
        start = time.perf_counter()
        for _ in range(iterations):
            min_table.query(0, size - 1)
        min_time = (time.perf_counter() - start) / iterations * 1_000_000

        start = time.perf_counter()
        for _ in range(iterations):
            sum_table.query(0, size - 2)
        sum_time = (time.perf_counter() - start) / iterations * 1_000_000

        print(f"{size:<12,} {min_time:<12.3f} {sum_time:<12.3f}")

    print(f"{'='*70}\n")


if __name__ == "__main__":
    benchmark_query_performance()
    benchmark_scalability()
