"""Benchmark suite for torchcachemat.

Measures and reports:
- Repeated inversion without caching
- First (miss) and repeated (hit) cache_solve calls
- Cost of invalidate-and-recompute cycles

Generates markdown report with results.
"""

import argparse
import time
from collections import defaultdict
from dataclasses import dataclass

import torch

from torchcachemat import CacheableMatrix, cache_solve


@dataclass
class BenchmarkResult:
    """Single benchmark result."""

    name: str
    metric: str
    value: float
    unit: str
    details: str = ""


def _random_matrix(size: int) -> torch.Tensor:
    # Diagonally dominant, so always invertible
    torch.manual_seed(42)
    return torch.randn(size, size, dtype=torch.float64) + size * torch.eye(
        size, dtype=torch.float64
    )


def benchmark_cache_speedup(size: int, repeats: int) -> list[BenchmarkResult]:
    """Compare cached vs uncached inversion."""
    print(f"\n[Benchmark] Cache Speedup ({size}x{size}, {repeats} calls)")
    print("=" * 60)

    a = _random_matrix(size)

    print("  Running WITHOUT cache...")
    start = time.time()
    for _ in range(repeats):
        _ = torch.linalg.inv(a)
    time_nocache = time.time() - start
    print(f"    Time: {time_nocache:.3f}s")

    print("  Running WITH cache...")
    m = CacheableMatrix(a)
    start = time.time()
    cache_solve(m)
    time_miss = time.time() - start

    start = time.time()
    for _ in range(repeats - 1):
        _ = cache_solve(m)
    time_hits = time.time() - start

    time_cached = time_miss + time_hits
    speedup = time_nocache / time_cached if time_cached > 0 else float("inf")
    print(f"    Time: {time_cached:.3f}s, Speedup: {speedup:.1f}x")

    return [
        BenchmarkResult(
            name="Cache Speedup",
            metric="No cache",
            value=time_nocache,
            unit="seconds",
            details=f"{repeats} inversions",
        ),
        BenchmarkResult(
            name="Cache Speedup",
            metric="First call (miss)",
            value=time_miss,
            unit="seconds",
        ),
        BenchmarkResult(
            name="Cache Speedup",
            metric="Remaining calls (hits)",
            value=time_hits,
            unit="seconds",
            details=f"Speedup: {speedup:.1f}x",
        ),
    ]


def benchmark_invalidation(size: int, repeats: int) -> list[BenchmarkResult]:
    """Measure set_element + cache_solve cycles that always miss."""
    print(f"\n[Benchmark] Invalidation ({size}x{size}, {repeats} cycles)")
    print("=" * 60)

    m = CacheableMatrix(_random_matrix(size))
    start = time.time()
    for i in range(repeats):
        m.set_element(0, 0, float(size + i + 1))
        _ = cache_solve(m)
    elapsed = time.time() - start

    stats = m.get_stats()
    print(f"    Time: {elapsed:.3f}s, Invalidations: {stats['invalidations']}")

    return [
        BenchmarkResult(
            name="Invalidation",
            metric="Mutate + recompute",
            value=elapsed / repeats * 1000,
            unit="ms/cycle",
            details=f"{stats['invalidations']} invalidations",
        )
    ]


def generate_markdown_report(all_results: list[BenchmarkResult], output_file: str):
    """Generate markdown report from benchmark results."""
    print(f"\n[Report] Generating markdown report: {output_file}")

    with open(output_file, "w") as f:
        f.write("# torchcachemat Benchmark Report\n\n")
        f.write(f"**Generated:** {time.strftime('%Y-%m-%d %H:%M:%S')}\n\n")
        f.write(f"**System:** {torch.get_num_threads()} CPU threads\n\n")
        f.write("---\n\n")

        grouped = defaultdict(list)
        for result in all_results:
            grouped[result.name].append(result)

        for bench_name, results in grouped.items():
            f.write(f"## {bench_name}\n\n")

            f.write("| Metric | Value | Details |\n")
            f.write("|--------|-------|----------|\n")

            for result in results:
                value_str = f"{result.value:.3f} {result.unit}"
                f.write(f"| {result.metric} | {value_str} | {result.details} |\n")

            f.write("\n")


def main():
    parser = argparse.ArgumentParser(description="Benchmark torchcachemat performance")
    parser.add_argument(
        "--output",
        default="BENCHMARK.md",
        help="Output markdown file (default: BENCHMARK.md)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=512,
        help="Matrix dimension (default: 512)",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=50,
        help="Number of solve calls per benchmark (default: 50)",
    )
    args = parser.parse_args()

    print("=" * 60)
    print("torchcachemat Benchmark Suite")
    print("=" * 60)

    all_results = []
    all_results.extend(benchmark_cache_speedup(args.size, args.repeats))
    all_results.extend(benchmark_invalidation(args.size, args.repeats))

    generate_markdown_report(all_results, args.output)

    print("\n" + "=" * 60)
    print("Benchmark Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
