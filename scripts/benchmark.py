"""Standalone benchmarking for noise table construction and sampling.

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --sizes 64 128 256
    python scripts/benchmark.py --octaves 1 4 8 --table-width 128
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from fractal_cell_noise import LayeredNoiseConfig, LayeredNoiseField, NoiseTable


@dataclass
class TimingResult:
    name: str
    duration_seconds: float
    sample_count: int = 0

    def __str__(self) -> str:
        samples = f" ({self.sample_count} samples)" if self.sample_count else ""
        return f"{self.name}: {self.duration_seconds:.4f}s{samples}"


@dataclass
class BenchmarkReport:
    results: list[TimingResult] = field(default_factory=list)
    total_duration: float = 0.0
    sample_count: int = 0
    octave_count: int = 0

    def add(self, result: TimingResult) -> None:
        self.results.append(result)

    def print_report(self) -> None:
        print(f"\n{'='*60}")
        print(f"BENCHMARK: {self.sample_count} samples, {self.octave_count} octaves")
        print(f"{'='*60}")
        for result in self.results:
            print(f"  {result}")
        print(f"{'-'*60}")
        print(f"  TOTAL: {self.total_duration:.4f}s")
        throughput = self.sample_count / self.total_duration if self.total_duration > 0 else 0
        print(f"  THROUGHPUT: {throughput:.0f} samples/sec")
        print(f"{'='*60}\n")


class Timer:
    def __init__(self, name: str = "operation"):
        self.name = name
        self.duration: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.duration = time.perf_counter() - self.start_time


def benchmark_grid(
    size: int = 128,
    octaves: int = 4,
    table_width: int = 256,
    seed: int = 42,
    verbose: bool = True,
) -> BenchmarkReport:
    """Benchmark building a table and sampling a square grid."""
    report = BenchmarkReport(sample_count=size * size, octave_count=octaves)
    total_start = time.perf_counter()

    with Timer("build table") as t:
        table = NoiseTable(width=table_width, seed=seed)
    report.add(TimingResult(f"build {table_width}x{table_width} table", t.duration))

    config = LayeredNoiseConfig(
        x_size=size,
        y_size=size,
        octave_count=octaves,
        table_width=table_width,
    )
    field_ = LayeredNoiseField(config, table=table)

    with Timer("sample grid") as t:
        field_.sample_grid(size, size)
    report.add(TimingResult("sample_grid", t.duration, sample_count=size * size))

    report.total_duration = time.perf_counter() - total_start

    if verbose:
        report.print_report()

    return report


def run_scaling_benchmark(
    sizes: list[int] | None = None,
    octave_counts: list[int] | None = None,
    table_width: int = 256,
    seed: int = 42,
) -> None:
    """Run benchmarks across grid sizes and octave counts."""
    if sizes is None:
        sizes = [32, 64, 128]
    if octave_counts is None:
        octave_counts = [4]

    print("\n" + "=" * 70)
    print("SCALING BENCHMARK")
    print(f"Table width: {table_width}")
    print("=" * 70)

    print("\n--- SCALING BY GRID SIZE ---")
    print(f"Octave count fixed at: {octave_counts[0]}")
    print(f"{'Size':<10} {'Total(s)':<12} {'Sample(s)':<12} {'samples/sec':<12}")
    print("-" * 50)

    for size in sizes:
        report = benchmark_grid(
            size=size,
            octaves=octave_counts[0],
            table_width=table_width,
            seed=seed,
            verbose=False,
        )
        sample_time = next((r.duration_seconds for r in report.results if r.sample_count), 0)
        throughput = report.sample_count / sample_time if sample_time > 0 else 0
        print(f"{size:<10} {report.total_duration:<12.4f} {sample_time:<12.4f} {throughput:<12.0f}")

    if len(octave_counts) > 1:
        fixed_size = sizes[len(sizes)//2]
        print("\n--- SCALING BY OCTAVE COUNT ---")
        print(f"Grid size fixed at: {fixed_size}")
        print(f"{'Octaves':<10} {'Total(s)':<12} {'Sample(s)':<12} {'samples/sec':<12}")
        print("-" * 50)

        for octaves in octave_counts:
            report = benchmark_grid(
                size=fixed_size,
                octaves=octaves,
                table_width=table_width,
                seed=seed,
                verbose=False,
            )
            sample_time = next((r.duration_seconds for r in report.results if r.sample_count), 0)
            throughput = report.sample_count / sample_time if sample_time > 0 else 0
            print(f"{octaves:<10} {report.total_duration:<12.4f} {sample_time:<12.4f} {throughput:<12.0f}")

    print("\n" + "=" * 70)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Benchmark noise sampling performance")
    parser.add_argument("--sizes", nargs="+", type=int, default=[32, 64, 128],
                        help="Square grid sizes to test")
    parser.add_argument("--octaves", nargs="+", type=int, default=[4],
                        help="Octave counts to test")
    parser.add_argument("--table-width", type=int, default=256,
                        help="Noise table width (power of two)")
    parser.add_argument("--seed", type=int, default=42,
                        help="Table shuffle seed")
    args = parser.parse_args()

    run_scaling_benchmark(
        sizes=args.sizes,
        octave_counts=args.octaves,
        table_width=args.table_width,
        seed=args.seed,
    )
