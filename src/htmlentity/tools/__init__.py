"""Developer tools for the HTML entity codec."""

from .benchmarks import BenchmarkResult, BenchmarkSuite, CodecBenchmark

__all__ = ["BenchmarkResult", "BenchmarkSuite", "CodecBenchmark"]
