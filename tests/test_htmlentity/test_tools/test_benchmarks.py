"""Tests for the codec benchmark tools."""

import pytest

from htmlentity.tools import BenchmarkResult, BenchmarkSuite, CodecBenchmark


def _result(implementation="htmlentity", operation="encode", time_ms=10.0,
            success=True):
    return BenchmarkResult(
        implementation=implementation,
        operation=operation,
        test_case="fragment",
        processing_time_ms=time_ms,
        memory_used_mb=0.5,
        bytes_processed=1000,
        units_generated=10,
        success=success,
    )


class TestBenchmarkResult:
    """Test benchmark result calculations."""

    def test_bytes_per_second(self):
        assert _result(time_ms=10.0).bytes_per_second == 100000.0

    def test_zero_time(self):
        assert _result(time_ms=0.0).bytes_per_second == 0.0


class TestBenchmarkSuite:
    """Test result collection and statistics."""

    def test_get_results_filters(self):
        suite = BenchmarkSuite()
        suite.add_result(_result(operation="encode"))
        suite.add_result(_result(operation="decode"))
        suite.add_result(_result(implementation="stdlib"))

        assert len(suite.get_results("htmlentity")) == 2
        assert len(suite.get_results("htmlentity", "decode")) == 1

    def test_statistics(self):
        suite = BenchmarkSuite()
        suite.add_result(_result(time_ms=10.0))
        suite.add_result(_result(time_ms=20.0))
        suite.add_result(_result(time_ms=5.0, success=False))

        stats = suite.get_statistics("htmlentity", "encode", "processing_time_ms")
        assert stats["count"] == 2
        assert stats["min"] == 10.0
        assert stats["max"] == 20.0
        assert stats["mean"] == 15.0

    def test_statistics_without_data(self):
        assert BenchmarkSuite().get_statistics("htmlentity", "encode") == {}

    def test_report(self):
        suite = BenchmarkSuite()
        suite.add_result(_result())
        suite.add_result(_result(success=False))

        report = suite.generate_report()
        assert report["total_results"] == 2
        assert report["implementations"] == ["htmlentity"]
        encode_summary = report["summary"]["htmlentity"]["encode"]
        assert encode_summary["total_runs"] == 2
        assert encode_summary["successful_runs"] == 1


class TestCodecBenchmark:
    """Test running the benchmark."""

    def test_invalid_run_counts(self):
        with pytest.raises(ValueError):
            CodecBenchmark(warmup_runs=-1)
        with pytest.raises(ValueError):
            CodecBenchmark(benchmark_runs=0)

    def test_test_cases(self):
        benchmark = CodecBenchmark(repeat_fragment=2)
        cases = benchmark.test_cases
        assert set(cases) == {"fragment", "large", "hex_escaped", "malformed"}
        assert cases["large"] == cases["fragment"] * 2
        assert "<" not in cases["hex_escaped"]

    def test_run_benchmark(self):
        benchmark = CodecBenchmark(
            correlation_id="bench", warmup_runs=0, benchmark_runs=1, repeat_fragment=1
        )
        suite = benchmark.run_benchmark(include_stdlib=False)

        # 4 test cases x 2 operations
        assert len(suite.results) == 8
        assert all(r.success for r in suite.results)
        assert all(r.units_generated > 0 for r in suite.results)
        assert all(r.memory_used_mb >= 0 for r in suite.results)

    def test_run_benchmark_with_stdlib(self):
        benchmark = CodecBenchmark(warmup_runs=0, benchmark_runs=1, repeat_fragment=1)
        suite = benchmark.run_benchmark()
        assert {r.implementation for r in suite.results} == {"htmlentity", "stdlib"}
        assert len(suite.results) == 16
