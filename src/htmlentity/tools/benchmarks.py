"""Performance benchmarking for HTML entity encoding and decoding.

Times encode and decode over representative inputs, compares them with the
standard library's ``html.escape``/``html.unescape`` and tracks process
memory with psutil.
"""

import gc
import html
import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import psutil

from htmlentity.entity import CharacterSet, EncodeMode, decode, encode
from htmlentity.shared import get_logger

MS_PER_SECOND = 1000.0
BYTES_PER_MB = 1024 * 1024

SAMPLE_FRAGMENT = """
<div class="s-rank-title">
  <a href="http://top.example.com/?fr=mhd_card" target="_blank">
    <div class="title-text c-font-medium c-color-t">热榜 &amp; trending</div>
  </a>
  <a class="hot-refresh c-font-normal c-color-gray2">
    <i class="c-icon">&#xe619;</i><span class="hot-refresh-text">换一换</span>
  </a>
</div>
"""


@dataclass
class BenchmarkResult:
    """Result of a single benchmark run."""

    implementation: str
    operation: str
    test_case: str
    processing_time_ms: float
    memory_used_mb: float
    bytes_processed: int
    units_generated: int
    success: bool
    error_message: Optional[str] = None

    @property
    def bytes_per_second(self) -> float:
        """Calculate input bytes processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.bytes_processed * MS_PER_SECOND) / self.processing_time_ms


@dataclass
class BenchmarkSuite:
    """Collection of benchmark results with statistical analysis."""

    results: List[BenchmarkResult] = field(default_factory=list)
    suite_name: str = "Entity Codec Benchmark"
    timestamp: float = field(default_factory=time.time)

    def add_result(self, result: BenchmarkResult) -> None:
        self.results.append(result)

    def get_results(
        self, implementation: str, operation: Optional[str] = None
    ) -> List[BenchmarkResult]:
        """Get results for an implementation, optionally for one operation."""
        return [
            r for r in self.results
            if r.implementation == implementation
            and (operation is None or r.operation == operation)
        ]

    def get_statistics(
        self, implementation: str, operation: str, metric: str = "bytes_per_second"
    ) -> Dict[str, float]:
        """Get statistical analysis of one metric.

        Args:
            implementation: Implementation name
            operation: ``encode`` or ``decode``
            metric: ``bytes_per_second``, ``processing_time_ms`` or
                ``memory_used_mb``

        Returns:
            min/max/mean/median/stdev/count, or an empty dict without data
        """
        values = [
            getattr(r, metric)
            for r in self.get_results(implementation, operation)
            if r.success
        ]
        if not values:
            return {}

        return {
            "min": min(values),
            "max": max(values),
            "mean": statistics.mean(values),
            "median": statistics.median(values),
            "stdev": statistics.stdev(values) if len(values) > 1 else 0.0,
            "count": len(values),
        }

    def generate_report(self) -> Dict[str, Any]:
        """Generate a summary report keyed by implementation and operation."""
        implementations = sorted({r.implementation for r in self.results})
        operations = sorted({r.operation for r in self.results})

        summary: Dict[str, Any] = {}
        for implementation in implementations:
            summary[implementation] = {}
            for operation in operations:
                runs = self.get_results(implementation, operation)
                if not runs:
                    continue
                successful = [r for r in runs if r.success]
                summary[implementation][operation] = {
                    "total_runs": len(runs),
                    "successful_runs": len(successful),
                    "throughput": self.get_statistics(implementation, operation),
                    "memory": self.get_statistics(
                        implementation, operation, "memory_used_mb"
                    ),
                }

        return {
            "suite_name": self.suite_name,
            "timestamp": self.timestamp,
            "total_results": len(self.results),
            "implementations": implementations,
            "summary": summary,
        }


class CodecBenchmark:
    """Encode/decode throughput benchmark."""

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        warmup_runs: int = 3,
        benchmark_runs: int = 10,
        repeat_fragment: int = 50
    ) -> None:
        """Initialize benchmark.

        Args:
            correlation_id: Optional correlation ID for tracking
            warmup_runs: Number of warmup runs before measuring
            benchmark_runs: Number of measured runs per case
            repeat_fragment: How many copies of the sample fragment form the
                ``large`` test case
        """
        if warmup_runs < 0:
            raise ValueError("warmup_runs must be >= 0")
        if benchmark_runs <= 0:
            raise ValueError("benchmark_runs must be > 0")
        self.correlation_id = correlation_id
        self.warmup_runs = warmup_runs
        self.benchmark_runs = benchmark_runs
        self.logger = get_logger(__name__, correlation_id, "benchmark")
        self.test_cases = self._create_test_cases(repeat_fragment)

    def _create_test_cases(self, repeat: int) -> Dict[str, str]:
        large = SAMPLE_FRAGMENT * max(1, repeat)
        return {
            "fragment": SAMPLE_FRAGMENT,
            "large": large,
            "hex_escaped": encode(
                SAMPLE_FRAGMENT, EncodeMode.HEX, CharacterSet.ALL
            ).to_text(),
            "malformed": "&&#;&#x;&amp &lt &#xZZ; &unknown; &#99999999999;" * 20,
        }

    def _measure_memory_usage(self) -> float:
        """Get current memory usage in MB."""
        process = psutil.Process()
        return process.memory_info().rss / BYTES_PER_MB

    def _time_operation(
        self,
        implementation: str,
        operation: str,
        test_case: str,
        content: str,
        func: Callable[[str], int],
    ) -> BenchmarkResult:
        for _ in range(self.warmup_runs):
            func(content)

        gc.collect()
        memory_before = self._measure_memory_usage()
        start_time = time.perf_counter()

        try:
            units = func(content)
            success = True
            error_message = None
        except Exception as e:
            self.logger.exception(
                "Benchmark operation failed",
                extra={"implementation": implementation, "test_case": test_case}
            )
            units = 0
            success = False
            error_message = str(e)

        processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
        memory_used = max(0.0, self._measure_memory_usage() - memory_before)

        return BenchmarkResult(
            implementation=implementation,
            operation=operation,
            test_case=test_case,
            processing_time_ms=processing_time,
            memory_used_mb=memory_used,
            bytes_processed=len(content.encode("utf-8")),
            units_generated=units,
            success=success,
            error_message=error_message,
        )

    def run_benchmark(self, include_stdlib: bool = True) -> BenchmarkSuite:
        """Run the benchmark suite.

        Args:
            include_stdlib: Also time ``html.escape``/``html.unescape``

        Returns:
            BenchmarkSuite with one result per run
        """
        operations: Dict[str, Dict[str, Callable[[str], int]]] = {
            "htmlentity": {
                "encode": lambda text: len(encode(text)),
                "decode": lambda text: len(decode(text)),
            },
        }
        if include_stdlib:
            operations["stdlib"] = {
                "encode": lambda text: len(html.escape(text)),
                "decode": lambda text: len(html.unescape(text)),
            }

        suite = BenchmarkSuite()
        self.logger.info(
            "Starting codec benchmark",
            extra={
                "test_cases": len(self.test_cases),
                "benchmark_runs": self.benchmark_runs,
            }
        )
        for test_case, content in self.test_cases.items():
            for implementation, funcs in operations.items():
                for operation, func in funcs.items():
                    for _ in range(self.benchmark_runs):
                        suite.add_result(self._time_operation(
                            implementation, operation, test_case, content, func
                        ))

        self.logger.info(
            "Completed codec benchmark",
            extra={"total_results": len(suite.results)}
        )
        return suite
