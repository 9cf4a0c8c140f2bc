"""
Benchmarking module for set implementations.

This module provides a Triton-inspired benchmarking framework for comparing
PrimeHashSet against the built-in set across operations and sizes.
"""

from .benchmark import (
    OPERATIONS,
    BenchmarkConfig,
    BenchmarkResult,
    BenchmarkRunner,
    ComplexityBenchmarkHelper,
    create_set_benchmark,
    perf_report,
    time_operation,
)

__all__ = [
    "OPERATIONS",
    "BenchmarkConfig",
    "BenchmarkResult",
    "BenchmarkRunner",
    "ComplexityBenchmarkHelper",
    "create_set_benchmark",
    "perf_report",
    "time_operation",
]
