import os
import random
import statistics
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import psutil

from ..data_structures.prime_hashset import PrimeHashSet

OPERATIONS = ("contains_hit", "contains_miss", "add", "remove")
MISSING_ELEMENT = "@not@present@"


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run, similar to triton.testing.Benchmark"""

    x_names: List[str]
    x_vals: List[Union[int, float]]
    line_arg: str
    line_vals: List[str]
    line_names: List[str]
    styles: List[Tuple[str, str]]
    ylabel: str
    plot_name: str
    args: Dict[str, Any] = field(default_factory=dict)
    warmup_runs: int = 3
    measure_runs: int = 10
    min_runtime_ms: float = 10.0
    measure_memory: bool = True
    measure_setup_time: bool = True


@dataclass
class BenchmarkResult:
    """Result of a single benchmark measurement"""

    value: float
    std_dev: float
    measurements: List[float]
    config_name: str
    x_value: Union[int, float]
    setup_time: Optional[float] = None
    memory_usage: Optional[float] = None
    stats: Optional[dict] = None


def current_memory_mb() -> float:
    """Resident set size of this process in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class BenchmarkRunner:
    """Core benchmarking runner that handles timing and statistics"""

    def __init__(self, config: BenchmarkConfig):
        self.config = config
        self.results: Dict[str, List[BenchmarkResult]] = {}
        self.total_steps: int = 0
        self.current_step: int = 0

    def do_bench(self, fn: Callable[[], Any]) -> Tuple[float, float, List[float]]:
        """
        Time a function call multiple times and return statistics.

        If fn returns a number it is taken as its own measurement in ms, so
        untimed bookkeeping inside fn (e.g. undoing an add) is excluded.
        """
        for _ in range(self.config.warmup_runs):
            fn()

        times: List[float] = []
        total_runtime = 0.0

        while (
            len(times) < self.config.measure_runs
            or total_runtime < self.config.min_runtime_ms
        ):
            start = time.perf_counter()
            measured = fn()
            end = time.perf_counter()

            if isinstance(measured, (int, float)) and not isinstance(measured, bool):
                runtime_ms = float(measured)
            else:
                runtime_ms = (end - start) * 1000
            times.append(runtime_ms)
            total_runtime += (end - start) * 1000

        mean_time = statistics.mean(times)
        std_dev = statistics.stdev(times) if len(times) > 1 else 0.0

        return mean_time, std_dev, times

    def run_benchmark(
        self,
        benchmark_fn: Callable[..., Any],
        setup_fns: Dict[str, Callable[..., Dict[str, Any]]],
    ) -> None:
        """Run the complete benchmark suite with progress indication"""
        self.total_steps = len(self.config.line_vals) * len(self.config.x_vals)
        self.current_step = 0

        print(f"\nStarting benchmark: {self.config.plot_name}")
        print(
            f"Testing {len(self.config.line_vals)} providers on {len(self.config.x_vals)} sizes"
        )
        print(f"Started at {datetime.now().strftime('%H:%M:%S')}")
        print("=" * 80)

        for i, line_val in enumerate(self.config.line_vals):
            line_results = []
            name = (
                self.config.line_names[i]
                if i < len(self.config.line_names)
                else line_val.replace("_", " ").title()
            )

            print(f"\n[{i + 1}/{len(self.config.line_vals)}] Testing {name}")
            print("-" * 60)

            for x_val in self.config.x_vals:
                self.current_step += 1
                progress = (self.current_step / self.total_steps) * 100
                print(
                    f"[{self.current_step:2d}/{self.total_steps}] "
                    f"N={x_val:>12,} ({progress:5.1f}%) ",
                    end="",
                    flush=True,
                )
                start_time = time.time()

                try:
                    args = self.config.args.copy()
                    args[self.config.x_names[0]] = x_val
                    args[self.config.line_arg] = line_val

                    setup_data: Dict[str, Any] = {}
                    if line_val in setup_fns:
                        setup_data = setup_fns[line_val](**args)
                        args.update(setup_data)

                    mean_time, std_dev, measurements = self.do_bench(
                        lambda: benchmark_fn(**args)
                    )

                    result = BenchmarkResult(
                        value=mean_time,
                        std_dev=std_dev,
                        measurements=measurements,
                        config_name=line_val,
                        x_value=x_val,
                        setup_time=setup_data.get("setup_time")
                        if self.config.measure_setup_time
                        else None,
                        memory_usage=setup_data.get("memory_usage")
                        if self.config.measure_memory
                        else None,
                        stats=setup_data.get("stats"),
                    )

                    elapsed = time.time() - start_time
                    print(
                        f"-> {mean_time:8.5f}ms (+/-{std_dev:8.5f}) [{elapsed:4.1f}s]"
                    )

                except Exception as e:
                    elapsed = time.time() - start_time
                    print(f"-> FAILED: {str(e)[:50]}... [{elapsed:4.1f}s]")
                    # Keep a placeholder so every line has one result per size
                    result = BenchmarkResult(
                        value=float("inf"),
                        std_dev=0.0,
                        measurements=[],
                        config_name=line_val,
                        x_value=x_val,
                    )
                line_results.append(result)

            self.results[line_val] = line_results

        print("\n" + "=" * 80)
        print(f"Benchmark completed at {datetime.now().strftime('%H:%M:%S')}")

    def generate_plot(self, show_plots: bool = True, save_plot: bool = True) -> None:
        """Generate performance plots with error bars"""
        self._generate_single_plot(
            "Operation Time",
            self.config.ylabel,
            lambda r: r.value,
            lambda r: r.std_dev,
            show_plots,
            save_plot,
        )

        if self.config.measure_setup_time:
            self._generate_single_plot(
                "Setup Time",
                "Setup Time (ms)",
                lambda r: r.setup_time,
                lambda r: 0,
                show_plots,
                save_plot,
                suffix="-setup",
            )

        if self.config.measure_memory:
            self._generate_single_plot(
                "Memory Usage",
                "Memory (MB)",
                lambda r: r.memory_usage,
                lambda r: 0,
                show_plots,
                save_plot,
                suffix="-memory",
            )

    def _generate_single_plot(
        self,
        title_suffix: str,
        ylabel: str,
        value_fn: Callable,
        error_fn: Callable,
        show_plots: bool,
        save_plot: bool,
        suffix: str = "",
    ) -> None:
        plt.figure(figsize=(12, 8))

        for i, line_val in enumerate(self.config.line_vals):
            if line_val not in self.results:
                continue

            valid = [
                r
                for r in self.results[line_val]
                if value_fn(r) is not None and value_fn(r) != float("inf")
            ]
            if not valid:
                continue

            color, style = (
                self.config.styles[i] if i < len(self.config.styles) else ("blue", "-")
            )
            label = (
                self.config.line_names[i]
                if i < len(self.config.line_names)
                else line_val
            )

            plt.errorbar(
                [r.x_value for r in valid],
                [value_fn(r) for r in valid],
                yerr=[error_fn(r) for r in valid],
                color=color,
                linestyle=style,
                marker="o",
                label=label,
                capsize=5,
                capthick=2,
            )

        plt.xlabel(self.config.x_names[0])
        plt.ylabel(ylabel)
        plt.xscale("log")
        plt.title(f"{self.config.plot_name} - {title_suffix}")
        plt.legend()
        plt.grid(True, alpha=0.3)
        plt.tight_layout()

        if save_plot:
            filename = f"{self.config.plot_name}{suffix}.png"
            plt.savefig(filename, dpi=300, bbox_inches="tight")

        if show_plots:
            plt.show()
        else:
            plt.close()

    def print_data(self) -> None:
        """Print detailed benchmark results"""
        print(f"\n{self.config.plot_name} Benchmark Results")
        print("=" * 80)

        for line_val in self.config.line_vals:
            if line_val not in self.results:
                continue

            line_name = self.config.line_names[self.config.line_vals.index(line_val)]
            print(f"\n{line_name} ({line_val}):")

            header = f"{'N':<10} {'Op (ms)':<12} {'Std Dev':<10}"
            if self.config.measure_setup_time:
                header += f" {'Setup (ms)':<12}"
            if self.config.measure_memory:
                header += f" {'Memory (MB)':<12}"
            header += f" {'Capacity':<10}"
            print(header)
            print("-" * len(header))

            for result in self.results[line_val]:
                row = f"{result.x_value:<10} {result.value:<12.5f} {result.std_dev:<10.5f}"
                if self.config.measure_setup_time and result.setup_time is not None:
                    row += f" {result.setup_time:<12.4f}"
                elif self.config.measure_setup_time:
                    row += f" {'N/A':<12}"
                if self.config.measure_memory and result.memory_usage is not None:
                    row += f" {result.memory_usage:<12.2f}"
                elif self.config.measure_memory:
                    row += f" {'N/A':<12}"
                if result.stats is not None:
                    row += f" {result.stats['capacity']:<10,}"
                else:
                    row += f" {'N/A':<10}"
                print(row)


def perf_report(config: BenchmarkConfig):
    """Decorator for performance reporting, similar to triton.testing.perf_report"""

    def decorator(func):
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        def run(
            show_plots: bool = True,
            print_data: bool = True,
            setup_fns: Optional[Dict[str, Callable]] = None,
        ):
            runner = BenchmarkRunner(config)
            runner.run_benchmark(func, setup_fns or {})

            if print_data:
                runner.print_data()
            if show_plots:
                runner.generate_plot(show_plots=show_plots)

            return runner

        wrapper.run = run
        wrapper.config = config
        return wrapper

    return decorator


class ComplexityBenchmarkHelper:
    """Builds the structures under test and picks probe elements"""

    @staticmethod
    def setup_prime_hashset(elements: Sequence, N: int, **kwargs) -> Dict[str, Any]:
        """Build a PrimeHashSet by adding the first N elements one at a time"""
        load_factor = kwargs.get("load_factor", 0.75)
        memory_before = current_memory_mb()
        setup_start = time.perf_counter()

        hashset = PrimeHashSet(load_factor=load_factor)
        for element in elements[:N]:
            hashset.add(element)

        setup_time = (time.perf_counter() - setup_start) * 1000

        return {
            "structure": hashset,
            "setup_time": setup_time,
            "memory_usage": current_memory_mb() - memory_before,
            "stats": hashset.get_stats(),
        }

    @staticmethod
    def setup_builtin_set(elements: Sequence, N: int, **kwargs) -> Dict[str, Any]:
        """Build a built-in set from the first N elements as a baseline"""
        memory_before = current_memory_mb()
        setup_start = time.perf_counter()

        structure = set()
        for element in elements[:N]:
            structure.add(element)

        setup_time = (time.perf_counter() - setup_start) * 1000

        return {
            "structure": structure,
            "setup_time": setup_time,
            "memory_usage": current_memory_mb() - memory_before,
        }

    @staticmethod
    def get_existing_element(elements: Sequence, N: int):
        """Pick a random element among the first N"""
        return elements[random.randint(0, min(N, len(elements)) - 1)]


def time_operation(structure, operation: str, present, missing) -> float:
    """
    Time a single set operation in ms, leaving the structure's contents as
    they were before the call.
    """
    if operation == "contains_hit":
        start = time.perf_counter()
        _ = present in structure
        return (time.perf_counter() - start) * 1000

    if operation == "contains_miss":
        start = time.perf_counter()
        _ = missing in structure
        return (time.perf_counter() - start) * 1000

    if operation == "add":
        start = time.perf_counter()
        structure.add(missing)
        elapsed = (time.perf_counter() - start) * 1000
        structure.discard(missing)
        return elapsed

    if operation == "remove":
        start = time.perf_counter()
        structure.discard(present)
        elapsed = (time.perf_counter() - start) * 1000
        structure.add(present)
        return elapsed

    raise ValueError(f"Unknown operation: {operation}")


def create_set_benchmark(
    elements: Sequence,
    config: BenchmarkConfig,
    operation: str = "contains_hit",
    missing=MISSING_ELEMENT,
) -> Callable:
    """Create a benchmark function measuring one operation across providers"""
    if operation not in OPERATIONS:
        raise ValueError(f"Unknown operation: {operation}")

    setup_functions = {
        "prime_hashset": ComplexityBenchmarkHelper.setup_prime_hashset,
        "builtin_set": ComplexityBenchmarkHelper.setup_builtin_set,
    }

    @perf_report(config)
    def benchmark(N: int, provider: str, **kwargs):
        if provider not in setup_functions:
            raise ValueError(f"Unknown provider: {provider}")
        present = ComplexityBenchmarkHelper.get_existing_element(elements, N)
        return time_operation(kwargs["structure"], operation, present, missing)

    benchmark_setup_fns = {}
    for provider in config.line_vals:
        if provider in setup_functions:
            benchmark_setup_fns[provider] = (
                lambda setup=setup_functions[provider], **kw: setup(elements, **kw)
            )

    original_run = benchmark.run

    def enhanced_run(show_plots: bool = True, print_data: bool = True):
        return original_run(
            show_plots=show_plots,
            print_data=print_data,
            setup_fns=benchmark_setup_fns,
        )

    benchmark.run = enhanced_run
    return benchmark
