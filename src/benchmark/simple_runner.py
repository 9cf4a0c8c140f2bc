"""
Simple benchmark runner comparing PrimeHashSet with the built-in set.

Usage examples:
    python -m src.benchmark.simple_runner
    python simple_runner.py --providers prime_hashset --sizes 100,1000 --operations add
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.append(str(project_root))

# Import after path setup
from data.workload import ElementGenerator  # noqa: E402
from src.benchmark import OPERATIONS, BenchmarkConfig, create_set_benchmark  # noqa: E402

PROVIDER_NAMES = {
    "prime_hashset": "PrimeHashSet",
    "builtin_set": "Built-in set",
}

COLORS = ["blue", "green", "red", "orange", "purple", "brown"]


def parse_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark hash set implementations")
    parser.add_argument(
        "--providers",
        default="prime_hashset,builtin_set",
        help="Comma-separated list of set implementations to test",
    )
    parser.add_argument(
        "--sizes",
        default="100,1000,10000,100000",
        help="Comma-separated list of set sizes",
    )
    parser.add_argument(
        "--operations",
        default="contains_hit,contains_miss",
        help=f"Comma-separated operations: {', '.join(OPERATIONS)}",
    )
    parser.add_argument(
        "--workload",
        choices=["strings", "integers"],
        default="strings",
        help="Element type to insert",
    )
    parser.add_argument(
        "--load-factor", type=float, default=0.75, help="PrimeHashSet load factor"
    )
    parser.add_argument("--seed", type=int, default=42, help="Workload seed")
    parser.add_argument(
        "--output-prefix", default="benchmark", help="Prefix for output plot files"
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip generating plots")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    providers = parse_csv(args.providers)
    operations = parse_csv(args.operations)

    try:
        sizes = [int(size) for size in parse_csv(args.sizes)]
        unknown = [op for op in operations if op not in OPERATIONS]
        if unknown:
            raise ValueError(f"Unknown operations: {', '.join(unknown)}")

        generator = ElementGenerator(seed=args.seed)
        total = max(sizes)
        print(f"Generating {total:,} {args.workload} elements...")
        if args.workload == "strings":
            elements = generator.generate_unique(total)
            missing = "@not@present@"
        else:
            elements = generator.generate_integers(total)
            missing = -1

        runners = {}
        for operation in operations:
            print(f"\nRunning benchmark for {operation.upper()}...")

            config = BenchmarkConfig(
                x_names=["N"],
                x_vals=sizes,
                line_arg="provider",
                line_vals=providers,
                line_names=[PROVIDER_NAMES.get(p, p) for p in providers],
                styles=[(COLORS[i % len(COLORS)], "-") for i in range(len(providers))],
                ylabel="Time (ms)",
                plot_name=f"{args.output_prefix}-{operation}",
                args={"load_factor": args.load_factor},
                warmup_runs=5,
                measure_runs=50,
                min_runtime_ms=1.0,
            )

            benchmark = create_set_benchmark(elements, config, operation, missing)
            runners[operation] = benchmark.run(
                show_plots=not args.no_plots, print_data=True
            )
            print(f"[OK] {operation} benchmark completed")

        if not args.no_plots:
            print(f"\nBenchmark completed! Plots saved as {args.output_prefix}-*.png")
        return runners

    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
