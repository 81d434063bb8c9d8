"""Minimal CLI: ints, floats, round, run, sweep, summarize, diff, verify, plot."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from orbit_rng.core.errors import InvalidArgument


def _load_sequence_config(path: str | None, **overrides):
    from orbit_rng.core.config import SequenceConfig

    raw = {}
    if path:
        with open(path) as f:
            raw = json.load(f)
    raw.update({k: v for k, v in overrides.items() if v is not None})
    return SequenceConfig(**raw)


def _print_values(values) -> None:
    for v in values:
        print(v)


def cmd_ints(args: argparse.Namespace) -> None:
    """Print an integer sequence, one value per line."""
    from orbit_rng.core.sequences import integer_sequence

    _print_values(integer_sequence(args.n, args.seed).tolist())


def cmd_floats(args: argparse.Namespace) -> None:
    """Print a float sequence in [low, high), optionally rounded."""
    from orbit_rng.core.rounding import round_to
    from orbit_rng.core.sequences import float_sequence

    values = float_sequence(args.n, args.seed, (args.low, args.high))
    if args.digits is not None:
        values = round_to(args.digits, values)
    _print_values(values.tolist())


def cmd_round(args: argparse.Namespace) -> None:
    """Round a single value."""
    from orbit_rng.core.rounding import round_to

    print(round_to(args.digits, args.value))


def cmd_run(args: argparse.Namespace) -> None:
    """Generate one sequence and store it as a run bundle."""
    from orbit_rng.experiments.uniformity.generate import run_generation

    config = _load_sequence_config(args.config, kind=args.kind, n=args.n, seed=args.seed)
    run_dir = Path(args.output) / f"{config.kind}_n{config.n}_s{config.seed}"
    print(f"Generating: kind={config.kind}, n={config.n}, seed={config.seed}")
    summary = run_generation(config, run_dir)
    print(f"Run complete: {run_dir}")
    print(f"  run_id: {summary['run_id']}")
    print(f"  mean: {summary['mean']:.6f} (0.5 expected)")
    print(f"  variance: {summary['variance']:.6f} (0.083333 expected)")
    print(f"  chi_square: {summary['chi_square']:.3f} (critical {summary['chi_square_critical']:.3f})")
    print(f"  ks: {summary['ks']:.6f}")
    print(f"  serial_correlation: {summary['serial_correlation']:+.6f}")
    print(f"  uniform: {summary['uniform']}")


def cmd_sweep(args: argparse.Namespace) -> None:
    """Run a grid sweep over lengths and seeds."""
    from orbit_rng.core.config import SequenceConfig, SweepConfig
    from orbit_rng.experiments.uniformity.sweep import run_sweep

    if args.sweep_config:
        with open(args.sweep_config) as f:
            raw = json.load(f)
        sweep = SweepConfig(
            n_values=raw.get("n_values", [100, 1_000]),
            seeds=raw.get("seeds", [42]),
            base=SequenceConfig(**raw.get("base", {})),
        )
    else:
        sweep = SweepConfig()

    results = run_sweep(sweep, Path(args.output))
    n_uniform = sum(1 for r in results if r["uniform"])
    print(f"\n{n_uniform}/{len(results)} runs passed the chi-square check.")


def cmd_summarize(args: argparse.Namespace) -> None:
    """Print the summary of a run."""
    summary_path = Path(args.run_dir) / "summary.json"
    if not summary_path.exists():
        print(f"No summary.json found in {args.run_dir}", file=sys.stderr)
        sys.exit(1)

    with open(summary_path) as f:
        summary = json.load(f)

    print(json.dumps(summary, indent=2))


def cmd_diff(args: argparse.Namespace) -> None:
    """Compare two runs."""
    from orbit_rng.runstore.diff import config_diff, first_divergence, format_diff, metric_diff

    for run_dir in (args.run_a, args.run_b):
        if not (Path(run_dir) / "manifest.json").exists():
            print(f"Incomplete run (no manifest.json): {run_dir}", file=sys.stderr)
            sys.exit(1)

    print(format_diff(config_diff(Path(args.run_a), Path(args.run_b)), "Config diff"))
    print()
    print(format_diff(metric_diff(Path(args.run_a), Path(args.run_b)), "Metric diff"))
    print()
    idx = first_divergence(Path(args.run_a), Path(args.run_b))
    if idx < 0:
        print("Samples identical.")
    else:
        print(f"Samples diverge at index {idx}.")


def cmd_verify(args: argparse.Namespace) -> None:
    """Check artifact hashes and regenerate the samples from config.json."""
    from orbit_rng.experiments.uniformity.generate import replay_divergence
    from orbit_rng.runstore.manifest import verify_artifacts

    run_dir = Path(args.run_dir)
    if not (run_dir / "manifest.json").exists():
        print(f"Incomplete run (no manifest.json): {run_dir}", file=sys.stderr)
        sys.exit(1)

    bad = verify_artifacts(run_dir)
    idx = replay_divergence(run_dir)
    for fname in bad:
        print(f"  hash mismatch: {fname}")
    if idx >= 0:
        print(f"  replay diverges at index {idx}")
    if bad or idx >= 0:
        print("Run does NOT verify.", file=sys.stderr)
        sys.exit(1)
    print("Run verified: hashes match and samples replay exactly.")


def cmd_plot(args: argparse.Namespace) -> None:
    """Generate plots for a run, or for a sweep directory."""
    from orbit_rng.experiments.uniformity.plots import generate_all_plots, plot_sweep_pass_rate

    run_dir = Path(args.run_dir)
    output_dir = Path(args.output) if args.output else run_dir / "plots"
    if (run_dir / "sweep_summary.json").exists():
        paths = [plot_sweep_pass_rate(run_dir, output_dir)]
    else:
        paths = generate_all_plots(run_dir, output_dir)
    print(f"Generated {len(paths)} plots in {output_dir}:")
    for p in paths:
        print(f"  {p}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orbit-rng",
        description="Deterministic seeded integer and float sequences",
    )
    sub = parser.add_subparsers(dest="command")

    # ints
    p_ints = sub.add_parser("ints", help="Print integers in [0, 214748364)")
    p_ints.add_argument("--n", type=int, default=10, help="Number of values")
    p_ints.add_argument("--seed", type=int, required=True, help="Seed (>= 1)")

    # floats
    p_floats = sub.add_parser("floats", help="Print floats in [low, high)")
    p_floats.add_argument("--n", type=int, default=10, help="Number of values")
    p_floats.add_argument("--seed", type=int, required=True, help="Seed (>= 1)")
    p_floats.add_argument("--low", type=float, default=0.0, help="Inclusive lower bound")
    p_floats.add_argument("--high", type=float, default=1.0, help="Exclusive upper bound")
    p_floats.add_argument("--digits", type=int, default=None, help="Round output to this many decimals")

    # round
    p_round = sub.add_parser("round", help="Round a value to N decimals")
    p_round.add_argument("value", type=float, help="Value to round")
    p_round.add_argument("--digits", type=int, default=2, help="Decimal digits")

    # run
    p_run = sub.add_parser("run", help="Generate and store a run bundle")
    p_run.add_argument("--config", type=str, default=None, help="Path to config JSON")
    p_run.add_argument("--kind", type=str, default=None, choices=["int", "float"], help="Override kind")
    p_run.add_argument("--n", type=int, default=None, help="Override n")
    p_run.add_argument("--seed", type=int, default=None, help="Override seed")
    p_run.add_argument("--output", type=str, default="runs", help="Output directory")

    # sweep
    p_sweep = sub.add_parser("sweep", help="Run a grid sweep over n and seeds")
    p_sweep.add_argument("--sweep-config", type=str, default=None, help="Path to sweep config JSON")
    p_sweep.add_argument("--output", type=str, default="runs/sweep", help="Output directory")

    # summarize
    p_sum = sub.add_parser("summarize", help="Print run summary")
    p_sum.add_argument("--run-dir", type=str, required=True, help="Path to run directory")

    # diff
    p_diff = sub.add_parser("diff", help="Compare two runs")
    p_diff.add_argument("run_a", type=str, help="First run directory")
    p_diff.add_argument("run_b", type=str, help="Second run directory")

    # verify
    p_verify = sub.add_parser("verify", help="Check hashes and replay a run")
    p_verify.add_argument("--run-dir", type=str, required=True, help="Path to run directory")

    # plot
    p_plot = sub.add_parser("plot", help="Generate plots")
    p_plot.add_argument("--run-dir", type=str, required=True, help="Run or sweep directory")
    p_plot.add_argument("--output", type=str, default=None, help="Output directory for plots")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    dispatch = {
        "ints": cmd_ints,
        "floats": cmd_floats,
        "round": cmd_round,
        "run": cmd_run,
        "sweep": cmd_sweep,
        "summarize": cmd_summarize,
        "diff": cmd_diff,
        "verify": cmd_verify,
        "plot": cmd_plot,
    }
    try:
        dispatch[args.command](args)
    except InvalidArgument as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
