"""Grid sweep over sequence lengths and seeds."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

from orbit_rng.core.config import SweepConfig
from orbit_rng.experiments.uniformity.generate import run_generation


def run_sweep(sweep_config: SweepConfig, output_dir: Path) -> list[dict]:
    """Run one generation per (n, seed) cell and aggregate per n.

    Writes sweep_summary.json with per-run and per-length results.
    Returns the per-run summaries.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    results = []
    total = len(sweep_config.n_values) * len(sweep_config.seeds)
    count = 0

    for n in sweep_config.n_values:
        for seed in sweep_config.seeds:
            count += 1
            print(f"[{count}/{total}] kind={sweep_config.base.kind}, n={n}, seed={seed}")

            cell_config = replace(sweep_config.base, n=n, seed=seed)
            run_dir = output_dir / f"n{n}_s{seed}"
            summary = run_generation(cell_config, run_dir)
            summary["sweep_n"] = n
            summary["sweep_seed"] = seed
            results.append(summary)

    cells: dict[int, list[dict]] = {}
    for r in results:
        cells.setdefault(r["sweep_n"], []).append(r)

    cell_summaries = []
    for n, cell_runs in sorted(cells.items()):
        n_seeds = len(cell_runs)
        n_uniform = sum(1 for r in cell_runs if r["uniform"])
        cell_summaries.append({
            "n": n,
            "n_seeds": n_seeds,
            "n_uniform": n_uniform,
            "pass_rate": round(n_uniform / n_seeds, 3),
            "chi_square_mean": round(sum(r["chi_square"] for r in cell_runs) / n_seeds, 4),
            "ks_mean": round(sum(r["ks"] for r in cell_runs) / n_seeds, 6),
            "serial_correlation_max": round(
                max(abs(r["serial_correlation"]) for r in cell_runs), 6
            ),
        })

    sweep_output = {
        "kind": sweep_config.base.kind,
        "bins": sweep_config.base.bins,
        "per_run": results,
        "per_n": cell_summaries,
    }
    sweep_summary_path = output_dir / "sweep_summary.json"
    with open(sweep_summary_path, "w") as f:
        json.dump(sweep_output, f, indent=2, default=str)

    print(f"Sweep complete: {len(results)} runs. Summary: {sweep_summary_path}")
    return results
