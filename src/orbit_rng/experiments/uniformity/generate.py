"""Generate one configured sequence, diagnose it, and store the run bundle."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from orbit_rng.core.config import SequenceConfig
from orbit_rng.core.metrics import (
    chi_square_critical,
    chi_square_uniform,
    ks_statistic,
    normalize,
    sample_mean,
    sample_variance,
    serial_correlation,
)
from orbit_rng.core.recurrence import M0
from orbit_rng.core.sequences import float_sequence, integer_sequence
from orbit_rng.runstore.samples import load_samples
from orbit_rng.runstore.writer import store_run


def generate(config: SequenceConfig) -> np.ndarray:
    """The raw sequence a config describes."""
    if config.kind == "int":
        return integer_sequence(config.n, config.seed)
    return float_sequence(config.n, config.seed, (config.low, config.high))


def unit_values(config: SequenceConfig, values: np.ndarray) -> np.ndarray:
    """Map generated values onto [0, 1) for the diagnostics."""
    if config.kind == "int":
        return normalize(values, 0, M0)
    return normalize(values, config.low, config.high)


def summarize(config: SequenceConfig, values: np.ndarray) -> dict:
    """Uniformity statistics for a generated sequence."""
    u = unit_values(config, values)
    chi2 = chi_square_uniform(u, config.bins)
    critical = chi_square_critical(config.bins - 1)
    return {
        "kind": config.kind,
        "n": config.n,
        "seed": config.seed,
        "low": 0 if config.kind == "int" else config.low,
        "high": M0 if config.kind == "int" else config.high,
        "min": float(np.min(values)) if len(values) else None,
        "max": float(np.max(values)) if len(values) else None,
        "mean": sample_mean(u),
        "variance": sample_variance(u),
        "chi_square": chi2,
        "chi_square_critical": critical,
        "ks": ks_statistic(u),
        "serial_correlation": serial_correlation(u, lag=1),
        "uniform": bool(chi2 <= critical),
    }


def run_generation(config: SequenceConfig, run_dir: Path) -> dict:
    """Generate, record and summarize one sequence.

    Samples are streamed to samples.ndjson unrounded; config.digits only
    affects what the CLI prints. Returns the summary dict with run_id.
    """
    started_at = datetime.now(timezone.utc)
    run_dir = Path(run_dir)

    values = generate(config)
    summary = summarize(config, values)
    manifest = store_run(
        run_dir=run_dir,
        config=config,
        values=values,
        summary=summary,
        started_at=started_at,
    )
    summary["run_id"] = manifest.run_id
    return summary


def replay_divergence(run_dir: Path) -> int:
    """Regenerate a stored run from its config.json and compare.

    Returns the first index where the stored samples differ from a fresh
    generation, the shorter length on a length mismatch, or -1 on a match.
    """
    with open(Path(run_dir) / "config.json") as f:
        config = SequenceConfig(**json.load(f))
    stored = load_samples(run_dir)
    fresh = generate(config)
    n = min(len(stored), len(fresh))
    mismatch = np.nonzero(stored[:n] != fresh[:n])[0]
    if mismatch.size:
        return int(mismatch[0])
    if len(stored) != len(fresh):
        return n
    return -1
