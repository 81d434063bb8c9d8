"""Compare two run bundles: config, summary statistics, and raw samples."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np

from orbit_rng.runstore.samples import load_samples


def config_diff(run_dir_a: Path, run_dir_b: Path) -> dict:
    """Changed config keys as {key: (value_a, value_b)}."""
    config_a = _load_json(Path(run_dir_a) / "config.json")
    config_b = _load_json(Path(run_dir_b) / "config.json")
    return _flat_diff(config_a, config_b)


def metric_diff(run_dir_a: Path, run_dir_b: Path) -> dict:
    """Changed summary statistics, ignoring the run ID."""
    summary_a = _load_json(Path(run_dir_a) / "summary.json")
    summary_b = _load_json(Path(run_dir_b) / "summary.json")
    summary_a.pop("run_id", None)
    summary_b.pop("run_id", None)
    return _flat_diff(summary_a, summary_b)


def first_divergence(run_dir_a: Path, run_dir_b: Path) -> int:
    """Index of the first sample where two runs differ.

    A length mismatch counts as divergence at the shorter length.
    Returns -1 if the sample streams are identical.
    """
    a = load_samples(run_dir_a)
    b = load_samples(run_dir_b)
    n = min(len(a), len(b))
    mismatch = np.nonzero(a[:n] != b[:n])[0]
    if mismatch.size:
        return int(mismatch[0])
    if len(a) != len(b):
        return n
    return -1


def format_diff(diff: dict, label: str = "diff") -> str:
    if not diff:
        return f"No differences in {label}."
    lines = [f"{label}:"]
    for key, (va, vb) in sorted(diff.items()):
        lines.append(f"  {key}: {va} -> {vb}")
    return "\n".join(lines)


def _load_json(path: Path) -> dict:
    with open(path) as f:
        return json.load(f)


def _flat_diff(a: dict, b: dict) -> dict:
    diffs = {}
    for key in sorted(set(a) | set(b)):
        va = a.get(key)
        vb = b.get(key)
        if va != vb:
            diffs[key] = (va, vb)
    return diffs
