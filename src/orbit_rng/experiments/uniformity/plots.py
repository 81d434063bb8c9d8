"""Diagnostic figures for generated sequences and sweeps."""

from __future__ import annotations

import json
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from orbit_rng.runstore.samples import load_samples


def load_summary(run_dir: Path) -> dict:
    with open(Path(run_dir) / "summary.json") as f:
        return json.load(f)


def _unit(run_dir: Path) -> tuple[np.ndarray, dict]:
    """Samples of a run mapped onto [0, 1), plus its summary."""
    summary = load_summary(run_dir)
    values = load_samples(run_dir).astype(np.float64)
    low, high = summary["low"], summary["high"]
    return (values - low) / (high - low), summary


def plot_histogram(run_dir: Path, output_dir: Path, bins: int = 20) -> Path:
    """Bucket counts against the flat expectation."""
    u, summary = _unit(run_dir)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.hist(u, bins=bins, range=(0.0, 1.0), color="tab:blue", edgecolor="white")
    if len(u):
        ax.axhline(y=len(u) / bins, color="tab:red", linestyle="--", label="expected")
        ax.legend()
    ax.set_xlabel("Normalized value")
    ax.set_ylabel("Count")
    ax.set_title(
        f"{summary['kind']} seed={summary['seed']} n={summary['n']} "
        f"chi2={summary['chi_square']:.1f}"
    )
    ax.grid(True, alpha=0.3)

    out = Path(output_dir) / "histogram.png"
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out


def plot_lag(run_dir: Path, output_dir: Path, lag: int = 1) -> Path:
    """Scatter of x_i against x_{i+lag}; a single LCG shows visible lattice lines here."""
    u, summary = _unit(run_dir)

    fig, ax = plt.subplots(figsize=(7, 7))
    if len(u) > lag:
        ax.scatter(u[:-lag], u[lag:], s=2, alpha=0.5, color="tab:purple")
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_xlabel("x_i")
    ax.set_ylabel(f"x_(i+{lag})")
    ax.set_title(f"Lag-{lag} plot, serial corr = {summary['serial_correlation']:+.4f}")

    out = Path(output_dir) / f"lag{lag}.png"
    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out


def plot_running_mean(run_dir: Path, output_dir: Path) -> Path:
    """Running mean of the normalized sample, converging on 0.5."""
    u, _ = _unit(run_dir)
    running = np.cumsum(u) / np.arange(1, len(u) + 1) if len(u) else u

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(np.arange(len(running)), running, color="tab:green")
    ax.axhline(y=0.5, color="gray", linestyle=":", label="0.5")
    ax.set_xlabel("Index")
    ax.set_ylabel("Running mean")
    ax.set_ylim(0.0, 1.0)
    ax.set_title("Running Mean")
    ax.legend()
    ax.grid(True, alpha=0.3)

    out = Path(output_dir) / "running_mean.png"
    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out


def plot_sweep_pass_rate(sweep_dir: Path, output_dir: Path) -> Path:
    """Chi-square pass rate and mean KS distance per sequence length."""
    with open(Path(sweep_dir) / "sweep_summary.json") as f:
        raw = json.load(f)
    cells = raw["per_n"]
    ns = [c["n"] for c in cells]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 5))
    ax1.plot(ns, [c["pass_rate"] for c in cells], marker="o", color="tab:blue")
    ax1.set_xscale("log")
    ax1.set_ylim(-0.05, 1.05)
    ax1.set_xlabel("n")
    ax1.set_ylabel("Pass rate (chi-square, 99%)")
    ax1.grid(True, alpha=0.3)

    ax2.plot(ns, [c["ks_mean"] for c in cells], marker="o", color="tab:orange")
    ax2.set_xscale("log")
    ax2.set_yscale("log")
    ax2.set_xlabel("n")
    ax2.set_ylabel("Mean KS distance")
    ax2.grid(True, alpha=0.3)
    fig.suptitle(f"Sweep over seeds ({raw['kind']})")

    out = Path(output_dir) / "sweep_pass_rate.png"
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out


def generate_all_plots(run_dir: Path, output_dir: Path) -> list[Path]:
    """Standard plots for a single run."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return [
        plot_histogram(run_dir, output_dir),
        plot_lag(run_dir, output_dir),
        plot_running_mean(run_dir, output_dir),
    ]
