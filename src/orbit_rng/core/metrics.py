"""Uniformity diagnostics for sequences normalized to [0, 1)."""

from __future__ import annotations

import math

import numpy as np


def normalize(values: np.ndarray, low: float, high: float) -> np.ndarray:
    """Map values from [low, high) back onto [0, 1)."""
    v = np.asarray(values, dtype=np.float64)
    return (v - low) / (high - low)


def sample_mean(values: np.ndarray) -> float:
    """Mean of the sample; 0.5 expected for uniform input. 0 if empty."""
    v = np.asarray(values, dtype=np.float64)
    if v.size == 0:
        return 0.0
    return float(np.mean(v))


def sample_variance(values: np.ndarray) -> float:
    """Population variance; 1/12 expected for uniform input. 0 if empty."""
    v = np.asarray(values, dtype=np.float64)
    if v.size == 0:
        return 0.0
    return float(np.var(v))


def chi_square_uniform(values: np.ndarray, bins: int = 20) -> float:
    """Pearson chi-square of the sample against equal-width bins on [0, 1).

    Returns 0 for an empty sample.
    """
    v = np.asarray(values, dtype=np.float64)
    if v.size == 0:
        return 0.0
    counts, _ = np.histogram(v, bins=bins, range=(0.0, 1.0))
    expected = v.size / bins
    return float(np.sum((counts - expected) ** 2) / expected)


def chi_square_critical(df: int, z: float = 2.326) -> float:
    """Upper chi-square quantile via the Wilson-Hilferty approximation.

    z is the standard normal deviate of the quantile (2.326 -> 99%).
    """
    if df <= 0:
        return 0.0
    c = 2.0 / (9.0 * df)
    return float(df * (1.0 - c + z * math.sqrt(c)) ** 3)


def ks_statistic(values: np.ndarray) -> float:
    """Kolmogorov-Smirnov distance between the sample and U(0, 1)."""
    v = np.sort(np.asarray(values, dtype=np.float64))
    n = v.size
    if n == 0:
        return 0.0
    ranks = np.arange(1, n + 1, dtype=np.float64)
    d_plus = np.max(ranks / n - v)
    d_minus = np.max(v - (ranks - 1) / n)
    return float(max(d_plus, d_minus))


def serial_correlation(values: np.ndarray, lag: int = 1) -> float:
    """Correlation between x_i and x_{i+lag}.

    Returns 0 when fewer than lag + 2 values or either side is constant.
    """
    v = np.asarray(values, dtype=np.float64)
    if lag < 1 or v.size < lag + 2:
        return 0.0
    head = v[:-lag]
    tail = v[lag:]
    if np.std(head) == 0 or np.std(tail) == 0:
        return 0.0
    return float(np.corrcoef(head, tail)[0, 1])
