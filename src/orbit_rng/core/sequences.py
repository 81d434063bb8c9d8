"""Public generators: integer sequences and combined uniform float sequences."""

from __future__ import annotations

import numpy as np

from orbit_rng.core.errors import check_count, check_seed
from orbit_rng.core.orbit import orbit
from orbit_rng.core.recurrence import LEHMER, M0, TRIPLE

__all__ = ["M0", "float_sequence", "integer_sequence", "uniform_triple"]


def integer_sequence(n: int, seed: int) -> np.ndarray:
    """n integers in [0, M0) from the id-0 recurrence."""
    n = check_count("n", n)
    seed = check_seed(seed)
    return orbit(LEHMER, n, seed)


def uniform_triple(n: int, seed: int) -> np.ndarray:
    """n floats in [0, 1) from three recurrences combined position-wise.

    Each of the three orbits starts from the same seed. Summing the scaled
    iterates and keeping the fractional part hides the lattice structure a
    single congruential generator shows (Wichmann-Hill construction).
    """
    n = check_count("n", n)
    seed = check_seed(seed)
    total = np.zeros(n, dtype=np.float64)
    for rec in TRIPLE:
        total = total + orbit(rec, n, seed) / rec.modulus
    return total - np.trunc(total)


def float_sequence(
    n: int, seed: int, bounds: tuple[float, float] = (0.0, 1.0)
) -> np.ndarray:
    """n floats in [a, b) via an affine map of uniform_triple.

    a > b is not rejected; values then fall in (b, a].
    """
    a, b = bounds
    u = uniform_triple(n, seed)
    return (b - a) * u + a
