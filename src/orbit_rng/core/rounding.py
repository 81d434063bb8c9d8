"""Decimal rounding for display."""

from __future__ import annotations

import numpy as np

from orbit_rng.core.errors import check_count

# At or above this magnitude every double is already an integer
_EXACT = 2.0**52


def round_to(digits: int, x):
    """Round x to digits decimals, halves away from zero.

    Values that cannot be scaled by 10**digits without overflow or loss of
    integer precision come back unchanged. Scalars come back as float,
    arrays as float64 arrays.
    """
    digits = check_count("digits", digits)
    arr = np.asarray(x, dtype=np.float64)
    try:
        scale = 10.0**digits
    except OverflowError:
        return float(arr) if arr.ndim == 0 else arr.copy()

    with np.errstate(over="ignore", invalid="ignore"):
        y = np.abs(arr) * scale
        r = np.floor(y)
        rounded = np.copysign((r + (y - r >= 0.5)) / scale, arr)
    out = np.where(np.isfinite(y) & (y < _EXACT), rounded, arr)
    if out.ndim == 0:
        return float(out)
    return out
