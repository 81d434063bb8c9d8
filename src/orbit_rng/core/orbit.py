"""Orbit engine: successive iterates of a recurrence from a starting value."""

from __future__ import annotations

from typing import Callable

import numpy as np

WARMUP = 5


def orbit(step: Callable[[int], int], n: int, start: int) -> np.ndarray:
    """Iterate step from start and return n iterates, most recent first.

    The recurrence is applied n + WARMUP times. With x_0 = start the result
    is [x_{n+5}, x_{n+4}, ..., x_6]; the first five iterates are never
    returned. n = 0 gives an empty array.
    """
    acc: list[int] = []
    x = start
    for _ in range(n + WARMUP):
        x = step(x)
        acc.append(x)
    return np.array(acc[::-1][:n], dtype=np.int64)
