"""Error types raised on out-of-contract arguments."""

from __future__ import annotations


class InvalidArgument(ValueError):
    """A count, seed or precision outside the generator's domain."""


def check_count(name: str, value: int) -> int:
    """Return value as int if it is a non-negative integer."""
    if isinstance(value, bool) or int(value) != value:
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidArgument(f"{name} must be >= 0, got {value}")
    return int(value)


def check_seed(seed: int) -> int:
    """Return seed as int if it is an integer >= 1."""
    if isinstance(seed, bool) or int(seed) != seed:
        raise InvalidArgument(f"seed must be an integer, got {seed!r}")
    if seed < 1:
        raise InvalidArgument(f"seed must be >= 1, got {seed}")
    return int(seed)
