"""Generation and sweep configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

from orbit_rng.core.errors import InvalidArgument, check_count, check_seed

KINDS = ("int", "float")


@dataclass
class SequenceConfig:
    """Parameters for a single generated sequence."""

    kind: str = "float"  # "int" or "float"
    n: int = 10_000
    seed: int = 42
    # Output range for kind="float"; ignored for ints, which live in [0, M0)
    low: float = 0.0
    high: float = 1.0
    digits: int | None = None  # display rounding only, never stored rounded
    bins: int = 20  # chi-square buckets

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise InvalidArgument(f"kind must be one of {KINDS}, got {self.kind!r}")
        check_count("n", self.n)
        check_seed(self.seed)
        if self.digits is not None:
            check_count("digits", self.digits)
        if check_count("bins", self.bins) < 1:
            raise InvalidArgument("bins must be >= 1")
        if self.kind == "float" and self.low == self.high:
            raise InvalidArgument("low and high must differ")


@dataclass
class SweepConfig:
    """Grid sweep over sequence lengths and seeds."""

    n_values: list[int] = field(default_factory=lambda: [100, 1_000, 10_000])
    seeds: list[int] = field(default_factory=lambda: [1, 7, 42, 123, 456])
    base: SequenceConfig = field(default_factory=SequenceConfig)

    def __post_init__(self) -> None:
        for n in self.n_values:
            check_count("n", n)
        for seed in self.seeds:
            check_seed(seed)
