"""Multiplicative congruential recurrences and their fixed parameters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Recurrence:
    """next = (multiplier * previous) mod modulus."""

    multiplier: int
    modulus: int

    def __call__(self, previous: int | None) -> int:
        # None means the seed has not been applied yet
        if previous is None:
            return 1
        return (self.multiplier * previous) % self.modulus


# id 0 drives the integer generator
LEHMER = Recurrence(multiplier=16807, modulus=214748364)
# ids 1..3 are combined into the uniform float generator
WH_1 = Recurrence(multiplier=171, modulus=30269)
WH_2 = Recurrence(multiplier=172, modulus=30307)
WH_3 = Recurrence(multiplier=170, modulus=30323)

RECURRENCES: tuple[Recurrence, ...] = (LEHMER, WH_1, WH_2, WH_3)
TRIPLE: tuple[Recurrence, Recurrence, Recurrence] = (WH_1, WH_2, WH_3)

M0: int = LEHMER.modulus
