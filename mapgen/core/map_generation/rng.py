"""
Seeded pseudo-random stream shared by every generation stage.

Uses the linear congruential recurrence

    seed = (seed * 9301 + 49297) % 233280

so maps reproduce bit-for-bit across runs and platforms. The period is at
most 233,280 draws; very dense Poisson sampling on large maps can wrap it.
"""
import math
import time
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")

_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280


def default_seed() -> int:
    """Time-based seed used when the caller does not supply one."""
    return int(time.time() * 1000)


class SeededRandom:
    """Deterministic random number generator."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = default_seed() if seed is None else int(seed)

    def next(self) -> float:
        """Return a float in [0, 1)."""
        self.seed = (self.seed * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self.seed / _MODULUS

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value], both inclusive."""
        return int(math.floor(self.next() * (max_value - min_value + 1))) + min_value

    def next_float(self, min_value: float, max_value: float) -> float:
        """Return a float in [min_value, max_value)."""
        return self.next() * (max_value - min_value) + min_value

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a shuffled copy (Fisher-Yates). The input is not modified."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.next_int(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def choice(self, items: Sequence[T]) -> T:
        """Return one element of a non-empty sequence."""
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]
