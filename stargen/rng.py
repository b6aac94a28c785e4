"""Seeded pseudo-random source: every generated record flows from one of these."""

from __future__ import annotations

import math
import random
from typing import Sequence, TypeVar

T = TypeVar("T")

MAX_AUTO_SEED = 1_000_000


class SeededRandom:
    """Deterministic PRNG built on the ``sin(seed++) * 10000`` recurrence.

    Not cryptographically secure and not strictly uniform, but fast and
    reproducible: the same seed and the same call sequence always give the
    same values. One instance per generation session; never share across
    threads.
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.randrange(MAX_AUTO_SEED)
        self._seed = seed

    def get_seed(self) -> int:
        return self._seed

    def set_seed(self, seed: int) -> None:
        self._seed = seed

    def next(self) -> float:
        """Return a float in [0, 1) and advance the seed."""
        x = math.sin(self._seed) * 10000
        self._seed += 1
        return x - math.floor(x)

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an integer in [min_value, max_value], both inclusive."""
        return math.floor(self.next() * (max_value - min_value + 1)) + min_value

    def chance(self, probability: float) -> bool:
        return self.next() < probability

    def choose(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.next_int(0, len(seq) - 1)]

    def shuffle(self, seq: Sequence[T]) -> list[T]:
        """Return a shuffled copy of seq (Fisher-Yates); seq is left untouched."""
        result = list(seq)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result
