from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")

MULTIPLIER = 1664525
INCREMENT = 1013904223
MODULUS = 2 ** 32


class SeededRandom:
    """Linear congruential generator.

    The same seed always yields the same stream, which is what makes a board
    reproducible from its seed alone. Instances are passed explicitly to every
    consumer; there is no shared module-level generator.
    """

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._state = self.seed % MODULUS

    def next(self) -> float:
        """Return a float in [0, 1)."""
        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        return self._state / MODULUS

    def next_int(self, low: int, high: int) -> int:
        """Return an integer in [low, high], both ends included."""
        if high < low:
            raise ValueError(f"empty range [{low}, {high}]")
        return int(self.next() * (high - low + 1)) + low

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle; returns a new list and leaves `items` untouched."""
        out = list(items)
        for i in range(len(out) - 1, 0, -1):
            j = self.next_int(0, i)
            out[i], out[j] = out[j], out[i]
        return out
