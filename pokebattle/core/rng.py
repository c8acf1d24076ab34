"""Randomness source injected into the damage, status and AI steps.

Every draw goes through ``random()`` so a test can script the exact
sequence of values a turn consumes.
"""

import random


class RandomSource:
    """Seedable source of uniform draws in [0, 1)."""

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def random(self) -> float:
        return self._random.random()

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.random() < probability

    def uniform(self, low: float, high: float) -> float:
        return low + self.random() * (high - low)

    def index(self, count: int) -> int:
        """Return an index in range [0, count). Caller must ensure count > 0."""
        return min(int(self.random() * count), count - 1)

    def randint(self, low: int, high: int) -> int:
        """Return an integer in [low, high], both inclusive."""
        return low + self.index(high - low + 1)
