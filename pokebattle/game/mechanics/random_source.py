"""Injectable random sources for battle mechanics.

Mechanics never touch the global `random` module. A state machine owns one
RandomSource and hands it to the calculators it builds, so two battles with
the same seed and the same choices produce the same event log.
"""

import abc
import random
from typing import List, Optional, Sequence

from pokebattle.game.exceptions import InvariantViolationError


class RandomSource(abc.ABC):
    """Abstract source of uniform draws."""

    @abc.abstractmethod
    def random(self) -> float:
        """Return a float in [0, 1)."""

    def randint(self, low: int, high: int) -> int:
        """Return an integer in [low, high], both ends included."""
        return low + int(self.random() * (high - low + 1))

    def uniform(self, low: float, high: float) -> float:
        """Return a float in [low, high]."""
        return low + (high - low) * self.random()

    def chance(self, percent: float) -> bool:
        """Return True with the given percent probability."""
        return self.random() * 100 < percent

    def coin_flip(self) -> bool:
        return self.random() < 0.5


class SeededRandomSource(RandomSource):
    """Reproducible source backed by a private random.Random instance."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)


class FixedSequenceRandomSource(RandomSource):
    """Replays a scripted sequence of draws, for tests.

    Values are in [0, 1]; a value of exactly 1.0 makes `uniform` return its
    upper bound, which lets tests pin the damage random factor at 1.0.

    Example:
        >>> rng = FixedSequenceRandomSource([0.5, 0.99, 1.0])
        >>> rng.chance(50), rng.random(), rng.uniform(0.85, 1.0)
        (False, 0.99, 1.0)
    """

    def __init__(self, values: Sequence[float], default: Optional[float] = None):
        for value in values:
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Scripted draws must be in [0, 1], got {value}")
        self._values: List[float] = list(values)
        self._position = 0
        self._default = default

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def random(self) -> float:
        if self._position >= len(self._values):
            if self._default is None:
                raise InvariantViolationError(
                    f"Scripted random source exhausted after {self._position} draws"
                )
            return self._default
        value = self._values[self._position]
        self._position += 1
        return value

    def randint(self, low: int, high: int) -> int:
        return min(high, super().randint(low, high))

    def uniform(self, low: float, high: float) -> float:
        value = self.random()
        if value >= 1.0:
            return high
        return low + (high - low) * value
