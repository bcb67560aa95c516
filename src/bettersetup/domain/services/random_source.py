from __future__ import annotations

import random
from typing import Protocol


class RandomSource(Protocol):
    def randint(self, low: int, high: int) -> int:
        """Uniform integer in the inclusive range [low, high]."""
        ...


class SeededRandomSource:
    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(int(low), int(high))


class SequenceRandomSource:
    """Replays fixed draws, cycling; each draw is clamped into the requested range."""

    def __init__(self, values) -> None:
        self._values = [int(value) for value in values]
        if not self._values:
            raise ValueError("SequenceRandomSource needs at least one value")
        self._cursor = 0

    def randint(self, low: int, high: int) -> int:
        value = self._values[self._cursor % len(self._values)]
        self._cursor += 1
        return max(int(low), min(int(high), value))
