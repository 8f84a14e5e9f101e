"""Seeded linear congruential generator.

The recurrence is evaluated in float64 so that a seed reproduces previously
exported artifacts. Changing any constant here is a breaking change for
every saved configuration.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_M = float(0x80000000)  # 2^31
_A = 1103515245.0
_C = 12345.0


class SeededRandom:
    """Deterministic float / range / choice source owned by one generation call."""

    def __init__(self, seed: int | None) -> None:
        if not seed:
            seed = random.randrange(1, int(_M) - 1)
            logger.debug("No seed supplied, using ephemeral seed %d", seed)
        self.seed = seed
        self._state = float(seed)

    def next_float(self) -> float:
        """Next value in [0, 1]. 1.0 is only reachable when the state hits m - 1."""
        self._state = math.fmod(_A * self._state + _C, _M)
        return self._state / (_M - 1)

    def next_range(self, lo: float, hi: float) -> float:
        return lo + self.next_float() * (hi - lo)

    def next_item(self, items: Sequence[T]) -> T:
        """Uniform choice. Callers must not pass an empty sequence."""
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        i = math.floor(self.next_float() * len(items))
        return items[min(i, len(items) - 1)]
