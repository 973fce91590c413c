from __future__ import annotations
from typing import Protocol


class RandomSource(Protocol):
    """Anything with a uniform float draw; `random.Random` qualifies."""

    def uniform(self, a: float, b: float) -> float:
        ...


def chance(rng: RandomSource, p: float) -> bool:
    """True with probability p, drawn through the single uniform operation."""
    return rng.uniform(0.0, 1.0) < p
