# cityrun/tests/helpers.py
from __future__ import annotations
from typing import Iterable, List

from cityrun.game.state import GameState, new_game_state
from cityrun.game.sim import request_start


class ScriptedRandom:
    """
    Deterministic RandomSource: each uniform(a, b) consumes the next fraction u
    from the script and returns a + u * (b - a). Falls back to `default` once
    the script runs out.
    """
    def __init__(self, fractions: Iterable[float] = (), default: float = 0.5):
        self.fractions: List[float] = list(fractions)
        self.default = default
        self.calls = 0

    def uniform(self, a: float, b: float) -> float:
        u = self.fractions.pop(0) if self.fractions else self.default
        self.calls += 1
        return a + u * (b - a)


def running_state(fractions: Iterable[float] = (), width: float = 960, height: float = 540) -> GameState:
    """A started run on a scripted random source."""
    state = new_game_state(width, height, rng=ScriptedRandom(fractions))
    request_start(state)
    return state
