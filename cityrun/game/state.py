# cityrun/game/state.py
from __future__ import annotations
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .config import WIDTH, HEIGHT, GROUND_OFFSET, BASE_SPEED, PLAYER_X
from .level import ObstacleGenerator, ObstacleTrack
from .player import Player
from .rng import RandomSource


class RunStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """
    Everything one run needs. The simulation step and the request_* commands
    take it explicitly, so any number of runs can live side by side.
    """
    screen_width: float
    screen_height: float
    rng: RandomSource
    player: Player
    track: ObstacleTrack
    generator: ObstacleGenerator
    speed: float = BASE_SPEED
    score: float = 0.0
    status: RunStatus = RunStatus.IDLE
    death_cause: Optional[str] = None   # "fall" | "spike" | None
    ticks: int = 0
    seed: Optional[int] = field(default=None, compare=False)

    @property
    def ground_y(self) -> float:
        return self.screen_height - GROUND_OFFSET

    @property
    def frontier_x(self) -> float:
        return self.generator.frontier_x

    @property
    def running(self) -> bool:
        return self.status is RunStatus.RUNNING


def new_game_state(width: float = WIDTH,
                   height: float = HEIGHT,
                   rng: Optional[RandomSource] = None,
                   seed: Optional[int] = None) -> GameState:
    """
    Idle state with the player resting on the ground and an empty track.
    rng wins over seed; with neither, obstacles come from an unseeded random.Random.
    """
    if rng is None:
        rng = random.Random(seed)
    state = GameState(
        screen_width=float(width),
        screen_height=float(height),
        rng=rng,
        player=Player(x=float(PLAYER_X)),
        track=ObstacleTrack(),
        generator=ObstacleGenerator(rng),
        seed=seed,
    )
    state.player.place_at_start(state.ground_y)
    return state
