# cityrun/game/level.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .config import (
    HOLE_WIDTH, SPIKE_SIZE, SPIKE_CHANCE, SPIKE_CLEARANCE, SPIKE_PAD_MIN, SPIKE_PAD_MAX,
    SPAWN_BUFFER, PIT_PRUNE_MARGIN, SPIKE_PRUNE_MARGIN,
)
from .difficulty import land_gap
from .rng import RandomSource, chance

logger = logging.getLogger(__name__)


@dataclass
class Pit:
    """A hole in the ground line; x is the leading (left) edge."""
    x: float
    width: float = HOLE_WIDTH

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class Spike:
    """A triangular hazard standing on the ground line."""
    x: float
    size: float = SPIKE_SIZE

    @property
    def right(self) -> float:
        return self.x + self.size

    def world_points(self, ground_y: float) -> Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]:
        """Returns (A,B,C): base-left, apex, base-right."""
        A = (self.x, ground_y)
        B = (self.x + self.size / 2.0, ground_y - self.size)
        C = (self.x + self.size, ground_y)
        return A, B, C


Obstacle = Union[Pit, Spike]


def spawn_next(frontier_x: float, speed: float, rng: RandomSource) -> Tuple[float, Obstacle]:
    """
    Emit exactly one obstacle at the frontier and return the advanced frontier.
    - spike (SPIKE_CHANCE): runway of SPIKE_CLEARANCE + uniform(pad) before the next spawn
    - pit otherwise: HOLE_WIDTH plus a speed-dependent land gap
    """
    if chance(rng, SPIKE_CHANCE):
        spike = Spike(x=frontier_x)
        return frontier_x + SPIKE_CLEARANCE + rng.uniform(SPIKE_PAD_MIN, SPIKE_PAD_MAX), spike

    pit = Pit(x=frontier_x)
    return frontier_x + HOLE_WIDTH + land_gap(speed, rng), pit


class ObstacleGenerator:
    """Owns the frontier; the only place new obstacles come from."""

    def __init__(self, rng: RandomSource, frontier_x: float = 0.0):
        self.rng = rng
        self.frontier_x = float(frontier_x)
        self.spawned = 0

    def reset(self, frontier_x: float):
        self.frontier_x = float(frontier_x)
        self.spawned = 0

    def spawn(self, speed: float) -> Obstacle:
        self.frontier_x, obstacle = spawn_next(self.frontier_x, speed, self.rng)
        self.spawned += 1
        logger.debug("spawned %s at x=%.1f, frontier now %.1f",
                     type(obstacle).__name__.lower(), obstacle.x, self.frontier_x)
        return obstacle


@dataclass
class ObstacleTrack:
    """
    Live pits and spikes, each list in spawn order (ascending x at creation).

    Pit-gated spawning: `ensure_ahead` looks at pits only. Spikes are the
    SPIKE_CHANCE branch of a pit-triggered spawn, so spike frequency follows
    pit spacing rather than a schedule of its own.
    """
    pits: List[Pit] = field(default_factory=list)
    spikes: List[Spike] = field(default_factory=list)

    def clear(self):
        self.pits.clear()
        self.spikes.clear()

    def add(self, obstacle: Obstacle):
        if isinstance(obstacle, Spike):
            self.spikes.append(obstacle)
        else:
            self.pits.append(obstacle)

    def advance(self, dx: float):
        """Scroll the world left by dx."""
        for pit in self.pits:
            pit.x -= dx
        for spike in self.spikes:
            spike.x -= dx

    def prune(self):
        """Drop obstacles whose trailing edge has left the screen by the culling margin."""
        self.pits = [p for p in self.pits if not (p.right < -PIT_PRUNE_MARGIN)]
        self.spikes = [s for s in self.spikes if not (s.right < -SPIKE_PRUNE_MARGIN)]

    def ensure_ahead(self, screen_width: float, generator: ObstacleGenerator, speed: float) -> bool:
        """Spawn at most one obstacle when the last pit is not far enough ahead. Returns True if spawned."""
        if self.pits and self.pits[-1].x >= screen_width + SPAWN_BUFFER:
            return False
        self.add(generator.spawn(speed))
        return True

    def __len__(self) -> int:
        return len(self.pits) + len(self.spikes)


def ground_segments(pits: List[Pit], screen_width: float) -> List[Tuple[float, float]]:
    """
    Solid ground as (x_start, x_end) spans across [0, screen_width],
    interrupted by the x-range of every pit.
    """
    segments: List[Tuple[float, float]] = []
    last_x = 0.0
    for pit in pits:
        if pit.x > last_x:
            segments.append((last_x, min(pit.x, float(screen_width))))
        last_x = max(last_x, pit.right)
    if last_x < screen_width:
        segments.append((last_x, float(screen_width)))
    # pits entirely off the right edge produce empty spans
    return [(a, b) for (a, b) in segments if b > a]
