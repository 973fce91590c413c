# cityrun/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from .config import (
    PLAYER_X, PLAYER_W, PLAYER_H, GRAVITY, JUMP_VELOCITY, SPIN_PER_TICK
)


@dataclass
class Player:
    """
    Runner with a fixed x; the world scrolls under it.
    y is the TOP edge, positive down (screen coordinates).
    """
    x: float = float(PLAYER_X)
    y: float = 0.0
    vy: float = 0.0
    grounded: bool = True
    rotation: float = 0.0
    width: float = PLAYER_W
    height: float = PLAYER_H
    gravity: float = GRAVITY
    jump_velocity: float = JUMP_VELOCITY

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    def rest_on(self, ground_y: float):
        """Stand still on the ground line."""
        self.y = ground_y - self.height
        self.vy = 0.0
        self.grounded = True

    def place_at_start(self, ground_y: float):
        self.rest_on(ground_y)
        self.rotation = 0.0

    def try_jump(self) -> bool:
        """Apply the jump impulse only when grounded. Returns True if performed."""
        if not self.grounded:
            return False
        self.vy = self.jump_velocity
        self.grounded = False
        return True

    def update_physics(self):
        """Constant gravity, no terminal velocity; spin while airborne."""
        self.vy += self.gravity
        self.y += self.vy

        if not self.grounded:
            self.rotation += SPIN_PER_TICK
        else:
            self.rotation = 0.0
