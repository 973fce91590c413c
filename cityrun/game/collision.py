# cityrun/game/collision.py
from __future__ import annotations
from typing import Iterable, Tuple

from .level import Pit, Spike
from .player import Player


def swept_interval(pit: Pit, dx: float) -> Tuple[float, float]:
    """Horizontal hull of the pit at x and at x - dx."""
    prev_l, prev_r = pit.x, pit.x + pit.width
    new_l, new_r = pit.x - dx, pit.x - dx + pit.width
    return min(prev_l, new_l), max(prev_r, new_r)


def is_over_pit_swept(player: Player, pits: Iterable[Pit], dx: float) -> bool:
    """
    True if any pit's swept interval overlaps the player's horizontal extent.
    At high speed a pit can move further than the player is wide in one tick,
    so the instantaneous position alone lets the player skate across it.
    """
    p_l, p_r = player.x, player.right
    for pit in pits:
        swept_l, swept_r = swept_interval(pit, dx)
        if p_r > swept_l and p_l < swept_r:
            return True
    return False


def hits_spike(player: Player, spike: Spike, ground_y: float) -> bool:
    """Horizontal overlap and the player's bottom inside the spike's vertical silhouette."""
    return (
        player.right > spike.x
        and player.x < spike.x + spike.size
        and player.bottom >= ground_y - spike.size
    )


def hits_any_spike(player: Player, spikes: Iterable[Spike], ground_y: float) -> bool:
    return any(hits_spike(player, s, ground_y) for s in spikes)
