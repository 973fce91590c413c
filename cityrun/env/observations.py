# cityrun/env/observations.py
from __future__ import annotations
from typing import Iterable, List, Tuple
import numpy as np

from cityrun.game.config import PLAYER_H
from cityrun.game.level import Pit, Spike
from cityrun.game.state import GameState

# Probe positions ahead of the player's front edge (world space)
PROBE_OFFSETS: Tuple[int, int, int] = (60, 180, 300)
# Distances beyond this read as 1.0 ("nothing near")
LOOKAHEAD_PX: float = 600.0
# |vy| normalisation: a full jump impulse plus some fall speed
VY_SCALE: float = 40.0

OBS_SIZE = 3 + 2 * len(PROBE_OFFSETS) + 2


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_top_y(y_top: float, screen_height: float) -> float:
    """Normalize a top coordinate into [0,1] using [0, screen_height - PLAYER_H]."""
    denom = max(1.0, screen_height - PLAYER_H)
    return _clamp01(y_top / denom)


def _norm_vy(vy: float) -> float:
    vv = max(-VY_SCALE, min(vy, VY_SCALE))
    return vv / VY_SCALE


def _covered(x: float, spans: Iterable[Tuple[float, float]]) -> int:
    return int(any(l <= x < r for (l, r) in spans))


def _nearest_ahead(front_x: float, obstacles: Iterable, width_attr: str) -> float:
    """Normalized distance to the nearest obstacle whose trailing edge is still ahead of front_x."""
    best = LOOKAHEAD_PX
    for ob in obstacles:
        right = ob.x + getattr(ob, width_attr)
        if right <= front_x - 1e-9:
            continue
        d = max(0.0, ob.x - front_x)
        best = min(best, d)
    return _clamp01(best / LOOKAHEAD_PX)


def build_observation(state: GameState,
                      probe_offsets: Tuple[int, ...] = PROBE_OFFSETS) -> np.ndarray:
    """
    Returns a fixed (11,) float32 vector:
      [ y_top_norm, vy_norm, grounded,
        pit@60,  spike@60,
        pit@180, spike@180,
        pit@300, spike@300,
        nearest_pit_norm, nearest_spike_norm ]
    - y_top_norm in [0,1], vy_norm in [-1,1]
    - probe flags are 0.0/1.0
    - nearest_* in [0,1]; 1.0 when nothing is within LOOKAHEAD_PX
    """
    p = state.player
    front = p.x + p.width

    pits: List[Pit] = state.track.pits
    spikes: List[Spike] = state.track.spikes
    pit_spans = [(h.x, h.x + h.width) for h in pits]
    spike_spans = [(s.x, s.x + s.size) for s in spikes]

    feats: List[float] = [
        _norm_top_y(float(p.y), state.screen_height),
        _norm_vy(float(p.vy)),
        1.0 if p.grounded else 0.0,
    ]
    for dx in probe_offsets:
        px = front + dx
        feats.extend([float(_covered(px, pit_spans)), float(_covered(px, spike_spans))])

    feats.append(_nearest_ahead(front, pits, "width"))
    feats.append(_nearest_ahead(front, spikes, "size"))
    return np.asarray(feats, dtype=np.float32)
