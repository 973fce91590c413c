# cityrun/game/difficulty.py
from __future__ import annotations
from typing import Tuple

from .config import (
    LAND_GAP_MIN, LAND_GAP_MAX, LAND_GAP_BASE_SPEED, LAND_GAP_SPEED_CAP,
    LAND_GAP_MAX_SHRINK, LAND_GAP_MIN_SHRINK, LAND_GAP_FLOOR, LAND_GAP_MIN_SPREAD,
    SHORT_GAP_CHANCE, SHORT_GAP_MIN, SHORT_GAP_MAX,
)
from .rng import RandomSource, chance


def land_gap_range(speed: float) -> Tuple[float, float]:
    """
    Sampling range for the solid ground that follows a pit.
    Both bounds tighten above LAND_GAP_BASE_SPEED (max faster than min);
    speed past LAND_GAP_SPEED_CAP does not tighten further.
    """
    s = min(max(float(speed), LAND_GAP_BASE_SPEED), LAND_GAP_SPEED_CAP)
    over = s - LAND_GAP_BASE_SPEED

    lo = LAND_GAP_MIN - over * LAND_GAP_MIN_SHRINK
    hi = LAND_GAP_MAX - over * LAND_GAP_MAX_SHRINK

    lo = max(LAND_GAP_FLOOR, lo)
    hi = max(lo + LAND_GAP_MIN_SPREAD, hi)
    return lo, hi


def land_gap(speed: float, rng: RandomSource) -> float:
    # Occasional short landing forces a quick re-jump, still one pit at a time.
    if chance(rng, SHORT_GAP_CHANCE):
        return rng.uniform(SHORT_GAP_MIN, SHORT_GAP_MAX)
    lo, hi = land_gap_range(speed)
    return rng.uniform(lo, hi)
