# cityrun/game/sim.py
"""
Per-frame simulation and the run-status commands.

Hosts (the pygame loop, the gym env, tests) call `on_frame` once per frame and
the `request_*` functions whenever input arrives. Every function takes the
GameState explicitly and applies its transition synchronously; commands that do
not apply in the current status are silent no-ops.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from .collision import is_over_pit_swept, hits_any_spike
from .config import (
    BASE_SPEED, SCROLL_FACTOR, SCORE_FACTOR, FIRST_SPAWN_AHEAD, INITIAL_OBSTACLES, FALL_MARGIN
)
from .state import GameState, RunStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepOutcome:
    score_delta: float
    game_over: bool = False
    cause: Optional[str] = None   # "fall" | "spike"


def _trigger_game_over(state: GameState, cause: str):
    if state.status is RunStatus.GAME_OVER:
        return
    state.status = RunStatus.GAME_OVER
    state.death_cause = cause
    logger.info("game over (%s) after %d ticks, score=%d", cause, state.ticks, display_score(state))


def step(state: GameState) -> StepOutcome:
    """
    One tick of a running game. Order matters:
    score, scroll, spawn/prune, physics, swept pit test, ground, fall, spikes.
    """
    if state.status is not RunStatus.RUNNING:
        raise RuntimeError(f"step() requires a running game, status is {state.status.value}")
    player, track = state.player, state.track

    delta = state.speed * SCORE_FACTOR
    state.score += delta
    state.ticks += 1

    # Move obstacles first so the swept test below uses this tick's dx.
    hole_dx = state.speed * SCROLL_FACTOR
    track.advance(hole_dx)

    track.ensure_ahead(state.screen_width, state.generator, state.speed)
    track.prune()

    prev_top = player.y
    player.update_physics()

    over_hole = is_over_pit_swept(player, track.pits, hole_dx)

    # A body that started the tick entirely below the ground line (sunk into a
    # pit) keeps falling even after the pit scrolls out from under it.
    landing = prev_top < state.ground_y and player.bottom >= state.ground_y
    if not over_hole and landing:
        player.rest_on(state.ground_y)
    else:
        player.grounded = False

    if player.y > state.screen_height + FALL_MARGIN:
        _trigger_game_over(state, "fall")

    # Checked even when the fall already ended the run.
    if hits_any_spike(player, track.spikes, state.ground_y):
        _trigger_game_over(state, "spike")

    if state.status is RunStatus.GAME_OVER:
        return StepOutcome(score_delta=delta, game_over=True, cause=state.death_cause)
    return StepOutcome(score_delta=delta)


def on_frame(state: GameState) -> Optional[StepOutcome]:
    """Advance one tick if running. Idle, paused and game-over frames change nothing."""
    if state.status is not RunStatus.RUNNING:
        return None
    return step(state)


# -------------------- Commands --------------------

def reset_world(state: GameState):
    """Fresh run geometry: base speed, zero score, two obstacles ahead, player at rest."""
    state.speed = BASE_SPEED
    state.score = 0.0
    state.ticks = 0
    state.death_cause = None
    state.track.clear()
    state.generator.reset(state.screen_width + FIRST_SPAWN_AHEAD)
    for _ in range(INITIAL_OBSTACLES):
        state.track.add(state.generator.spawn(state.speed))
    state.player.place_at_start(state.ground_y)


def request_start(state: GameState):
    reset_world(state)
    state.status = RunStatus.RUNNING
    logger.info("run started (seed=%s)", state.seed)


def request_restart(state: GameState):
    request_start(state)


def request_jump(state: GameState) -> bool:
    if state.status is not RunStatus.RUNNING:
        logger.debug("jump ignored while %s", state.status.value)
        return False
    return state.player.try_jump()


def request_pause_toggle(state: GameState):
    if state.status is RunStatus.RUNNING:
        state.status = RunStatus.PAUSED
    elif state.status is RunStatus.PAUSED:
        state.status = RunStatus.RUNNING
    else:
        logger.debug("pause toggle ignored while %s", state.status.value)


def request_resume(state: GameState):
    if state.status is RunStatus.PAUSED:
        state.status = RunStatus.RUNNING


def request_menu(state: GameState):
    state.status = RunStatus.IDLE


def display_score(state: GameState) -> int:
    return int(state.score)
