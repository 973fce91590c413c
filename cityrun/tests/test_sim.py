# cityrun/tests/test_sim.py
"""
Simulation step and run-status commands.

Usage (from repo root):
  python -m cityrun.tests.test_sim
"""
from __future__ import annotations
import random

import pytest

from cityrun.game.level import Pit, Spike
from cityrun.game.sim import (
    display_score, on_frame, request_jump, request_menu, request_pause_toggle,
    request_restart, request_resume, request_start, step,
)
from cityrun.game.state import RunStatus, new_game_state
from cityrun.tests.helpers import running_state


def test_start_resets_world():
    state = running_state()
    assert state.status is RunStatus.RUNNING
    assert state.score == 0.0 and state.speed == 10.0
    assert len(state.track) == 2
    assert all(ob.x >= 960 + 500 for ob in state.track.pits + state.track.spikes)
    assert state.player.grounded and state.player.y == state.ground_y - 50
    assert state.ground_y == 540 - 90


def test_scripted_spawn_sequence():
    # spike (pad 110), then pit (no short gap, gap 220)
    state = running_state([0.1, 0.5, 0.9, 0.5, 0.0])
    assert [s.x for s in state.track.spikes] == [1460.0]
    assert [p.x for p in state.track.pits] == [pytest.approx(1750.0)]
    assert state.frontier_x == pytest.approx(2140.0)


def test_score_accrues_per_tick():
    state = running_state()
    for _ in range(10):
        before = state.score
        outcome = on_frame(state)
        assert outcome is not None and not outcome.game_over
        assert outcome.score_delta == pytest.approx(0.8)
        assert state.score - before == pytest.approx(10 * 0.08)
    assert display_score(state) == 8


def test_obstacles_scroll_by_speed_factor():
    state = running_state()
    xs = [p.x for p in state.track.pits]
    step(state)
    assert [p.x for p in state.track.pits] == [pytest.approx(x - 7.0) for x in xs]


def test_ground_snap_when_landing():
    state = running_state()
    p = state.player
    p.y, p.vy, p.grounded = 395.0, 5.0, False
    step(state)
    assert p.y == state.ground_y - p.height
    assert p.vy == 0.0 and p.grounded


def test_jump_arc_lands_on_ground():
    state = running_state()
    assert request_jump(state)
    step(state)
    assert not state.player.grounded and state.player.y < 400
    for _ in range(60):
        step(state)
        if state.player.grounded:
            break
    assert state.player.grounded and state.player.y == 400.0
    assert state.player.rotation > 0.0          # spun on the way down
    step(state)
    assert state.player.grounded and state.player.rotation == 0.0
    assert state.status is RunStatus.RUNNING


def test_over_hole_prevents_snap_and_ends_in_fall():
    state = running_state()
    state.track.pits.insert(0, Pit(x=100.0))
    step(state)
    assert not state.player.grounded
    assert state.player.y > 400.0
    for _ in range(40):
        if on_frame(state) is None:
            break
    assert state.status is RunStatus.GAME_OVER
    assert state.death_cause == "fall"


def test_fall_through_regardless_of_ground():
    for grounded in (False, True):
        state = running_state()
        state.player.y = state.screen_height + 61
        state.player.grounded = grounded
        outcome = step(state)
        assert outcome.game_over and outcome.cause == "fall"
        assert state.status is RunStatus.GAME_OVER


def test_spike_contact_ends_run():
    state = running_state()
    state.track.spikes.append(Spike(x=140.0))
    outcome = step(state)
    assert outcome.game_over and outcome.cause == "spike"
    assert state.death_cause == "spike"


def test_spike_cleared_in_the_air():
    state = running_state()
    state.track.spikes.append(Spike(x=140.0))
    state.player.y, state.player.vy, state.player.grounded = 200.0, 0.0, False
    outcome = step(state)
    assert not outcome.game_over


def test_game_over_halts_simulation():
    state = running_state()
    state.track.spikes.append(Spike(x=140.0))
    step(state)
    score = state.score
    xs = [p.x for p in state.track.pits]
    for _ in range(5):
        assert on_frame(state) is None
    assert state.score == score
    assert [p.x for p in state.track.pits] == xs
    assert not request_jump(state)
    request_pause_toggle(state)
    request_resume(state)
    assert state.status is RunStatus.GAME_OVER


def test_pause_freezes_everything():
    state = running_state()
    for _ in range(3):
        on_frame(state)
    request_jump(state)
    on_frame(state)
    request_pause_toggle(state)
    assert state.status is RunStatus.PAUSED

    snap = (state.score, [p.x for p in state.track.pits], [s.x for s in state.track.spikes],
            state.player.y, state.player.vy, state.player.rotation)
    for _ in range(10):
        assert on_frame(state) is None
    assert snap == (state.score, [p.x for p in state.track.pits], [s.x for s in state.track.spikes],
                    state.player.y, state.player.vy, state.player.rotation)

    assert not request_jump(state)
    request_pause_toggle(state)
    assert state.status is RunStatus.RUNNING


def test_step_refuses_non_running_state():
    state = new_game_state(rng=random.Random(1))
    with pytest.raises(RuntimeError):
        step(state)
    request_start(state)
    request_pause_toggle(state)
    with pytest.raises(RuntimeError):
        step(state)
    assert state.score == 0.0 and state.ticks == 0


def test_status_machine():
    state = new_game_state(rng=random.Random(1))
    assert state.status is RunStatus.IDLE
    assert on_frame(state) is None
    assert not request_jump(state)
    request_pause_toggle(state)
    request_resume(state)
    assert state.status is RunStatus.IDLE

    request_start(state)
    assert state.status is RunStatus.RUNNING
    request_resume(state)
    assert state.status is RunStatus.RUNNING
    request_pause_toggle(state)
    assert state.status is RunStatus.PAUSED
    request_resume(state)
    assert state.status is RunStatus.RUNNING

    request_pause_toggle(state)
    request_menu(state)
    assert state.status is RunStatus.IDLE

    request_start(state)
    state.track.spikes.append(Spike(x=140.0))
    step(state)
    assert state.status is RunStatus.GAME_OVER
    request_restart(state)
    assert state.status is RunStatus.RUNNING
    assert state.score == 0.0 and state.death_cause is None and len(state.track) == 2


def test_instances_are_independent():
    a = running_state()
    b = running_state()
    request_jump(a)
    for _ in range(5):
        on_frame(a)
        on_frame(b)
    assert b.player.grounded and not a.player.grounded
    assert a.score == b.score


def test_random_run_invariants():
    state = new_game_state(rng=random.Random(2024))
    request_start(state)
    last_score = state.score
    for _ in range(3000):
        outcome = on_frame(state)
        if outcome is None:
            break
        assert state.score > last_score
        last_score = state.score
        assert all(p.width == 170 for p in state.track.pits)
        assert state.player.x == 130.0
    # never jumping, the first obstacle ends the run
    assert state.status is RunStatus.GAME_OVER
    assert state.death_cause in ("fall", "spike")


def main():
    for fn in (
        test_start_resets_world, test_scripted_spawn_sequence, test_score_accrues_per_tick,
        test_obstacles_scroll_by_speed_factor, test_ground_snap_when_landing, test_jump_arc_lands_on_ground,
        test_over_hole_prevents_snap_and_ends_in_fall, test_fall_through_regardless_of_ground,
        test_spike_contact_ends_run, test_spike_cleared_in_the_air, test_game_over_halts_simulation,
        test_pause_freezes_everything, test_step_refuses_non_running_state, test_status_machine, test_instances_are_independent,
        test_random_run_invariants,
    ):
        fn()
    print("✓ sim checks passed")


if __name__ == "__main__":
    main()
