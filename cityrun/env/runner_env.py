# cityrun/env/runner_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from cityrun.game.config import WIDTH, HEIGHT, FPS
from cityrun.game.render import Scenery, render_frame
from cityrun.game.sim import on_frame, request_jump, request_start
from cityrun.game.state import GameState, RunStatus, new_game_state
from cityrun.env.observations import build_observation, OBS_SIZE, PROBE_OFFSETS


class RunnerEnv(gym.Env):
    """
    City Run Gymnasium environment (vector observations).
    - One sim tick per frame, 60 frames per second of game time.
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Observation: shape (11,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0,
                 width: int = WIDTH,
                 height: int = HEIGHT):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.width = int(width)
        self.height = int(height)

        self.sim_fps = FPS
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)

        # [y_top_norm, vy_norm, grounded, (pit, spike) x probes, nearest_pit, nearest_spike]
        low = np.array([0.0, -1.0, 0.0] + [0.0, 0.0] * len(PROBE_OFFSETS) + [0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.state: Optional[GameState] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        self.screen = None
        self.clock = None
        self.font = None
        self.scenery: Optional[Scenery] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy:
        # - a provided seed drives the obstacle stream directly (strict reproducibility)
        # - otherwise draw one from np_random, recorded in info so the run can be replayed
        if seed is not None:
            level_seed = int(seed)
        else:
            level_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.state = new_game_state(self.width, self.height, rng=random.Random(level_seed), seed=level_seed)
        request_start(self.state)

        self.timestep = 0
        self.current_seed = level_seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": self.state.score}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "call reset() before step()"
        state = self.state

        if int(action) == 1:
            request_jump(state)

        for _ in range(self.frame_skip):
            outcome = on_frame(state)
            if outcome is None or outcome.game_over:
                break

        alive = state.status is RunStatus.RUNNING
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": state.score,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "grounded": state.player.grounded,
            "death_cause": state.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.state is not None
        return build_observation(self.state)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((self.width, self.height))
                pygame.display.set_caption("City Run — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((self.width, self.height))
            self.font = pygame.font.SysFont("jetbrainsmono", 18)
            self.scenery = Scenery(random.Random(self.current_seed))

        if self.render_mode == "human":
            # Pump events so the OS doesn't think we're hung
            pygame.event.pump()

        render_frame(self.screen, self.font, self.scenery, self.state)

        if self.render_mode == "human":
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
