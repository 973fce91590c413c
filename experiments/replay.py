# experiments/replay.py
"""
Watch a trace saved by experiments.sanity_rollout.

  python -m experiments.replay experiments/runs/traces/heuristic/105.npz
  python -m experiments.replay experiments/runs/traces/random/112.npz --fps 10

Keys: P pause | R restart | ESC quit
"""

from __future__ import annotations
import argparse
from pathlib import Path

import numpy as np
import pygame

from cityrun.env.runner_env import RunnerEnv


def load_trace(path: Path):
    with np.load(path) as data:
        actions = data["actions"]
        if actions.ndim != 1:
            raise ValueError(f"{path}: expected 1D actions, got shape {actions.shape}")
        return actions, int(data["seed"]), int(data["frame_skip"]), str(data["policy"])


def replay(actions: np.ndarray, seed: int, frame_skip: int, fps: int):
    env = RunnerEnv(render_mode="human", frame_skip=frame_skip, time_limit_seconds=None)
    env.metadata = {**env.metadata, "render_fps": fps}
    env.reset(seed=seed)
    i, paused = 0, False
    try:
        while i < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                    return
                if event.type == pygame.KEYDOWN and event.key == pygame.K_p:
                    paused = not paused
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                    env.reset(seed=seed)
                    i, paused = 0, False

            if paused:
                env.render()
                continue

            _, _, term, trunc, info = env.step(int(actions[i]))
            i += 1
            if term or trunc:
                print(f"ended after {i} decisions: score={int(info['score'])} cause={info['death_cause']}")
                pygame.time.delay(800)
                return
    finally:
        env.close()


def main(argv=None):
    ap = argparse.ArgumentParser(description="Replay a saved RunnerEnv trace.")
    ap.add_argument("trace", type=Path, help=".npz written by sanity_rollout --save-traces")
    ap.add_argument("--fps", type=int, default=15, help="Decisions shown per second")
    args = ap.parse_args(argv)

    actions, seed, frame_skip, policy = load_trace(args.trace)
    print(f"{policy} seed={seed} frame_skip={frame_skip} decisions={len(actions)}")
    replay(actions, seed, frame_skip, args.fps)


if __name__ == "__main__":
    main()
