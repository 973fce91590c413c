# /experiments/sanity_rollout.py
"""
Baseline rollouts for RunnerEnv.

Plays a random jumper and a distance-trigger heuristic over a list of level
seeds, appends one CSV row per episode and prints a per-policy summary (mean
score, survival rate, how runs ended). With --save-traces each episode is
stored as a single .npz (actions plus the seed, frame_skip and policy needed to
replay it with experiments.replay).

  python -m experiments.sanity_rollout --policies both --save-traces
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --trigger 0.1
"""

from __future__ import annotations
import argparse
import csv
from collections import Counter
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from cityrun.env.runner_env import RunnerEnv

Policy = Callable[[np.ndarray], int]


@dataclass
class EpisodeResult:
    policy: str
    seed: int
    frame_skip: int
    decisions: int
    jumps: int
    score: float
    terminated: bool
    truncated: bool
    death_cause: Optional[str]


# ------------------------ Policies ------------------------

def make_random_policy(seed: int, jump_prob: float) -> Policy:
    rng = np.random.default_rng(seed)
    return lambda _obs: int(rng.random() < jump_prob)


def make_heuristic_policy(trigger: float) -> Policy:
    """Jump from the ground once the nearest pit or spike is within `trigger` of the lookahead."""
    def act(obs: np.ndarray) -> int:
        nearest = min(obs[9], obs[10])
        return int(obs[2] == 1.0 and nearest <= trigger)
    return act


def build_policy(name: str, seed: int, args) -> Policy:
    if name == "random":
        return make_random_policy(10_000 + seed, args.jump_prob)
    if name == "heuristic":
        return make_heuristic_policy(args.trigger)
    raise ValueError(f"unknown policy {name!r}")


# ------------------------ Rollout ------------------------

def play(env: RunnerEnv, policy: Policy, seed: int, max_decisions: int) -> Dict:
    obs, info = env.reset(seed=seed)
    actions: List[int] = []
    term = trunc = False
    while len(actions) < max_decisions and not (term or trunc):
        a = policy(obs)
        actions.append(a)
        obs, _, term, trunc, info = env.step(a)
    return {"actions": actions, "info": info, "terminated": term, "truncated": trunc}


def save_trace(path: Path, result: EpisodeResult, actions: List[int]):
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez(path, actions=np.asarray(actions, dtype=np.int8),
             seed=result.seed, frame_skip=result.frame_skip, policy=result.policy)


def append_rows(csv_path: Path, results: List[EpisodeResult]):
    fields = list(asdict(results[0]).keys())
    new_file = not csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        if new_file:
            w.writeheader()
        for r in results:
            w.writerow(asdict(r))


def summarize(results: List[EpisodeResult]):
    for name in sorted({r.policy for r in results}):
        rs = [r for r in results if r.policy == name]
        causes = Counter(r.death_cause or "time limit" for r in rs)
        mean_score = sum(r.score for r in rs) / len(rs)
        survived = sum(r.truncated for r in rs) / len(rs)
        print(f"{name:>9}: episodes={len(rs)}  mean score={mean_score:.1f}  "
              f"survived={survived:.0%}  endings={dict(causes)}")


def parse_seeds(text: str) -> List[int]:
    if not text.strip():
        return list(range(101, 121))
    return [int(s) for s in text.split(",") if s.strip()]


def main(argv=None):
    ap = argparse.ArgumentParser(description="Baseline RunnerEnv rollouts.")
    ap.add_argument("--policies", default="both", choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated level seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--max-decisions", type=int, default=10_000)
    ap.add_argument("--jump-prob", type=float, default=0.1, help="Random policy jump probability")
    ap.add_argument("--trigger", type=float, default=0.08, help="Heuristic jump distance (normalized)")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    policies = ["random", "heuristic"] if args.policies == "both" else [args.policies]
    seeds = parse_seeds(args.seeds)

    results: List[EpisodeResult] = []
    env = RunnerEnv(frame_skip=args.frame_skip)
    try:
        for name in policies:
            for seed in seeds:
                ep = play(env, build_policy(name, seed, args), seed, args.max_decisions)
                res = EpisodeResult(
                    policy=name, seed=seed, frame_skip=args.frame_skip,
                    decisions=len(ep["actions"]), jumps=sum(ep["actions"]),
                    score=round(float(ep["info"]["score"]), 1),
                    terminated=bool(ep["terminated"]), truncated=bool(ep["truncated"]),
                    death_cause=ep["info"].get("death_cause"),
                )
                results.append(res)
                if args.save_traces:
                    save_trace(out_dir / "traces" / name / f"{seed}.npz", res, ep["actions"])
                print(f"[{name}] seed={seed} decisions={res.decisions} score={int(res.score)} "
                      f"cause={res.death_cause}")
    finally:
        env.close()

    append_rows(out_dir / "episodes.csv", results)
    summarize(results)


if __name__ == "__main__":
    main()
