# experiments/sanity_rollout.py
"""
Random vs. gap-centre heuristic on fixed seeds. Appends one row per episode
to episodes.csv and, with --save-traces, stores <seed>.npz per episode
(actions, frame_skip, optionally observations) for experiments/replay.py.

  python -m experiments.sanity_rollout --save-traces
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222 --save-traces --save-obs
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import Dict, Any, Optional

import numpy as np

from src.env.flappy_env import FlappyEnv

CSV_FIELDS = ["policy", "seed", "frame_skip", "steps", "return",
              "score", "level", "terminated", "truncated", "death_cause"]


def random_policy(seed: int, flap_prob: float = 0.08):
    rng = np.random.RandomState(10_000 + seed)
    return lambda _obs: int(rng.random_sample() < flap_prob)


def heuristic_policy(margin: float = 0.02):
    """Flap while falling once the bird has sunk below the middle of the next gap."""
    def act(obs: np.ndarray) -> int:
        target = 0.5 * (obs[3] + obs[4])
        return int(obs[1] >= 0.0 and obs[0] > target + margin)
    return act


def rollout(policy_name: str, seed: int, frame_skip: int, max_steps: int,
            trace_dir: Optional[Path] = None, save_obs: bool = False) -> Dict[str, Any]:
    policy = random_policy(seed) if policy_name == "random" else heuristic_policy()
    env = FlappyEnv(frame_skip=frame_skip)
    actions, observations = [], []
    ret, term, trunc = 0.0, False, False
    try:
        obs, info = env.reset(seed=seed)
        observations.append(obs)
        for _ in range(max_steps):
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            observations.append(obs)
            ret += r
            if term or trunc:
                break
    finally:
        env.close()

    if trace_dir is not None:
        trace_dir.mkdir(parents=True, exist_ok=True)
        extra = {"obs": np.asarray(observations, dtype=np.float32)} if save_obs else {}
        np.savez(trace_dir / f"{seed}.npz",
                 actions=np.asarray(actions, dtype=np.int8), frame_skip=frame_skip, **extra)

    return {
        "policy": policy_name, "seed": seed, "frame_skip": frame_skip,
        "steps": len(actions), "return": f"{ret:.1f}",
        "score": info["score"], "level": info["level"],
        "terminated": int(term), "truncated": int(trunc),
        "death_cause": info["death_cause"] or "",
    }


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", default="both", choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=2)
    ap.add_argument("--steps", type=int, default=10_000, help="Cap on decision steps")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    ap.add_argument("--save-obs", action="store_true")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    policies = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    csv_path = out_dir / "episodes.csv"
    new_file = not csv_path.exists()
    with csv_path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        if new_file:
            writer.writeheader()
        for name in policies:
            trace_dir = out_dir / "traces" / name if args.save_traces else None
            for seed in seeds:
                row = rollout(name, seed, args.frame_skip, args.steps, trace_dir, args.save_obs)
                writer.writerow(row)
                print(f"[{name}] seed={seed} steps={row['steps']} score={row['score']} "
                      f"level={row['level']} ret={row['return']} cause={row['death_cause'] or '-'}")

    print(f"✓ Rollouts written to {csv_path}")


if __name__ == "__main__":
    main()
