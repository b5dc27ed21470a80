# experiments/replay.py
"""
Watch a trace saved by experiments/sanity_rollout.py.

  python -m experiments.replay --policy heuristic --seed 105
  python -m experiments.replay --trace experiments/runs/traces/random/112.npz --slow

SPACE pause/resume, N single step while paused, R restart, ESC quit.
Same seed + frame_skip + actions reproduce the recorded episode.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional

import numpy as np
import pygame

from src.env.flappy_env import FlappyEnv
from src.game.config import COLOR_FG


def _draw_overlay(env: FlappyEnv, step_idx: int, action: Optional[int]):
    surf = pygame.display.get_surface()
    if surf is None or env.world is None:
        return
    font = pygame.font.SysFont("jetbrainsmono", 16)
    w = env.world
    label = {0: "NOOP", 1: "FLAP"}.get(action, "-")
    lines = [
        f"step {step_idx}  {label}",
        f"score {w.score}  level {w.level}  vy {w.bird.velocity:+.1f}",
    ]
    if w.death_cause:
        lines.append(f"died: {w.death_cause}")
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, COLOR_FG), (12, 48 + i * 20))
    pygame.display.flip()


def replay_episode(seed: int, actions: np.ndarray, frame_skip: int, slow: bool = False):
    env = FlappyEnv(render_mode="human", frame_skip=frame_skip, time_limit_seconds=None)
    env.reset(seed=seed)
    paused = single = False
    step_idx = 0
    clock = pygame.time.Clock()

    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_n and paused:
                        single = True
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0

            if paused and not single:
                env.render()
                _draw_overlay(env, step_idx, None)
                continue
            single = False

            action = int(actions[step_idx])
            _, _, term, trunc, _ = env.step(action)
            _draw_overlay(env, step_idx, action)
            step_idx += 1
            if slow:
                clock.tick(15)
            if term or trunc:
                pygame.time.delay(600)
                break
    finally:
        env.close()


def main():
    ap = argparse.ArgumentParser(description="Replay a recorded FlappyEnv episode.")
    ap.add_argument("--seed", type=int)
    ap.add_argument("--policy", default="random", help="Trace subfolder: random / heuristic")
    ap.add_argument("--trace", default="", help="Explicit path to a <seed>.npz trace")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--slow", action="store_true", help="~15 fps")
    args = ap.parse_args()

    if args.trace:
        path = Path(args.trace)
        seed = args.seed if args.seed is not None else int(path.stem)
    elif args.seed is not None:
        seed = args.seed
        path = Path(args.out_dir) / "traces" / args.policy / f"{seed}.npz"
    else:
        raise SystemExit("Please provide --seed or --trace")

    trace = np.load(path)
    actions, frame_skip = trace["actions"], int(trace["frame_skip"])
    print(f"Replaying {path}: seed={seed} steps={len(actions)} frame_skip={frame_skip}")
    replay_episode(seed, actions, frame_skip, slow=args.slow)


if __name__ == "__main__":
    main()
