# src/env/observations.py
from __future__ import annotations
from typing import Optional
import numpy as np

from src.game.level import Pipe
from src.game.world import World

OBS_SIZE = 6
VY_SCALE = 20.0        # |velocity| at which vy_norm saturates
SPEED_SCALE = 20.0     # pipe speed at which speed_norm saturates

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def next_pipe(world: World) -> Optional[Pipe]:
    """Nearest pipe whose trailing edge is still ahead of the bird's back."""
    bird = world.bird
    ahead = [p for p in world.pipes if p.trailing_edge >= bird.x - bird.radius]
    return min(ahead, key=lambda p: p.x) if ahead else None


def build_observation(world: World) -> np.ndarray:
    """
    [y_norm, vy_norm, dx_norm, gap_top_norm, gap_bottom_norm, speed_norm], float32.
    With no pipe ahead the gap is the whole screen and dx is 1.
    """
    h = float(max(1, world.height))
    w = float(max(1, world.width))
    bird = world.bird

    y_norm = _clamp01(bird.y / h)
    vy_norm = max(-1.0, min(1.0, bird.velocity / VY_SCALE))

    pipe = next_pipe(world)
    if pipe is None:
        dx, top, bottom, speed = 1.0, 0.0, 1.0, 0.0
    else:
        dx = _clamp01((pipe.trailing_edge - bird.x) / w)
        top = _clamp01(pipe.top / h)
        bottom = _clamp01(pipe.bottom / h)
        speed = _clamp01(pipe.speed / SPEED_SCALE)

    return np.array([y_norm, vy_norm, dx, top, bottom, speed], dtype=np.float32)
