# src/game/world.py
"""
World state for one game window: the bird, the pipes and clouds on screen,
run counters and the current phase. Every subsystem takes the World and
mutates it in place; there is exactly one writer (the tick or the input handler).
"""
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional
from .config import WIDTH, HEIGHT, BIRD_X_DIVISOR
from .player import Bird
from .level import Pipe, Cloud, update_pipes, update_clouds

logger = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING = auto()
    RUNNING = auto()
    GAME_OVER = auto()


@dataclass
class World:
    width: int = WIDTH
    height: int = HEIGHT
    seed: Optional[int] = None       # None -> random, resolved in __post_init__
    best_score: int = 0              # survives resets
    last_score: int = 0
    bird: Bird = field(init=False)
    pipes: List[Pipe] = field(init=False, default_factory=list)
    clouds: List[Cloud] = field(init=False, default_factory=list)
    frame: int = field(init=False, default=0)
    score: int = field(init=False, default=0)
    level: int = field(init=False, default=1)
    phase: Phase = field(init=False, default=Phase.AWAITING)
    death_cause: Optional[str] = field(init=False, default=None)   # "floor" | "pipe" | None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self):
        if self.seed is None:
            self.seed = random.randrange(0, 2**32 - 1)
        self.rng = random.Random(self.seed)
        initialize(self)


def initialize(world: World) -> None:
    """Fresh bird, empty sky, counters back to zero, waiting for the first input."""
    world.bird = Bird(x=world.width / BIRD_X_DIVISOR, y=world.height / 2)
    world.pipes = []
    world.clouds = []
    world.frame = 0
    world.score = 0
    world.level = 1
    world.death_cause = None
    world.phase = Phase.AWAITING


def start_run(world: World) -> None:
    initialize(world)
    world.phase = Phase.RUNNING
    logger.info("Run started (seed %s, %dx%d)", world.seed, world.width, world.height)


def activate(world: World) -> bool:
    """
    The single player action. While running it flaps; otherwise it resets and
    starts a new run. Returns True when a run was started.
    """
    if world.phase is Phase.RUNNING:
        world.bird.flap()
        return False
    start_run(world)
    return True


def step(world: World) -> bool:
    """
    Advance one tick: bird physics, pipes, clouds, frame counter.
    Returns True exactly on the tick the run ends.
    """
    if world.phase is not Phase.RUNNING:
        return False

    hit_floor = world.bird.update_physics(world.height)
    hit_pipe = update_pipes(world)
    update_clouds(world)
    world.frame += 1

    if hit_floor or hit_pipe:
        world.phase = Phase.GAME_OVER
        world.death_cause = "floor" if hit_floor else "pipe"
        return True
    return False


def finish_run(world: World, store=None) -> bool:
    """
    Record the ended run's score and update the best score.
    `store` (a BestScoreStore) is written only on improvement. Returns True on a new best.
    """
    world.last_score = world.score
    logger.info("Run over: score %d, level %d, cause %s", world.score, world.level, world.death_cause)
    if world.score <= world.best_score:
        return False
    world.best_score = world.score
    logger.info("New best score: %d", world.best_score)
    if store is not None:
        store.save(world.best_score)
    return True


def resize(world: World, width: int, height: int) -> None:
    """New bounds for physics and spawning. Entities already on screen keep their coordinates."""
    world.width = int(width)
    world.height = int(height)
