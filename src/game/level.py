# src/game/level.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple
import pygame
from .config import (
    PIPE_WIDTH, PIPE_SPAWN_EVERY, PIPE_GAP_BASE, PIPE_GAP_SHRINK, PIPE_GAP_MIN,
    PIPE_SPEED_BASE, LEVEL_UP_EVERY,
    CLOUD_SPAWN_EVERY, CLOUD_Y_FRACTION, CLOUD_RADIUS_MIN, CLOUD_RADIUS_SPREAD,
    CLOUD_SPEED_MIN, CLOUD_SPEED_SPREAD,
)
from .player import Bird

if TYPE_CHECKING:
    from .world import World

logger = logging.getLogger(__name__)


@dataclass
class Pipe:
    """A top/bottom barrier pair with a passable gap between `top` and `bottom`."""
    x: float
    top: float
    bottom: float
    speed: float
    width: float = PIPE_WIDTH
    passed: bool = False

    @property
    def gap(self) -> float:
        return self.bottom - self.top

    @property
    def trailing_edge(self) -> float:
        return self.x + self.width

    def rects(self, height: int) -> Tuple[pygame.Rect, pygame.Rect]:
        """(top segment, bottom segment) in screen coords."""
        top = pygame.Rect(int(self.x), 0, int(self.width), int(self.top))
        bot = pygame.Rect(int(self.x), int(self.bottom), int(self.width), max(0, int(height - self.bottom)))
        return top, bot

    def hits(self, bird: Bird) -> bool:
        """Horizontal overlap AND the bird pokes out of the gap."""
        if bird.x + bird.radius <= self.x or bird.x - bird.radius >= self.x + self.width:
            return False
        return (bird.y - bird.radius < self.top) or (bird.y + bird.radius > self.bottom)


@dataclass
class Cloud:
    """Cosmetic only."""
    x: float
    y: float
    radius: float
    speed: float


def gap_for_level(level: int) -> float:
    return max(PIPE_GAP_BASE - level * PIPE_GAP_SHRINK, PIPE_GAP_MIN)


def speed_for_level(level: int) -> float:
    return PIPE_SPEED_BASE + level


def spawn_pipe(world: World) -> Pipe:
    """New pipe at the right edge, gap top placed uniformly in the upper half."""
    gap = gap_for_level(world.level)
    top = world.rng.random() * (world.height / 2)
    pipe = Pipe(x=float(world.width), top=top, bottom=top + gap, speed=speed_for_level(world.level))
    world.pipes.append(pipe)
    return pipe


def spawn_cloud(world: World) -> Cloud:
    rng = world.rng
    cloud = Cloud(
        x=float(world.width),
        y=rng.random() * (world.height * CLOUD_Y_FRACTION),
        radius=CLOUD_RADIUS_MIN + rng.random() * CLOUD_RADIUS_SPREAD,
        speed=CLOUD_SPEED_MIN + rng.random() * CLOUD_SPEED_SPREAD,
    )
    world.clouds.append(cloud)
    return cloud


def _mark_passed(world: World, pipe: Pipe) -> None:
    pipe.passed = True
    world.score += 1
    if world.score % LEVEL_UP_EVERY == 0:
        world.level += 1
        logger.info("Level %d (score %d, next gap %d)", world.level, world.score, gap_for_level(world.level))


def update_pipes(world: World) -> bool:
    """
    Spawn on cadence, scroll, collide, score, prune.
    Returns True if the bird hit any pipe this tick.
    """
    if world.frame % PIPE_SPAWN_EVERY == 0:
        spawn_pipe(world)

    bird = world.bird
    collided = False
    for pipe in world.pipes:
        pipe.x -= pipe.speed
        if pipe.hits(bird):
            collided = True
        if not pipe.passed and pipe.trailing_edge < bird.x:
            _mark_passed(world, pipe)

    world.pipes = [p for p in world.pipes if p.trailing_edge > 0]
    return collided


def update_clouds(world: World) -> None:
    if world.frame % CLOUD_SPAWN_EVERY == 0:
        spawn_cloud(world)
    for cloud in world.clouds:
        cloud.x -= cloud.speed
    world.clouds = [c for c in world.clouds if c.x + c.radius > 0]
