# src/game/player.py
from __future__ import annotations
from dataclasses import dataclass
import pygame
from .config import BIRD_RADIUS, GRAVITY, LIFT


@dataclass
class Bird:
    """
    The player body. x never changes during a run; y is integrated every tick:
    - velocity += gravity, then y += velocity
    - floor is lethal (update_physics reports it), ceiling just stops the climb
    """
    x: float
    y: float
    radius: float = BIRD_RADIUS
    velocity: float = 0.0
    gravity: float = GRAVITY
    lift: float = LIFT

    @property
    def rect(self) -> pygame.Rect:
        """Bounding box, used for drawing only."""
        r = int(self.radius)
        return pygame.Rect(int(self.x) - r, int(self.y) - r, 2 * r, 2 * r)

    def flap(self) -> None:
        """Velocity override, not an additive kick."""
        self.velocity = self.lift

    def update_physics(self, height: float) -> bool:
        """Integrate one tick against [0, height]. Returns True if the floor was hit."""
        self.velocity += self.gravity
        self.y += self.velocity

        hit_floor = False
        if self.y + self.radius > height:
            self.y = height - self.radius
            hit_floor = True
        if self.y - self.radius < 0:
            self.y = self.radius
            self.velocity = 0.0
        return hit_floor
