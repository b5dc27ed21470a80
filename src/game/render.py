# src/game/render.py
from __future__ import annotations
from typing import Optional
import numpy as np
import pygame
from .config import (
    COLOR_SKY, COLOR_FG, COLOR_PIPE, COLOR_CLOUD, COLOR_BIRD, COLOR_EYE, COLOR_PUPIL,
    COLOR_BEAK, COLOR_OVERLAY, COLOR_PANEL, COLOR_PANEL_EDGE, COLOR_BUTTON,
)
from .world import World, Phase
from .ui import SummaryPanel, StartButton

FONT_NAME = "jetbrainsmono"
BEAK_LEN = 15
BEAK_HALF = 5


class Renderer:
    """
    Draws the world into an off-screen `scene` surface once per tick, and
    composes scene + HUD + end-of-run UI onto the target every displayed frame.
    The scene is left untouched between ticks, so a frozen run keeps its
    game-over overlay.
    """

    def __init__(self, target: pygame.Surface):
        if not pygame.font.get_init():
            pygame.font.init()
        self.font = pygame.font.SysFont(FONT_NAME, 22, bold=True)
        self.big_font = pygame.font.SysFont(FONT_NAME, 48, bold=True)
        self.set_target(target)

    def set_target(self, target: pygame.Surface) -> None:
        """(Re)bind to a target surface; the scene is recreated blank at its size."""
        self.target = target
        self.scene = pygame.Surface(target.get_size())
        self.scene.fill(COLOR_SKY)

    # -------------------- Scene (per tick) --------------------

    def draw_scene(self, world: World) -> None:
        self.scene.fill(COLOR_SKY)
        self._draw_clouds(world)
        self._draw_bird(world)
        self._draw_pipes(world)

    def draw_game_over(self, world: World) -> None:
        """One-shot overlay on top of the last scene."""
        shade = pygame.Surface(self.scene.get_size(), pygame.SRCALPHA)
        shade.fill(COLOR_OVERLAY)
        self.scene.blit(shade, (0, 0))
        txt = self.big_font.render("Game Over", True, COLOR_FG)
        w, h = self.scene.get_size()
        self.scene.blit(txt, txt.get_rect(center=(w // 2, h // 2)))

    def _draw_clouds(self, world: World) -> None:
        if not world.clouds:
            return
        # one alpha layer so overlapping puffs don't stack opacity
        layer = pygame.Surface(self.scene.get_size(), pygame.SRCALPHA)
        for c in world.clouds:
            r = c.radius
            pygame.draw.circle(layer, COLOR_CLOUD, (int(c.x), int(c.y)), int(r))
            pygame.draw.circle(layer, COLOR_CLOUD, (int(c.x + r * 0.6), int(c.y + 10)), int(r * 0.7))
            pygame.draw.circle(layer, COLOR_CLOUD, (int(c.x - r * 0.6), int(c.y + 10)), int(r * 0.7))
        self.scene.blit(layer, (0, 0))

    def _draw_bird(self, world: World) -> None:
        b = world.bird
        x, y, r = b.x, b.y, b.radius
        pygame.draw.circle(self.scene, COLOR_BIRD, (int(x), int(y)), int(r))

        eye = (int(x + r * 0.6), int(y - 8))
        pygame.draw.circle(self.scene, COLOR_EYE, eye, max(1, int(r * 0.3)))
        pygame.draw.circle(self.scene, COLOR_PUPIL, eye, max(1, int(r * 0.12)))

        beak = [(x + r, y), (x + r + BEAK_LEN, y - BEAK_HALF), (x + r + BEAK_LEN, y + BEAK_HALF)]
        pygame.draw.polygon(self.scene, COLOR_BEAK, beak)

    def _draw_pipes(self, world: World) -> None:
        for pipe in world.pipes:
            top, bot = pipe.rects(world.height)
            pygame.draw.rect(self.scene, COLOR_PIPE, top)
            pygame.draw.rect(self.scene, COLOR_PIPE, bot)

    # -------------------- Frame composition --------------------

    def compose(self, world: World,
                panel: Optional[SummaryPanel] = None,
                button: Optional[StartButton] = None,
                now_ms: float = 0.0) -> None:
        self.target.blit(self.scene, (0, 0))
        size = self.target.get_size()

        score = self.big_font.render(str(world.score), True, COLOR_FG)
        self.target.blit(score, score.get_rect(midtop=(size[0] // 2, 12)))
        level = self.font.render(f"Level {world.level}", True, COLOR_FG)
        self.target.blit(level, (12, 12))

        if world.phase is Phase.AWAITING:
            hint = self.font.render("SPACE / tap to flap", True, COLOR_FG)
            self.target.blit(hint, hint.get_rect(center=(size[0] // 2, size[1] // 3)))

        if panel is not None and not panel.hidden:
            self._draw_panel(panel, size, now_ms)
        if button is not None and button.visible:
            self._draw_button(button, size)

    def _draw_panel(self, panel: SummaryPanel, size, now_ms: float) -> None:
        alpha = panel.alpha(now_ms)
        if alpha <= 0:
            return
        rect = panel.rect(size)
        surf = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(surf, COLOR_PANEL, surf.get_rect(), border_radius=10)
        pygame.draw.rect(surf, COLOR_PANEL_EDGE, surf.get_rect(), width=2, border_radius=10)
        lines = (f"Score: {panel.last_score}", f"Best: {panel.best_score}")
        for i, msg in enumerate(lines):
            txt = self.font.render(msg, True, COLOR_FG)
            surf.blit(txt, txt.get_rect(center=(rect.width // 2, rect.height * (i + 1) // 3)))
        surf.set_alpha(alpha)
        self.target.blit(surf, rect.topleft)

    def _draw_button(self, button: StartButton, size) -> None:
        rect = button.rect(size)
        pygame.draw.rect(self.target, COLOR_BUTTON, rect, border_radius=10)
        pygame.draw.rect(self.target, COLOR_PANEL_EDGE, rect, width=2, border_radius=10)
        txt = self.font.render(button.label, True, COLOR_FG)
        self.target.blit(txt, txt.get_rect(center=rect.center))

    def rgb_array(self) -> np.ndarray:
        """(H, W, 3) uint8 copy of the target."""
        arr = pygame.surfarray.array3d(self.target)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))
