# src/game/ui.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import pygame
from .config import FADE_DURATION_MS

PANEL_W, PANEL_H = 260, 120
BUTTON_W, BUTTON_H = 180, 56
BUTTON_GAP = 24


@dataclass
class SummaryPanel:
    """
    Post-game score panel.
    hidden -> visible at alpha 0 (reveal) -> fading in (begin_fade) -> opaque.
    """
    hidden: bool = True
    last_score: int = 0
    best_score: int = 0
    _fade_start_ms: Optional[float] = None

    def hide(self) -> None:
        self.hidden = True
        self._fade_start_ms = None

    def reveal(self, last_score: int, best_score: int) -> None:
        self.last_score = last_score
        self.best_score = best_score
        self.hidden = False
        self._fade_start_ms = None

    def begin_fade(self, now_ms: float) -> None:
        if not self.hidden:
            self._fade_start_ms = now_ms

    @property
    def fading(self) -> bool:
        return self._fade_start_ms is not None

    def alpha(self, now_ms: float) -> int:
        if self.hidden or self._fade_start_ms is None:
            return 0
        t = (now_ms - self._fade_start_ms) / max(1.0, FADE_DURATION_MS)
        return int(255 * max(0.0, min(1.0, t)))

    def rect(self, size: Tuple[int, int]) -> pygame.Rect:
        w, h = size
        r = pygame.Rect(0, 0, PANEL_W, PANEL_H)
        r.center = (w // 2, h // 2 - PANEL_H // 2 - BUTTON_GAP)
        return r


@dataclass
class StartButton:
    label: str = "Start"
    visible: bool = True

    def rect(self, size: Tuple[int, int]) -> pygame.Rect:
        w, h = size
        r = pygame.Rect(0, 0, BUTTON_W, BUTTON_H)
        r.center = (w // 2, h // 2 + BUTTON_H)
        return r

    def hit(self, pos: Tuple[int, int], size: Tuple[int, int]) -> bool:
        return self.visible and self.rect(size).collidepoint(pos)
