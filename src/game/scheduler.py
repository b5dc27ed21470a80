# src/game/scheduler.py
"""
Host scheduling for the game loop.

The game never sleeps or loops on its own: a tick asks for the next frame with
`request_frame`, and one-shot UI actions are queued with `call_later`. The host
calls `pump()` once per displayed frame, which runs the frame callbacks queued
before this pump and any timers that are due.

- PygameScheduler: wall clock from pygame.time.get_ticks()
- ManualScheduler: virtual clock advanced by hand (headless runs, tests)
"""
from __future__ import annotations
import heapq
import itertools
from typing import Callable, List, Tuple
import pygame

Callback = Callable[[], None]


class Scheduler:
    def __init__(self):
        self._frame_callbacks: List[Callback] = []
        self._timers: List[Tuple[float, int, Callback]] = []
        self._seq = itertools.count()

    def now_ms(self) -> float:
        raise NotImplementedError

    def request_frame(self, callback: Callback) -> None:
        self._frame_callbacks.append(callback)

    def call_later(self, delay_ms: float, callback: Callback) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        # seq keeps FIFO order for equal deadlines
        heapq.heappush(self._timers, (self.now_ms() + delay_ms, next(self._seq), callback))

    @property
    def pending_frames(self) -> int:
        return len(self._frame_callbacks)

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    def pump(self) -> int:
        """Run due timers, then this frame's callbacks. Returns how many callbacks ran."""
        ran = 0
        now = self.now_ms()
        while self._timers and self._timers[0][0] <= now:
            _, _, cb = heapq.heappop(self._timers)
            cb()
            ran += 1

        # callbacks requested while running land in the next frame
        frame, self._frame_callbacks = self._frame_callbacks, []
        for cb in frame:
            cb()
            ran += 1
        return ran


class PygameScheduler(Scheduler):
    def now_ms(self) -> float:
        return float(pygame.time.get_ticks())


class ManualScheduler(Scheduler):
    """Virtual time; nothing happens until advance()/pump() is called."""

    def __init__(self, start_ms: float = 0.0):
        super().__init__()
        self._now = float(start_ms)

    def now_ms(self) -> float:
        return self._now

    def advance(self, ms: float, frame_ms: float = 1000.0 / 60) -> int:
        """Move the clock forward by `ms`, pumping once per `frame_ms` step."""
        ran = 0
        target = self._now + float(ms)
        while self._now < target:
            # land exactly on target so deadlines compare without float drift
            self._now = min(self._now + frame_ms, target)
            ran += self.pump()
        return ran

    def run_frames(self, n: int) -> int:
        """Pump `n` frames without moving the clock."""
        return sum(self.pump() for _ in range(n))
