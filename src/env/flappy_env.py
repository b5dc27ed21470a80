# src/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS, WINDOW_TITLE
from src.game.world import World, Phase, start_run, step as world_step
from src.game.render import Renderer
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH

PASS_REWARD = 5.0


class FlappyEnv(gym.Env):
    """
    Flappy Sky Gymnasium environment (vector observations).
    - One world tick per simulated frame (60 per second of game time).
    - Agent acts every `frame_skip` frames (default 2) -> 30 decisions/sec.
    - Observation: shape (6,), float32, see src/env/observations.py.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0,
                 width: int = WIDTH,
                 height: int = HEIGHT):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.width = int(width)
        self.height = int(height)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        self.world: Optional[World] = None
        self.timestep: int = 0

        # Rendering
        self.screen = None
        self.renderer: Optional[Renderer] = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # world RNG derived from np_random -> same seed, same pipes
        world_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.world = World(width=self.width, height=self.height, seed=world_seed)
        start_run(self.world)
        self.timestep = 0

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.world is not None, "Call reset() before step()"
        world = self.world

        score_before = world.score
        if int(action) == 1 and world.phase is Phase.RUNNING:
            world.bird.flap()

        for _ in range(self.frame_skip):
            if world_step(world):
                break

        alive = world.phase is Phase.RUNNING
        reward = 1.0 if alive else -1.0
        reward += PASS_REWARD * (world.score - score_before)

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), float(reward), terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.world is not None
        return build_observation(self.world)

    def _info(self) -> Dict[str, Any]:
        w = self.world
        return {
            "seed": w.seed,
            "score": w.score,
            "level": w.level,
            "frame": w.frame,
            "timestep": self.timestep,
            "death_cause": w.death_cause,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.world is None:
            return None

        if self.renderer is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((self.width, self.height))
                pygame.display.set_caption(f"{WINDOW_TITLE} - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((self.width, self.height))
            self.renderer = Renderer(self.screen)

        self.renderer.draw_scene(self.world)
        self.renderer.compose(self.world)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None
        return self.renderer.rgb_array()

    def close(self):
        if self.renderer is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.renderer = None
            self.clock = None
