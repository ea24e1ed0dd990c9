# glitch_runner/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from glitch_runner.game.config import WIDTH, HEIGHT, FPS
from glitch_runner.game.render import SceneRenderer
from glitch_runner.game.session import GameSession, Phase
from glitch_runner.env.observations import build_observation, OBS_SIZE, PLAYER_FEATURES

NOOP, JUMP, CROUCH = 0, 1, 2


class RunnerEnv(gym.Env):
    """
    Glitch Runner Gymnasium environment (vector observations).
    - Simulation at 60 frames/s (one session tick per frame).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Actions: 0 = NOOP, 1 = JUMP, 2 = CROUCH (held for the whole decision).
    - Observation: shape (15,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.sim_fps = FPS

        # Optional built-in truncation (you can also use a TimeLimit wrapper)
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = sim_fps / frame_skip
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.Discrete(3)

        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0] + [0.0] * (OBS_SIZE - PLAYER_FEATURES), dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.session: Optional[GameSession] = None
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None
        self.death_cause: Optional[str] = None   # "ground" | "flyer" | None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer: Optional[SceneRenderer] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy:
        # - An explicit seed goes straight to the session for strict reproducibility.
        # - Otherwise draw one from the env's np_random so seeded runs stay replayable.
        if seed is not None:
            session_seed = int(seed)
        else:
            session_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.session = GameSession(seed=session_seed)
        self.current_seed = self.session.seed
        self.timestep = 0
        self.death_cause = None

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.session is not None, "Call reset() first."
        action = int(action)

        # Apply the decision once, before the sub-steps
        self.session.set_crouch(action == CROUCH)
        if action == JUMP:
            self.session.request_jump()

        for _ in range(self.frame_skip):
            self.session.tick()
            if self.session.phase is Phase.GAME_OVER:
                hit = self.session.last_hit
                self.death_cause = hit.kind.value if hit is not None else None
                break

        alive = self.session.phase is Phase.PLAYING
        # Reward: +1 if alive after this decision; -1 on death (once)
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        snap = self.session.snapshot()
        obs = build_observation(snap)
        info = {
            "score": snap.score,
            "high_score": snap.high_score,
            "frame": snap.frame,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "grounded": snap.player.on_ground,
            "scroll_speed": snap.scroll_speed,
            "glitch": snap.glitch_active,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.session is not None
        return build_observation(self.session.snapshot())

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.session is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Glitch Runner — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.renderer = SceneRenderer(seed=self.current_seed)

        self.renderer.draw(self.screen, self.session.snapshot())

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata["render_fps"])
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
