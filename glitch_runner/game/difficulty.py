# glitch_runner/game/difficulty.py
from __future__ import annotations
from dataclasses import dataclass
from .config import INITIAL_SCROLL_SPEED, SCROLL_ACCELERATION


@dataclass
class Difficulty:
    """Score and scroll speed for the running session; high score outlives restarts."""
    scroll_speed: float = INITIAL_SCROLL_SPEED
    score: int = 0
    high_score: int = 0

    def tick(self):
        # speed grows without a ceiling
        self.score += 1
        self.scroll_speed += SCROLL_ACCELERATION

    def end_session(self):
        if self.score > self.high_score:
            self.high_score = self.score

    def reset(self):
        self.scroll_speed = INITIAL_SCROLL_SPEED
        self.score = 0
