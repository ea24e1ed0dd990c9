# glitch_runner/game/background.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional
from .config import (
    WIDTH, GROUND_Y, NUM_STARS, STAR_SPEED_FACTOR,
    NUM_GRID_LINES, GRID_LINE_SPEED_FACTOR, GRID_LINE_SPACING
)


@dataclass
class Star:
    x: float
    y: float
    size: float


@dataclass
class GridLine:
    x: float
    y: float
    length: float


class Parallax:
    """
    Decorative scroll layers. Owned by the renderer with its own generator,
    so it never consumes draws from the simulation's RNG.
    """
    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self.stars: List[Star] = [
            Star(self.rng.uniform(0, WIDTH), self.rng.uniform(0, GROUND_Y), self.rng.uniform(1, 3))
            for _ in range(NUM_STARS)
        ]
        self.grid_lines: List[GridLine] = [
            GridLine(self.rng.uniform(0, WIDTH), self.rng.uniform(0, GROUND_Y), self.rng.uniform(20, 100))
            for _ in range(NUM_GRID_LINES)
        ]
        self.ground_offset = 0.0

    def scroll(self, speed: float, playing: bool = True):
        for star in self.stars:
            star.x -= speed * STAR_SPEED_FACTOR
            if star.x < 0:
                star.x = WIDTH
                star.y = self.rng.uniform(0, GROUND_Y)

        for line in self.grid_lines:
            line.x -= speed * GRID_LINE_SPEED_FACTOR
            if line.x < 0:
                line.x = WIDTH
                line.length = self.rng.uniform(20, 100)
                line.y = self.rng.uniform(0, GROUND_Y - line.length)

        # floor grid only moves while the run is live
        if playing:
            self.ground_offset = (self.ground_offset + speed) % GRID_LINE_SPACING
