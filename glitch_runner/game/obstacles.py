# glitch_runner/game/obstacles.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from .config import (
    WIDTH, GROUND_Y, DINO_SIZE,
    SPAWN_INTERVAL_INITIAL, SPAWN_INTERVAL_MIN, SPAWN_INTERVAL_MAX,
    GROUND_BLOCK_CHANCE, BLOCK_MIN_H, BLOCK_MAX_H, BLOCK_MIN_W, BLOCK_MAX_W,
    FLYER_W, FLYER_H, FLYER_MIN_LIFT, FLYER_MAX_LIFT
)
from .geometry import Rect
from .rng import RandomSource


class ObstacleKind(Enum):
    GROUND_BLOCK = "ground"
    FLYER = "flyer"


@dataclass
class Obstacle:
    kind: ObstacleKind
    x: float
    y: float
    width: float
    height: float

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


class ObstacleManager:
    """
    Owns the live obstacles: spawns them at the right edge on a randomized
    cadence, scrolls them left and retires them past the left edge.
    """
    def __init__(self, rng: RandomSource, autospawn: bool = True):
        self.rng = rng
        self.autospawn = autospawn
        self.obstacles: List[Obstacle] = []
        self.counter = 0
        self.interval = SPAWN_INTERVAL_INITIAL

    def reset(self):
        self.obstacles = []
        self.counter = 0
        self.interval = SPAWN_INTERVAL_INITIAL

    def spawn_tick(self) -> Optional[Obstacle]:
        """Count one frame; spawn once the counter passes the current interval."""
        if not self.autospawn:
            return None
        self.counter += 1
        if self.counter <= self.interval:
            return None
        obstacle = self.spawn()
        self.counter = 0
        self.interval = self.rng.randrange(SPAWN_INTERVAL_MIN, SPAWN_INTERVAL_MAX)
        return obstacle

    def spawn(self, kind: Optional[ObstacleKind] = None) -> Obstacle:
        """Create one obstacle at the right edge. An empty field always gets a ground block."""
        if kind is None:
            roll = self.rng.random()
            if roll < GROUND_BLOCK_CHANCE or not self.obstacles:
                kind = ObstacleKind.GROUND_BLOCK
            else:
                kind = ObstacleKind.FLYER

        if kind is ObstacleKind.GROUND_BLOCK:
            h = self.rng.uniform(BLOCK_MIN_H, BLOCK_MAX_H)
            w = self.rng.uniform(BLOCK_MIN_W, BLOCK_MAX_W)
            obstacle = Obstacle(kind, float(WIDTH), GROUND_Y - h, w, h)
        else:
            lift = self.rng.uniform(FLYER_MIN_LIFT, FLYER_MAX_LIFT)
            obstacle = Obstacle(kind, float(WIDTH), GROUND_Y - DINO_SIZE - lift,
                                float(FLYER_W), float(FLYER_H))
        self.obstacles.append(obstacle)
        return obstacle

    def add(self, obstacle: Obstacle) -> Obstacle:
        self.obstacles.append(obstacle)
        return obstacle

    def advance(self, scroll_speed: float):
        """Scroll everything left, drop what is fully off-screen."""
        for obstacle in self.obstacles:
            obstacle.x -= scroll_speed
        self.obstacles = [o for o in self.obstacles if o.x + o.width >= 0]

    def first_collision(self, hitbox: Rect) -> Optional[Obstacle]:
        for obstacle in self.obstacles:
            if obstacle.rect.overlaps(hitbox):
                return obstacle
        return None

    def advance_and_collect(self, scroll_speed: float, hitbox: Rect) -> Optional[Obstacle]:
        self.advance(scroll_speed)
        return self.first_collision(hitbox)
