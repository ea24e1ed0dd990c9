# glitch_runner/game/geometry.py
from __future__ import annotations
from dataclasses import dataclass
import pygame


@dataclass(frozen=True)
class Rect:
    """Float axis-aligned rectangle (top-left anchored, y grows downward)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: "Rect") -> bool:
        """Strict overlap on both axes: rectangles sharing only an edge do not collide."""
        return (self.right > other.left and self.left < other.right
                and self.bottom > other.top and self.top < other.bottom)

    def to_pygame(self) -> pygame.Rect:
        return pygame.Rect(round(self.x), round(self.y), round(self.width), round(self.height))
