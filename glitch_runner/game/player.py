# glitch_runner/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from .config import (
    DINO_X, DINO_SIZE, DINO_STAND_H, DINO_CROUCH_H,
    GROUND_Y, GRAVITY, JUMP_VELOCITY, LEG_ANIM_FRAMES
)
from .geometry import Rect

GROUND_LINE = GROUND_Y - DINO_SIZE / 2   # resting centre y


@dataclass
class Player:
    """
    Centre-anchored runner with fixed x:
    - y grows downward, GROUND_LINE is the resting centre
    - crouch only changes the hitbox, never the stored size
    """
    x: float = float(DINO_X)
    y: float = GROUND_LINE
    vy: float = 0.0
    on_ground: bool = True
    crouching: bool = False
    leg_phase: int = 0
    leg_timer: int = 0

    @property
    def ground_line(self) -> float:
        return GROUND_LINE

    def hitbox(self) -> Rect:
        """Collision box; shorter and shifted down while crouching."""
        h = DINO_CROUCH_H if self.crouching else DINO_STAND_H
        y_off = (DINO_STAND_H - DINO_CROUCH_H) / 2 if self.crouching else 0.0
        return Rect(self.x - DINO_SIZE / 2, self.y - h / 2 + y_off, DINO_SIZE, h)

    def request_jump(self) -> bool:
        """Jump only from the ground and standing. Returns True if performed."""
        if self.on_ground and not self.crouching:
            self.vy = JUMP_VELOCITY
            return True
        return False

    def set_crouch(self, crouch: bool) -> None:
        if not crouch:
            self.crouching = False
        elif self.on_ground:
            self.crouching = True

    def advance(self, dt: float = 1.0):
        """Integrate gravity, clamp to the ground line, step the run cycle."""
        assert dt >= 0.0, f"negative frame delta: {dt}"

        self.vy += GRAVITY * dt
        self.y += self.vy * dt

        self.on_ground = self.y >= GROUND_LINE
        if self.on_ground:
            self.y = GROUND_LINE
            self.vy = 0.0

        # run cycle (visual only)
        if self.on_ground:
            self.leg_timer += 1
            if self.leg_timer > LEG_ANIM_FRAMES:
                self.leg_phase = (self.leg_phase + 1) % 2
                self.leg_timer = 0

    def reset(self):
        self.x = float(DINO_X)
        self.y = GROUND_LINE
        self.vy = 0.0
        self.on_ground = True
        self.crouching = False
        self.leg_phase = 0
        self.leg_timer = 0
