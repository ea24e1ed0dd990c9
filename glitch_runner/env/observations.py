# glitch_runner/env/observations.py
from __future__ import annotations
from typing import List, Sequence
import numpy as np

from glitch_runner.game.config import WIDTH, HEIGHT, MAX_VY, MAX_OBS_SPEED, OBS_NEAREST
from glitch_runner.game.obstacles import ObstacleKind
from glitch_runner.game.player import GROUND_LINE
from glitch_runner.game.session import ObstacleSnapshot, Snapshot

PLAYER_FEATURES = 5
OBSTACLE_FEATURES = 5
OBS_SIZE = PLAYER_FEATURES + OBSTACLE_FEATURES * OBS_NEAREST

# [dx, top, bottom, width, is_flyer] when nothing is ahead
EMPTY_OBSTACLE = (1.0, 1.0, 1.0, 0.0, 0.0)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_vy(vy: float, vy_max: float = MAX_VY) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vv = max(-vy_max, min(vy, vy_max))
    return vv / vy_max

def obstacles_ahead(snap: Snapshot) -> List[ObstacleSnapshot]:
    """Obstacles not yet fully behind the player, nearest first."""
    left = snap.player.hitbox.left
    ahead = [o for o in snap.obstacles if o.rect.right > left]
    return sorted(ahead, key=lambda o: o.rect.left)

def build_observation(snap: Snapshot, nearest: int = OBS_NEAREST) -> np.ndarray:
    """
    Returns a fixed (5 + 5*nearest,) float32 vector:
      [ y_norm, vy_norm, on_ground, crouching, speed_norm,
        dx, top, bottom, width, is_flyer,   (nearest obstacle)
        dx, top, bottom, width, is_flyer ]  (next one)
    - y_norm     in [0,1] (1 = resting on the ground)
    - vy_norm    in [-1,1]
    - dx         gap from the player's front edge to the obstacle, / WIDTH
    - top/bottom screen-space y / HEIGHT
    """
    p = snap.player
    feats: List[float] = [
        _clamp01(p.y / GROUND_LINE),
        _norm_vy(p.vy),
        1.0 if p.on_ground else 0.0,
        1.0 if p.crouching else 0.0,
        _clamp01(snap.scroll_speed / MAX_OBS_SPEED),
    ]

    ahead: Sequence[ObstacleSnapshot] = obstacles_ahead(snap)[:nearest]
    front = p.hitbox.right
    for i in range(nearest):
        if i >= len(ahead):
            feats.extend(EMPTY_OBSTACLE)
            continue
        r = ahead[i].rect
        feats.extend([
            _clamp01((r.left - front) / WIDTH),
            _clamp01(r.top / HEIGHT),
            _clamp01(r.bottom / HEIGHT),
            _clamp01(r.width / WIDTH),
            1.0 if ahead[i].kind is ObstacleKind.FLYER else 0.0,
        ])

    return np.asarray(feats, dtype=np.float32)
