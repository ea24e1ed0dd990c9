# glitch_runner/game/session.py
"""
Frame-stepped game session: the only writer of simulation state.

One tick() per displayed frame. Commands (jump / crouch / restart) are applied
between ticks, never during one, so a seed plus a command log replays exactly.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .difficulty import Difficulty
from .geometry import Rect
from .glitch import GlitchScheduler
from .obstacles import Obstacle, ObstacleKind, ObstacleManager
from .player import Player
from .rng import RandomSource, make_rng

logger = logging.getLogger(__name__)


class Phase(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PlayerSnapshot:
    x: float
    y: float
    vy: float
    on_ground: bool
    crouching: bool
    leg_phase: int
    hitbox: Rect


@dataclass(frozen=True)
class ObstacleSnapshot:
    kind: ObstacleKind
    rect: Rect


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer or an agent needs, detached from live state."""
    phase: Phase
    frame: int
    seed: Optional[int]
    player: PlayerSnapshot
    obstacles: Tuple[ObstacleSnapshot, ...]
    score: int
    high_score: int
    scroll_speed: float
    glitch_active: bool


class GameSession:
    def __init__(self,
                 seed: Optional[int] = None,
                 rng: Optional[RandomSource] = None,
                 autospawn: bool = True):
        # An injected generator wins over the seed (tests script exact draws)
        if rng is None:
            rng, seed = make_rng(seed)
        self.rng = rng
        self.seed = seed
        logger.debug("session created (seed=%s)", seed)

        self.frame = 0
        self.phase = Phase.PLAYING
        self.player = Player()
        self.obstacles = ObstacleManager(rng, autospawn=autospawn)
        self.difficulty = Difficulty()
        self.glitch = GlitchScheduler(rng, frame=self.frame)
        self.last_hit: Optional[Obstacle] = None
        self._ticking = False

    # -------------------- Frame step --------------------

    def tick(self):
        assert not self._ticking, "tick() is not re-entrant"
        self._ticking = True
        try:
            self.frame += 1
            if self.phase is Phase.PLAYING:
                self._step()
        finally:
            self._ticking = False

    def _step(self):
        self.difficulty.tick()
        self.glitch.tick(self.frame)

        self.obstacles.spawn_tick()
        self.obstacles.advance(self.difficulty.scroll_speed)

        self.player.advance()

        hit = self.obstacles.first_collision(self.player.hitbox())
        if hit is not None:
            self._game_over(hit)

    def _game_over(self, hit: Obstacle):
        self.phase = Phase.GAME_OVER
        self.last_hit = hit
        self.glitch.stop()
        self.difficulty.end_session()
        logger.info("game over at frame %d: score=%d high=%d (hit %s)",
                    self.frame, self.difficulty.score, self.difficulty.high_score, hit.kind.value)

    # -------------------- Commands --------------------

    def request_jump(self) -> bool:
        assert not self._ticking, "commands must not be issued mid-tick"
        if self.phase is not Phase.PLAYING:
            return False
        return self.player.request_jump()

    def set_crouch(self, crouch: bool):
        assert not self._ticking, "commands must not be issued mid-tick"
        # pose is frozen after a crash
        if self.phase is not Phase.PLAYING:
            return
        self.player.set_crouch(crouch)

    def request_restart(self) -> bool:
        assert not self._ticking, "commands must not be issued mid-tick"
        if self.phase is not Phase.GAME_OVER:
            return False

        # no-op when the crash already recorded the high score
        self.difficulty.end_session()
        self.player.reset()
        self.obstacles.reset()
        self.difficulty.reset()
        self.glitch.reset(self.frame)
        self.player.set_crouch(False)
        self.last_hit = None
        self.phase = Phase.PLAYING
        logger.debug("restart at frame %d (high=%d)", self.frame, self.difficulty.high_score)
        return True

    # -------------------- Queries --------------------

    @property
    def playing(self) -> bool:
        return self.phase is Phase.PLAYING

    def snapshot(self) -> Snapshot:
        p = self.player
        return Snapshot(
            phase=self.phase,
            frame=self.frame,
            seed=self.seed,
            player=PlayerSnapshot(
                x=p.x, y=p.y, vy=p.vy,
                on_ground=p.on_ground, crouching=p.crouching,
                leg_phase=p.leg_phase, hitbox=p.hitbox(),
            ),
            obstacles=tuple(ObstacleSnapshot(o.kind, o.rect) for o in self.obstacles.obstacles),
            score=self.difficulty.score,
            high_score=self.difficulty.high_score,
            scroll_speed=self.difficulty.scroll_speed,
            glitch_active=self.glitch.active,
        )
