# glitch_runner/game/render.py
from __future__ import annotations
from typing import Optional, Tuple
import pygame
from .config import (
    WIDTH, HEIGHT, GROUND_Y, DINO_SIZE, DINO_STAND_H, DINO_CROUCH_H,
    GRID_LINE_SPACING, NUM_VERTICAL_GRID_LINES, HORIZON_Y_FACTOR,
    COLOR_BG, COLOR_FG, COLOR_DINO, COLOR_EYE, COLOR_OBSTACLE, COLOR_GRID, COLOR_NEON
)
from .background import Parallax
from .obstacles import ObstacleKind
from .session import Phase, PlayerSnapshot, Snapshot


def _centered(cx: float, cy: float, w: float, h: float) -> pygame.Rect:
    r = pygame.Rect(0, 0, round(w), round(h))
    r.center = (round(cx), round(cy))
    return r


class SceneRenderer:
    """
    Draws a Snapshot. Holds only presentation state: parallax layers,
    fonts and the cached scanline overlay.
    """
    def __init__(self, seed: Optional[int] = None):
        self.parallax = Parallax(seed)
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None
        self._scanlines: Optional[pygame.Surface] = None

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont("monospace", 18)
            self._big_font = pygame.font.SysFont("monospace", 64, bold=True)
        return self._font, self._big_font

    def draw(self, surf: pygame.Surface, snap: Snapshot, scroll: bool = True):
        if scroll:
            self.parallax.scroll(snap.scroll_speed, playing=snap.phase is Phase.PLAYING)

        surf.fill(COLOR_BG)
        self._draw_parallax(surf)
        self._draw_score(surf, snap)
        self._draw_ground(surf)
        self._draw_dino(surf, snap.player)
        for ob in snap.obstacles:
            self._draw_obstacle(surf, ob.kind, ob.rect.to_pygame())
        if snap.phase is Phase.GAME_OVER:
            self._draw_game_over(surf)
        self._draw_post_fx(surf, snap.glitch_active)

    # -------------------- Layers --------------------

    def _draw_parallax(self, surf: pygame.Surface):
        for star in self.parallax.stars:
            pygame.draw.circle(surf, (200, 200, 200), (round(star.x), round(star.y)), max(1, round(star.size / 2)))
        for line in self.parallax.grid_lines:
            pygame.draw.line(surf, COLOR_GRID, (round(line.x), round(line.y)),
                             (round(line.x), round(line.y + line.length)), 1)

    def _draw_score(self, surf: pygame.Surface, snap: Snapshot):
        font, _ = self._fonts()
        surf.blit(font.render(f"SCORE: {snap.score}", True, COLOR_FG), (20, 20))
        surf.blit(font.render(f"HI: {snap.high_score}", True, COLOR_FG), (20, 45))

    def _draw_ground(self, surf: pygame.Surface):
        horizon_y = GROUND_Y * HORIZON_Y_FACTOR
        vanish_x = WIDTH / 2

        n_h = 8
        for i in range(n_h):
            # lines bunch up toward the horizon
            y = GROUND_Y - (GROUND_Y - horizon_y) * (i / n_h) ** 2
            pygame.draw.line(surf, COLOR_NEON, (0, y), (WIDTH, y), 1)

        half = NUM_VERTICAL_GRID_LINES // 2
        for i in range(-half, half + 1):
            x_bottom = vanish_x + i * GRID_LINE_SPACING - self.parallax.ground_offset
            pygame.draw.line(surf, COLOR_NEON, (x_bottom, GROUND_Y), (vanish_x, horizon_y), 2)

        pygame.draw.line(surf, COLOR_NEON, (0, GROUND_Y), (WIDTH, GROUND_Y), 3)

    def _draw_dino(self, surf: pygame.Surface, p: PlayerSnapshot):
        body_h = DINO_CROUCH_H if p.crouching else DINO_STAND_H
        y_off = (DINO_STAND_H - DINO_CROUCH_H) / 2 if p.crouching else 0.0
        s = DINO_SIZE

        pygame.draw.rect(surf, COLOR_DINO, _centered(p.x, p.y + y_off, s, body_h))
        pygame.draw.rect(surf, COLOR_DINO, _centered(p.x + s * 0.35, p.y - s * 0.3 + y_off, s * 0.5, s * 0.4))
        pygame.draw.circle(surf, COLOR_EYE, (round(p.x + s * 0.5), round(p.y - s * 0.35 + y_off)), 3)
        pygame.draw.polygon(surf, COLOR_DINO, [
            (p.x - s * 0.5, p.y),
            (p.x - s * 0.9, p.y - s * 0.2),
            (p.x - s * 0.8, p.y + s * 0.2),
        ])

        if p.crouching:
            return
        leg_w, leg_h = 10, 22
        leg_y = p.y + s * 0.45
        if not p.on_ground:
            offsets = (-0.15, 0.15)
        elif p.leg_phase == 0:
            offsets = (-0.25, 0.15)
        else:
            offsets = (-0.15, 0.25)
        for off in offsets:
            pygame.draw.rect(surf, COLOR_DINO, _centered(p.x + s * off, leg_y, leg_w, leg_h))

    def _draw_obstacle(self, surf: pygame.Surface, kind: ObstacleKind, r: pygame.Rect):
        if kind is ObstacleKind.GROUND_BLOCK:
            pygame.draw.rect(surf, COLOR_OBSTACLE, r)
            return
        cx, cy = r.center
        hw, hh = r.width / 2, r.height / 2
        pygame.draw.polygon(surf, COLOR_OBSTACLE, [
            (cx - hw, cy), (cx, cy + hh), (cx + hw, cy), (cx, cy - hh / 2)
        ])

    def _draw_game_over(self, surf: pygame.Surface):
        font, big = self._fonts()
        title = big.render("GAME OVER", True, COLOR_FG)
        surf.blit(title, (WIDTH // 2 - title.get_width() // 2, HEIGHT // 2 - 40 - title.get_height() // 2))
        hint = font.render("Click or press ENTER to play again", True, COLOR_FG)
        surf.blit(hint, (WIDTH // 2 - hint.get_width() // 2, HEIGHT // 2 + 20 - hint.get_height() // 2))

    def _draw_post_fx(self, surf: pygame.Surface, glitch_active: bool):
        w, h = surf.get_size()
        if self._scanlines is None or self._scanlines.get_size() != (w, h):
            self._scanlines = pygame.Surface((w, h), pygame.SRCALPHA)
            for y in range(0, h, 3):
                pygame.draw.line(self._scanlines, (0, 0, 0, 15), (0, y), (w, y))
        surf.blit(self._scanlines, (0, 0))

        if glitch_active:
            # shift one random horizontal band sideways
            rng = self.parallax.rng
            y = int(rng.uniform(0, h))
            band_h = min(int(rng.uniform(10, 50)), h - y)
            if band_h > 0:
                band = surf.subsurface(pygame.Rect(0, y, w, band_h)).copy()
                surf.blit(band, (int(rng.uniform(-20, 20)), y))
