# glitch_runner/game/glitch.py
from __future__ import annotations
from .config import GLITCH_DURATION_FRAMES, GLITCH_INTERVAL_MIN, GLITCH_INTERVAL_MAX
from .rng import RandomSource


class GlitchScheduler:
    """
    Random-interval timer for the screen glitch. Independent of score and speed;
    the flag is only read by the renderer.
    """
    def __init__(self, rng: RandomSource, frame: int = 0):
        self.rng = rng
        self.active = False
        self.activated_at = 0
        self.next_trigger = 0
        self._last_frame = frame
        self.reset(frame)

    def _draw_next(self, frame: int):
        self.next_trigger = frame + self.rng.randrange(GLITCH_INTERVAL_MIN, GLITCH_INTERVAL_MAX)

    def reset(self, frame: int):
        self._last_frame = frame
        self.active = False
        self._draw_next(frame)

    def tick(self, frame: int):
        assert frame >= self._last_frame, f"frame went backwards: {frame} < {self._last_frame}"
        self._last_frame = frame

        # redrawing moves the threshold at least GLITCH_INTERVAL_MIN past this frame,
        # so a crossing fires once even if ticks repeat or skip frames
        if frame > self.next_trigger:
            self.active = True
            self.activated_at = frame
            self._draw_next(frame)

        if self.active and frame - self.activated_at >= GLITCH_DURATION_FRAMES:
            self.active = False

    def stop(self):
        """Drop an in-flight glitch. The next trigger is kept; reset() redraws it."""
        self.active = False
