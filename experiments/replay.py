# /experiments/replay.py
"""
Play back an action trace written by experiments/sanity_rollout.py.

  python -m experiments.replay --policy heuristic --seed 105
  python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --slow

Keys: SPACE pause, N single step while paused, R restart, ESC quit.
Runs are deterministic, so the final score must match the one in the meta file.
"""
from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pygame

from glitch_runner.env.runner_env import RunnerEnv
from glitch_runner.game.config import FPS
from glitch_runner.game.game import setup_logging
from glitch_runner.game.session import Snapshot

logger = logging.getLogger(__name__)

ACTION_NAMES = {0: "NOOP", 1: "JUMP", 2: "CROUCH"}
PANEL_POS = (400, 12)  # right half, clear of the score
LINE_H = 18


def read_meta(actions_path: Path) -> Dict[str, str]:
    meta_path = actions_path.with_name(actions_path.name.replace("_actions.npy", "_meta.txt"))
    if not meta_path.exists():
        return {}
    pairs = (line.split("=", 1) for line in meta_path.read_text(encoding="utf-8").splitlines() if "=" in line)
    return {k.strip(): v.strip() for k, v in pairs}


def overlay_lines(snap: Snapshot, step: int, action: Optional[int], cause: Optional[str]) -> List[str]:
    p = snap.player
    lines = [
        f"step {step:5d}  {ACTION_NAMES.get(action, '-'):6s}  frame {snap.frame}",
        f"score {snap.score}  speed {snap.scroll_speed:.3f}  {snap.phase.value}",
        f"y {p.y:6.1f}  vy {p.vy:+6.2f}  {'ground' if p.on_ground else 'air'}"
        f"{'  crouch' if p.crouching else ''}{'  GLITCH' if snap.glitch_active else ''}",
    ]
    for ob in snap.obstacles[:3]:
        r = ob.rect
        lines.append(f"{ob.kind.value:6s} x {r.x:6.1f}  y {r.y:5.1f}  {r.width:.0f}x{r.height:.0f}")
    if cause:
        lines.append(f"hit by {cause}")
    return lines


def draw_overlay(surf: pygame.Surface, font: pygame.font.Font, lines: List[str]):
    panel = pygame.Surface((380, LINE_H * (len(lines) + 1)), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, PANEL_POS)
    x, y = PANEL_POS[0] + 8, PANEL_POS[1] + 6
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (x, y + i * LINE_H))
    pygame.display.flip()


def replay(seed: int, actions: np.ndarray, frame_skip: int, slow: bool = False) -> Optional[int]:
    """Replays until the trace ends or the window closes; returns the final score if reached."""
    env = RunnerEnv(render_mode="human", frame_skip=frame_skip, time_limit_seconds=None)
    env.reset(seed=seed)
    env.render()
    font = pygame.font.SysFont("monospace", 14)
    clock = pygame.time.Clock()

    step, paused, advance_one = 0, False, False
    action: Optional[int] = None
    try:
        while step < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                    return None
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_n:
                        advance_one = paused
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step, paused, action = 0, False, None

            if paused and not advance_one:
                env.render()
            else:
                advance_one = False
                action = int(actions[step])
                _, _, terminated, truncated, _ = env.step(action)
                step += 1
                if terminated or truncated:
                    draw_overlay(pygame.display.get_surface(), font,
                                 overlay_lines(env.session.snapshot(), step, action, env.death_cause))
                    pygame.time.delay(600)
                    break

            draw_overlay(pygame.display.get_surface(), font,
                         overlay_lines(env.session.snapshot(), step, action, env.death_cause))
            clock.tick(FPS // frame_skip if slow else FPS)
        return env.session.snapshot().score
    finally:
        env.close()


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Replay a recorded RunnerEnv episode with a state overlay.")
    ap.add_argument("--seed", type=int, help="Episode seed (inferred from --trace name if omitted)")
    ap.add_argument("--policy", default="random", help="Trace subfolder: random / heuristic / ...")
    ap.add_argument("--trace", default="", help="Explicit path to a <seed>_actions.npy file")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--frame-skip", type=int, default=None, help="Defaults to the meta value, else 4")
    ap.add_argument("--slow", action="store_true", help="Display at decision rate")
    args = ap.parse_args(argv)
    setup_logging()

    if args.trace:
        path = Path(args.trace)
        if args.seed is None:
            stem = path.name.split("_")[0]
            if not stem.lstrip("-").isdigit():
                ap.error("cannot infer --seed from the trace name")
            args.seed = int(stem)
    elif args.seed is None:
        ap.error("pass --seed or --trace")
    else:
        path = Path(args.out_dir) / "traces" / args.policy / f"{args.seed}_actions.npy"
    if not path.exists():
        ap.error(f"trace not found: {path}")

    actions = np.load(path)
    if actions.ndim != 1:
        ap.error(f"expected a 1-D action array, got shape {actions.shape}")
    meta = read_meta(path)
    frame_skip = args.frame_skip or int(meta.get("frame_skip", 4))

    logger.info("replaying %s (seed=%d, %d steps, frame_skip=%d)", path, args.seed, len(actions), frame_skip)
    score = replay(args.seed, actions, frame_skip, slow=args.slow)
    if score is not None and "score" in meta:
        if score == int(meta["score"]):
            logger.info("final score %d matches the recorded run", score)
        else:
            logger.warning("final score %d differs from recorded %s", score, meta["score"])


if __name__ == "__main__":
    main()
