# /experiments/sanity_rollout.py
"""
Baseline rollouts for RunnerEnv.

Plays the random and jump-only heuristic policies over fixed seeds, appends
one CSV row per episode, and can store each episode's actions (plus a
key=value meta file) so experiments/replay.py can play it back.

  python -m experiments.sanity_rollout --policies heuristic --seeds 101,102 --save-traces
"""
from __future__ import annotations
import argparse
import csv
import logging
from collections import Counter
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from glitch_runner.env.runner_env import RunnerEnv, NOOP, JUMP
from glitch_runner.game.config import WIDTH, MAX_OBS_SPEED, FPS
from glitch_runner.game.game import setup_logging

logger = logging.getLogger(__name__)

Policy = Callable[[np.ndarray], int]


def random_policy(seed: int) -> Policy:
    rng = np.random.default_rng(10_000 + seed)
    return lambda _obs: int(rng.integers(0, 3))


def heuristic_policy(seed: int, lead_frames: float = 12.0) -> Policy:
    """Jump once the nearest ground block is less than `lead_frames` of scrolling away."""
    def act(obs: np.ndarray) -> int:
        speed = float(obs[4]) * MAX_OBS_SPEED
        dx, is_flyer = float(obs[5]), obs[9]
        # flyers pass over a standing runner
        if obs[2] == 1.0 and is_flyer == 0.0 and dx * WIDTH < speed * lead_frames:
            return JUMP
        return NOOP
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_policy,
    "heuristic": heuristic_policy,
}


@dataclass
class EpisodeResult:
    policy: str
    seed: int
    frame_skip: int
    decisions: int = 0
    frames: int = 0
    score: int = 0
    terminated: bool = False
    truncated: bool = False
    death_cause: str = ""
    grounded_ratio: float = 0.0
    glitch_ratio: float = 0.0
    actions: List[int] = field(default_factory=list, repr=False)


def play(policy_name: str, seed: int, frame_skip: int, max_decisions: int) -> EpisodeResult:
    env = RunnerEnv(frame_skip=frame_skip)
    policy = POLICIES[policy_name](seed)
    res = EpisodeResult(policy=policy_name, seed=seed, frame_skip=frame_skip)
    grounded = glitched = 0
    try:
        obs, info = env.reset(seed=seed)
        while res.decisions < max_decisions and not (res.terminated or res.truncated):
            action = policy(obs)
            res.actions.append(action)
            obs, _, res.terminated, res.truncated, info = env.step(action)
            res.decisions += 1
            grounded += info["grounded"]
            glitched += info["glitch"]
        res.frames = info.get("frame", 0)
        res.score = info["score"]
        res.death_cause = info.get("death_cause") or ""
    finally:
        env.close()

    res.grounded_ratio = grounded / max(1, res.decisions)
    res.glitch_ratio = glitched / max(1, res.decisions)
    return res


def save_trace(res: EpisodeResult, out_dir: Path):
    trace_dir = out_dir / "traces" / res.policy
    trace_dir.mkdir(parents=True, exist_ok=True)
    np.save(trace_dir / f"{res.seed}_actions.npy", np.asarray(res.actions, dtype=np.int8))
    meta = {"seed": res.seed, "frame_skip": res.frame_skip, "policy": res.policy,
            "score": res.score, "death_cause": res.death_cause}
    (trace_dir / f"{res.seed}_meta.txt").write_text(
        "\n".join(f"{k}={v}" for k, v in meta.items()), encoding="utf-8")


def append_rows(csv_path: Path, results: List[EpisodeResult]):
    rows = []
    for res in results:
        row = asdict(res)
        del row["actions"]
        rows.append(row)
    new_file = not csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0]))
        if new_file:
            w.writeheader()
        w.writerows(rows)


def summarize(results: List[EpisodeResult]):
    by_policy: Dict[str, List[EpisodeResult]] = {}
    for res in results:
        by_policy.setdefault(res.policy, []).append(res)
    for name, group in by_policy.items():
        scores = np.array([r.score for r in group])
        causes = Counter(r.death_cause or "timeout" for r in group)
        logger.info("%-9s n=%d  score mean=%.0f min=%d max=%d  endings=%s",
                    name, len(group), scores.mean(), scores.min(), scores.max(), dict(causes))


def parse_seeds(text: str) -> List[int]:
    if not text.strip():
        return list(range(101, 121))
    return [int(s) for s in text.split(",") if s.strip()]


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Random / heuristic baseline rollouts for RunnerEnv.")
    ap.add_argument("--policies", default="both", choices=[*POLICIES, "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000, help="Decision cap per episode")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true", help="Write actions + meta for replay")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args(argv)
    setup_logging(args.debug)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    names = list(POLICIES) if args.policies == "both" else [args.policies]
    seeds = parse_seeds(args.seeds)
    logger.info("policies=%s seeds=%d frame_skip=%d (%.1f decisions/s)",
                names, len(seeds), args.frame_skip, FPS / args.frame_skip)

    results = []
    for name in names:
        for seed in seeds:
            res = play(name, seed, args.frame_skip, args.steps)
            logger.debug("%s", res)
            if args.save_traces:
                save_trace(res, out_dir)
            results.append(res)

    append_rows(out_dir / "episodes.csv", results)
    summarize(results)


if __name__ == "__main__":
    main()
