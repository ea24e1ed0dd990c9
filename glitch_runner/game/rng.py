# glitch_runner/game/rng.py
from __future__ import annotations
import random
from typing import Optional, Protocol, Tuple


class RandomSource(Protocol):
    """The subset of random.Random the simulation draws from."""

    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...

    def randrange(self, start: int, stop: int) -> int: ...


def make_rng(seed: Optional[int]) -> Tuple[random.Random, int]:
    """
    Resolve a seed spec into (generator, effective seed).
    None draws a fresh seed so the run can still be reproduced afterwards.
    """
    if seed is None:
        seed = random.randrange(0, 2**32 - 1)
    return random.Random(seed), int(seed)
