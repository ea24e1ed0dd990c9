"""
Obstacle manager checks: spawn cadence, kinds, geometry, scrolling, retirement.

Usage (from repo root):
  python -m glitch_runner.tests.obstacles_tests
"""
import random

from glitch_runner.game.config import (
    WIDTH, GROUND_Y, DINO_SIZE, DINO_X,
    SPAWN_INTERVAL_INITIAL, SPAWN_INTERVAL_MIN, SPAWN_INTERVAL_MAX,
    BLOCK_MIN_H, BLOCK_MAX_H, BLOCK_MIN_W, BLOCK_MAX_W,
    FLYER_W, FLYER_H, FLYER_MIN_LIFT, FLYER_MAX_LIFT
)
from glitch_runner.game.obstacles import Obstacle, ObstacleKind, ObstacleManager
from glitch_runner.game.player import Player


class FixedRandom:
    """Deterministic stand-in: random() always returns `roll`, ranges return their low end."""
    def __init__(self, roll: float):
        self.roll = roll

    def random(self) -> float:
        return self.roll

    def uniform(self, a: float, b: float) -> float:
        return a

    def randrange(self, start: int, stop: int) -> int:
        return start


def test_first_spawn_after_initial_interval():
    mgr = ObstacleManager(random.Random(3))
    for i in range(SPAWN_INTERVAL_INITIAL):
        assert mgr.spawn_tick() is None, f"Spawned early at frame {i + 1}"
    spawned = mgr.spawn_tick()
    assert spawned is not None and len(mgr.obstacles) == 1
    assert mgr.counter == 0
    assert SPAWN_INTERVAL_MIN <= mgr.interval < SPAWN_INTERVAL_MAX


def test_spawn_cadence_stays_in_range():
    mgr = ObstacleManager(random.Random(11))
    frames_since = 0
    gaps = []
    for _ in range(5000):
        frames_since += 1
        if mgr.spawn_tick() is not None:
            gaps.append(frames_since)
            frames_since = 0
    assert gaps[0] == SPAWN_INTERVAL_INITIAL + 1
    for g in gaps[1:]:
        assert SPAWN_INTERVAL_MIN + 1 <= g <= SPAWN_INTERVAL_MAX, f"Gap {g} outside the interval range"
    assert len(set(gaps[1:])) > 1, "Cadence should not be periodic"


def test_empty_field_forces_ground_block():
    mgr = ObstacleManager(FixedRandom(0.95))
    first = mgr.spawn()
    assert first.kind is ObstacleKind.GROUND_BLOCK, "Empty field must start with a ground block"
    second = mgr.spawn()
    assert second.kind is ObstacleKind.FLYER, "High roll on a busy field gives a flyer"


def test_kind_mix_is_roughly_seventy_thirty():
    mgr = ObstacleManager(random.Random(5))
    mgr.add(Obstacle(ObstacleKind.GROUND_BLOCK, 0.0, 0.0, 1.0, 1.0))  # keep the field non-empty
    kinds = [mgr.spawn().kind for _ in range(4000)]
    share = kinds.count(ObstacleKind.GROUND_BLOCK) / len(kinds)
    assert 0.65 < share < 0.75, f"Ground share {share:.3f} far from 0.7"


def test_ground_block_geometry():
    rng = random.Random(21)
    mgr = ObstacleManager(rng)
    for _ in range(200):
        ob = mgr.spawn(ObstacleKind.GROUND_BLOCK)
        assert ob.x == WIDTH
        assert BLOCK_MIN_H <= ob.height <= BLOCK_MAX_H
        assert BLOCK_MIN_W <= ob.width <= BLOCK_MAX_W
        assert abs((ob.y + ob.height) - GROUND_Y) < 1e-9, "Ground block must sit on the floor"


def test_flyer_geometry():
    mgr = ObstacleManager(random.Random(22))
    for _ in range(200):
        ob = mgr.spawn(ObstacleKind.FLYER)
        assert (ob.width, ob.height) == (FLYER_W, FLYER_H)
        lift = GROUND_Y - DINO_SIZE - ob.y
        assert FLYER_MIN_LIFT <= lift <= FLYER_MAX_LIFT


def test_flyer_clears_standing_player():
    # lowest possible flyer still passes over a grounded, standing runner
    mgr = ObstacleManager(FixedRandom(0.95))
    mgr.add(Obstacle(ObstacleKind.FLYER, DINO_X - 10, GROUND_Y - DINO_SIZE - FLYER_MIN_LIFT, FLYER_W, FLYER_H))
    assert mgr.first_collision(Player().hitbox()) is None


def test_advance_moves_and_retires():
    mgr = ObstacleManager(random.Random(0))
    keep = mgr.add(Obstacle(ObstacleKind.GROUND_BLOCK, 100.0, 300.0, 20.0, 60.0))
    edge = mgr.add(Obstacle(ObstacleKind.GROUND_BLOCK, -10.0, 300.0, 20.0, 60.0))
    mgr.advance(10.0)
    assert keep.x == 90.0
    assert edge in mgr.obstacles, "Right edge exactly at 0 is still on screen"
    mgr.advance(0.5)
    assert edge not in mgr.obstacles, "Fully off-screen obstacle must be retired"
    assert mgr.obstacles == [keep]


def test_advance_and_collect_reports_first_hit():
    mgr = ObstacleManager(random.Random(0))
    hitbox = Player().hitbox()
    far = mgr.add(Obstacle(ObstacleKind.GROUND_BLOCK, 500.0, GROUND_Y - 40, 20.0, 40.0))
    near = mgr.add(Obstacle(ObstacleKind.GROUND_BLOCK, hitbox.right + 3.0, GROUND_Y - 40, 20.0, 40.0))
    assert mgr.advance_and_collect(3.0, hitbox) is None, "Touching edges must not count"
    assert near.x == hitbox.right
    assert mgr.advance_and_collect(0.5, hitbox) is near
    assert far in mgr.obstacles


def test_autospawn_off_and_reset():
    mgr = ObstacleManager(random.Random(0), autospawn=False)
    for _ in range(500):
        assert mgr.spawn_tick() is None
    assert mgr.obstacles == []

    mgr = ObstacleManager(random.Random(0))
    for _ in range(400):
        mgr.spawn_tick()
    mgr.reset()
    assert (mgr.obstacles, mgr.counter, mgr.interval) == ([], 0, SPAWN_INTERVAL_INITIAL)


def main():
    test_first_spawn_after_initial_interval()
    test_spawn_cadence_stays_in_range()
    test_empty_field_forces_ground_block()
    test_kind_mix_is_roughly_seventy_thirty()
    test_ground_block_geometry()
    test_flyer_geometry()
    test_flyer_clears_standing_player()
    test_advance_moves_and_retires()
    test_advance_and_collect_reports_first_hit()
    test_autospawn_off_and_reset()
    print("✓ Obstacle tests ok")


if __name__ == "__main__":
    main()
