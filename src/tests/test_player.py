# src/tests/test_player.py
"""
Bird physics: gravity integration, flap override, elastic ceiling, lethal floor.

Usage (from repo root):
  python -m src.tests.test_player
  python -m pytest src/tests/test_player.py
"""
from src.game.config import BIRD_RADIUS, GRAVITY, LIFT
from src.game.player import Bird

H = 720


def test_gravity_accumulates():
    b = Bird(x=80.0, y=360.0)
    b.update_physics(H)
    assert b.velocity == GRAVITY, f"velocity after 1 tick: {b.velocity}"
    assert b.y == 360.0 + GRAVITY
    for _ in range(9):
        prev = b.velocity
        b.update_physics(H)
        assert b.velocity == prev + GRAVITY, "velocity must grow by gravity every tick"


def test_flap_sets_velocity_exactly():
    b = Bird(x=80.0, y=360.0, velocity=6.0)
    b.flap()
    assert b.velocity == LIFT, "flap overrides velocity, it does not add to it"
    b.update_physics(H)
    assert b.velocity == LIFT + GRAVITY


def test_ceiling_clamps_and_zeroes_velocity():
    b = Bird(x=80.0, y=BIRD_RADIUS + 1.0, velocity=-8.0)
    hit_floor = b.update_physics(H)
    assert not hit_floor, "ceiling is not lethal"
    assert b.y == BIRD_RADIUS, f"y should clamp to radius, got {b.y}"
    assert b.velocity == 0.0


def test_floor_clamps_and_reports():
    b = Bird(x=80.0, y=H - BIRD_RADIUS - 1.0, velocity=5.0)
    assert b.update_physics(H), "floor contact must be reported"
    assert b.y == H - BIRD_RADIUS


def test_rect_matches_radius():
    b = Bird(x=80.0, y=360.0)
    r = b.rect
    assert r.center == (80, 360) and r.width == 2 * BIRD_RADIUS


def main():
    test_gravity_accumulates()
    test_flap_sets_velocity_exactly()
    test_ceiling_clamps_and_zeroes_velocity()
    test_floor_clamps_and_reports()
    test_rect_matches_radius()
    print("✓ player physics ok")


if __name__ == "__main__":
    main()
