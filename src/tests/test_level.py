# src/tests/test_level.py
"""
Pipes and clouds: difficulty curve, spawn cadence, scrolling, pruning,
collision, one-shot scoring and level-ups.

Usage (from repo root):
  python -m src.tests.test_level
  python -m pytest src/tests/test_level.py
"""
from src.game.config import (
    PIPE_SPAWN_EVERY, CLOUD_SPAWN_EVERY, PIPE_WIDTH, PIPE_GAP_MIN,
    CLOUD_RADIUS_MIN, CLOUD_RADIUS_SPREAD,
)
from src.game.level import (
    Pipe, Cloud, gap_for_level, speed_for_level, spawn_pipe, spawn_cloud,
    update_pipes, update_clouds,
)
from src.game.world import World, start_run


def make_world(seed: int = 42) -> World:
    w = World(width=480, height=720, seed=seed)
    start_run(w)
    return w


def test_gap_and_speed_curve():
    assert gap_for_level(0) == 150
    assert gap_for_level(1) == 140
    assert gap_for_level(2) == 130
    assert gap_for_level(6) == PIPE_GAP_MIN
    assert gap_for_level(30) == PIPE_GAP_MIN, "gap never drops below the floor"
    speeds = [speed_for_level(lv) for lv in range(1, 20)]
    assert speeds == sorted(speeds) and speeds[0] == 4


def test_spawned_pipe_geometry():
    w = make_world()
    for _ in range(200):
        p = spawn_pipe(w)
        assert p.x == w.width
        assert 0.0 <= p.top < w.height / 2, f"gap top out of upper half: {p.top}"
        assert abs(p.gap - gap_for_level(w.level)) < 1e-9
        assert p.width == PIPE_WIDTH and not p.passed


def test_spawned_cloud_ranges():
    w = make_world()
    for _ in range(200):
        c = spawn_cloud(w)
        assert 0.0 <= c.y < w.height / 3
        assert CLOUD_RADIUS_MIN <= c.radius < CLOUD_RADIUS_MIN + CLOUD_RADIUS_SPREAD
        assert 1.0 <= c.speed < 2.0


def test_spawn_cadence():
    w = make_world()
    w.frame = 1
    update_pipes(w)
    update_clouds(w)
    assert not w.pipes and not w.clouds, "nothing spawns off-cadence"

    w.frame = PIPE_SPAWN_EVERY
    update_pipes(w)
    assert len(w.pipes) == 1
    p = w.pipes[0]
    assert p.x == w.width - p.speed, "new pipe scrolls on the tick it spawns"

    w.frame = CLOUD_SPAWN_EVERY
    update_clouds(w)
    assert len(w.clouds) == 1


def test_offscreen_pipe_is_pruned():
    w = make_world()
    w.frame = 1
    w.pipes = [Pipe(x=-PIPE_WIDTH + 0.5, top=100, bottom=240, speed=4)]
    update_pipes(w)
    assert w.pipes == [], "pipe fully past the left edge must be gone"

    w.pipes = [Pipe(x=-10.0, top=100, bottom=240, speed=4)]
    update_pipes(w)
    assert len(w.pipes) == 1, "partially visible pipe stays"


def test_offscreen_cloud_is_pruned():
    w = make_world()
    w.frame = 1
    w.clouds = [Cloud(x=-49.0, y=50, radius=50, speed=2), Cloud(x=300, y=50, radius=50, speed=2)]
    update_clouds(w)
    assert len(w.clouds) == 1 and w.clouds[0].x == 298


def test_pass_scores_exactly_once():
    w = make_world()
    w.frame = 1
    bird = w.bird
    # trailing edge lands just behind the bird's x after this tick's scroll
    pipe = Pipe(x=bird.x - PIPE_WIDTH - 1.0 + 4, top=bird.y - 60, bottom=bird.y + 80, speed=4)
    w.pipes = [pipe]
    collided = update_pipes(w)
    assert not collided, "bird is inside the gap"
    assert w.score == 1 and pipe.passed

    for _ in range(5):
        w.frame += 1
        update_pipes(w)
    assert w.score == 1, "a pipe must only score once"


def test_level_up_on_tenth_point():
    w = make_world()
    w.frame = 1
    w.score, w.level = 9, 1
    w.pipes = [Pipe(x=0.0, top=w.bird.y - 60, bottom=w.bird.y + 80, speed=4)]
    update_pipes(w)
    assert w.score == 10 and w.level == 2, f"score={w.score} level={w.level}"

    w.frame = PIPE_SPAWN_EVERY
    update_pipes(w)
    assert abs(w.pipes[-1].gap - gap_for_level(2)) < 1e-9
    assert w.pipes[-1].speed == speed_for_level(2)


def test_level_not_raised_between_thresholds():
    w = make_world()
    w.frame = 1
    w.score, w.level = 10, 2
    w.pipes = [Pipe(x=0.0, top=w.bird.y - 60, bottom=w.bird.y + 80, speed=4)]
    update_pipes(w)
    assert w.score == 11 and w.level == 2


def test_collision_outside_gap():
    w = make_world()
    w.frame = 1
    bird = w.bird
    # horizontally overlapping, gap top below the bird's top edge
    w.pipes = [Pipe(x=bird.x - 10 + 4, top=bird.y, bottom=bird.y + 200, speed=4)]
    assert update_pipes(w), "bird pokes above the gap"

    w.pipes = [Pipe(x=bird.x - 10 + 4, top=bird.y - 200, bottom=bird.y, speed=4)]
    assert update_pipes(w), "bird pokes below the gap"


def test_no_collision_without_horizontal_overlap():
    w = make_world()
    w.frame = 1
    bird = w.bird
    w.pipes = [Pipe(x=bird.x + bird.radius + 10 + 4, top=0, bottom=1, speed=4)]
    assert not update_pipes(w)


def main():
    test_gap_and_speed_curve()
    test_spawned_pipe_geometry()
    test_spawned_cloud_ranges()
    test_spawn_cadence()
    test_offscreen_pipe_is_pruned()
    test_offscreen_cloud_is_pruned()
    test_pass_scores_exactly_once()
    test_level_up_on_tenth_point()
    test_level_not_raised_between_thresholds()
    test_collision_outside_gap()
    test_no_collision_without_horizontal_overlap()
    print("✓ level ok")


if __name__ == "__main__":
    main()
