# src/tests/test_scheduler.py
"""
Frame callbacks and one-shot timers on the virtual-clock scheduler.

Usage (from repo root):
  python -m src.tests.test_scheduler
"""
from src.game.scheduler import ManualScheduler


def test_frame_callback_runs_on_next_pump_only():
    s = ManualScheduler()
    calls = []

    def tick():
        calls.append(len(calls))
        s.request_frame(tick)      # re-submit, like the game loop

    s.request_frame(tick)
    assert calls == [], "nothing runs before a pump"
    s.pump()
    assert calls == [0], "a re-submitted callback waits for the next frame"
    s.run_frames(3)
    assert calls == [0, 1, 2, 3]
    assert s.pending_frames == 1


def test_timer_fires_at_deadline():
    s = ManualScheduler()
    fired = []
    s.call_later(800, lambda: fired.append(s.now_ms()))
    s.advance(799)
    assert fired == [], "not yet due"
    s.advance(1)
    assert fired == [800.0]
    assert s.pending_timers == 0


def test_equal_deadlines_keep_order():
    s = ManualScheduler()
    order = []
    for name in "abc":
        s.call_later(50, lambda n=name: order.append(n))
    s.advance(50)
    assert order == ["a", "b", "c"]


def test_timer_scheduled_from_timer():
    s = ManualScheduler()
    seen = []
    s.call_later(10, lambda: s.call_later(5, lambda: seen.append(s.now_ms())))
    s.advance(10)
    s.advance(4)
    assert seen == []
    s.advance(1)
    assert seen == [15.0]


def test_negative_delay_rejected():
    s = ManualScheduler()
    try:
        s.call_later(-1, lambda: None)
    except ValueError:
        pass
    else:
        raise AssertionError("negative delay must raise ValueError")


def main():
    test_frame_callback_runs_on_next_pump_only()
    test_timer_fires_at_deadline()
    test_equal_deadlines_keep_order()
    test_timer_scheduled_from_timer()
    test_negative_delay_rejected()
    print("✓ scheduler ok")


if __name__ == "__main__":
    main()
