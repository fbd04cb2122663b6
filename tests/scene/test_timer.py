from __future__ import annotations

from linkedviews.scene.timer import FrameScheduler


def test_callbacks_fire_in_due_order_and_ties_by_registration() -> None:
    s = FrameScheduler()
    fired: list[str] = []
    s.call_later(100, lambda: fired.append("late"))
    s.call_later(50, lambda: fired.append("first"))
    s.call_later(50, lambda: fired.append("second"))

    s.advance(49)
    assert fired == []
    s.advance(1)
    assert fired == ["first", "second"]
    s.advance(50)
    assert fired == ["first", "second", "late"]
    assert s.now() == 100.0


def test_cancel_prevents_firing_and_is_idempotent() -> None:
    s = FrameScheduler()
    fired: list[int] = []
    h = s.call_later(10, lambda: fired.append(1))

    h.cancel()
    h.cancel()
    s.advance(20)

    assert fired == []
    assert h.cancelled and not h.active
    assert s.pending() == 0


def test_clock_reads_due_time_inside_callback() -> None:
    s = FrameScheduler(start_ms=5)
    seen: list[float] = []
    s.call_later(10, lambda: seen.append(s.now()))

    s.advance(100)

    assert seen == [15.0]
    assert s.now() == 105.0


def test_callbacks_scheduled_while_advancing_run_inside_window() -> None:
    s = FrameScheduler()
    fired: list[str] = []

    def chain() -> None:
        fired.append("a")
        s.call_later(10, lambda: fired.append("b"))

    s.call_later(10, chain)
    s.advance(25)

    assert fired == ["a", "b"]


def test_flush_settles_everything() -> None:
    s = FrameScheduler()
    fired: list[int] = []
    s.call_later(200, lambda: fired.append(1))
    s.call_later(400, lambda: fired.append(2))

    s.flush()

    assert fired == [1, 2]
    assert s.pending() == 0
    assert s.now() == 400.0
