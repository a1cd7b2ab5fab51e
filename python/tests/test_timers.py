"""Polled timers: the clock ticker and the preview window."""

from __future__ import annotations

from heritage_puzzle.backend.engine.timers import IntervalTimer, PreviewTimer

from conftest import FakeClock


def test_interval_fires_once_per_interval(clock: FakeClock) -> None:
    timer = IntervalTimer(1.0, clock)
    timer.start()

    clock.advance(0.5)
    assert not timer.poll()
    clock.advance(0.5)
    assert timer.poll()
    assert not timer.poll()
    clock.advance(1.0)
    assert timer.poll()


def test_missed_ticks_collapse(clock: FakeClock) -> None:
    timer = IntervalTimer(1.0, clock)
    timer.start()

    clock.advance(5.5)
    assert timer.poll()
    assert not timer.poll()
    clock.advance(0.5)
    assert timer.poll()


def test_cancelled_interval_never_fires(clock: FakeClock) -> None:
    timer = IntervalTimer(1.0, clock)
    timer.start()
    timer.cancel()

    clock.advance(10)
    assert not timer.active
    assert not timer.poll()


def test_unstarted_interval_is_silent(clock: FakeClock) -> None:
    timer = IntervalTimer(1.0, clock)
    clock.advance(3)

    assert not timer.poll()


def test_preview_hides_after_window(clock: FakeClock) -> None:
    preview = PreviewTimer(3.0, clock)
    assert not preview.visible

    preview.show()
    clock.advance(2.5)
    assert preview.visible
    clock.advance(0.5)
    assert not preview.visible


def test_new_preview_request_restarts_window(clock: FakeClock) -> None:
    preview = PreviewTimer(3.0, clock)

    preview.show()
    clock.advance(2)
    preview.show()
    clock.advance(2)
    assert preview.visible
    clock.advance(1)
    assert not preview.visible


def test_cancelled_preview_hides_immediately(clock: FakeClock) -> None:
    preview = PreviewTimer(3.0, clock)
    preview.show()

    preview.cancel()

    assert not preview.visible
