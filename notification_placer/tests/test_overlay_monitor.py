from __future__ import annotations

import pytest

from fakes import FakeClock, FakeNotificationCenter, notification_window, widget_window
from notification_placer.element_tree import InMemoryAccessor
from notification_placer.overlay_monitor import (
    REASSERTION_SECONDS,
    OverlayMonitor,
    ReassertionWindow,
    has_overlay_surface,
)
from notification_placer.state import EngineState


def _monitor(center: FakeNotificationCenter, clock: FakeClock):
    state = EngineState(reassertion=ReassertionWindow(time_source=clock))
    calls = []
    logs = []
    monitor = OverlayMonitor(
        state,
        InMemoryAccessor(),
        center,
        lambda now: calls.append(clock.now if now is None else now),
        log_fn=logs.append,
    )
    return monitor, state, calls, logs


@pytest.mark.parametrize("count, expected", [(0, False), (1, False), (2, True), (3, True)])
def test_has_overlay_surface_threshold(count, expected):
    windows = [widget_window(f"widget-local:{index}") for index in range(count)]
    windows.append(notification_window())

    assert has_overlay_surface(InMemoryAccessor(), windows) is expected


def test_reassertion_window_opens_for_fixed_duration():
    clock = FakeClock(10.0)
    window = ReassertionWindow(time_source=clock)
    assert not window.is_open()

    assert window.open() == 10.0 + REASSERTION_SECONDS
    assert window.is_open(16.4)
    assert not window.is_open(16.5)


def test_reopening_moves_the_deadline():
    clock = FakeClock(0.0)
    window = ReassertionWindow(2.0, time_source=clock)
    window.open()
    window.open(now=5.0)

    assert window.expires_at == 7.0


def test_scenario_c_reprocess_once_when_panel_closes():
    clock = FakeClock()
    center = FakeNotificationCenter([notification_window(), widget_window()])
    monitor, state, calls, logs = _monitor(center, clock)
    state.reassertion.open()

    center.windows.append(widget_window("widget-local:com.apple.calendar"))
    assert monitor.poll() is False
    assert state.last_overlay_state is True

    clock.advance(0.2)
    assert monitor.poll() is False

    center.windows.pop()
    clock.advance(0.2)
    assert monitor.poll() is True

    clock.advance(0.2)
    assert monitor.poll() is False

    assert len(calls) == 1
    assert state.last_overlay_state is False
    assert any("triggering move" in line for line in logs)


def test_reprocess_receives_the_tick_time():
    clock = FakeClock()
    center = FakeNotificationCenter([widget_window(), widget_window("widget-local:b")])
    monitor, state, calls, logs = _monitor(center, clock)
    state.last_overlay_state = True
    state.reassertion.open(now=50.0)

    center.windows.pop()

    assert monitor.poll(now=52.5) is True
    assert calls == [52.5]


def test_no_action_when_state_is_unchanged():
    clock = FakeClock()
    center = FakeNotificationCenter([widget_window()])
    monitor, state, calls, logs = _monitor(center, clock)
    state.reassertion.open()

    for _ in range(5):
        monitor.poll()
        clock.advance(0.2)

    assert calls == []
    assert logs == []


def test_no_action_once_reassertion_window_expired():
    clock = FakeClock()
    center = FakeNotificationCenter([widget_window(), widget_window("widget-local:b")])
    monitor, state, calls, logs = _monitor(center, clock)
    state.last_overlay_state = True
    state.reassertion.open()

    clock.advance(REASSERTION_SECONDS + 0.1)
    center.windows = []

    assert monitor.poll() is False
    assert calls == []
    assert state.last_overlay_state is True
    assert center.calls == 0


def test_panel_opening_updates_state_without_reprocess():
    clock = FakeClock()
    center = FakeNotificationCenter([widget_window(), widget_window("widget-local:b")])
    monitor, state, calls, logs = _monitor(center, clock)
    state.reassertion.open()

    assert monitor.poll() is False
    assert state.last_overlay_state is True
    assert calls == []
    assert logs == ["Notification Center state changed (0 → 1)"]


def test_missing_process_reads_as_panel_closed():
    clock = FakeClock()
    center = FakeNotificationCenter(running=False)
    monitor, state, calls, logs = _monitor(center, clock)

    assert monitor.overlay_visible() is False
