"""Poll-driven correction for banners displaced by the Notification Center widget panel."""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from notification_placer.element_tree import (
    WIDGET_IDENTIFIER_PREFIX,
    ElementAccessor,
    count_matching,
    identifier_has_prefix,
)
from notification_placer.errors import ProcessNotFound

if TYPE_CHECKING:
    from notification_placer.state import EngineState

REASSERTION_SECONDS = 6.5
POLL_INTERVAL_MS = 200

WindowSource = Callable[[], Sequence[Any]]


def _noop_log(message: str) -> None:
    return None


class ReassertionWindow:
    """Deadline after a successful move during which poll ticks may act."""

    def __init__(
        self,
        duration_seconds: float = REASSERTION_SECONDS,
        *,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        self.duration_seconds = max(0.0, float(duration_seconds))
        self._time = time_source
        self._expires_at: Optional[float] = None

    @property
    def expires_at(self) -> Optional[float]:
        return self._expires_at

    def open(self, now: Optional[float] = None) -> float:
        start = self._time() if now is None else now
        self._expires_at = start + self.duration_seconds
        return self._expires_at

    def is_open(self, now: Optional[float] = None) -> bool:
        if self._expires_at is None:
            return False
        current = self._time() if now is None else now
        return current < self._expires_at


def has_overlay_surface(accessor: ElementAccessor, windows: Sequence[Any]) -> bool:
    """True when more than one top-level window carries a ``widget-local`` identifier.

    One such window stays around even with the panel closed, so a single match
    does not count as open.
    """
    widget_windows = count_matching(accessor, windows, identifier_has_prefix(accessor, WIDGET_IDENTIFIER_PREFIX))
    return widget_windows > 1


class OverlayMonitor:
    """Tracks widget panel visibility and re-runs placement when the panel closes."""

    def __init__(
        self,
        state: "EngineState",
        accessor: ElementAccessor,
        window_source: WindowSource,
        reprocess_fn: Callable[[Optional[float]], object],
        *,
        log_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._state = state
        self._accessor = accessor
        self._window_source = window_source
        self._reprocess = reprocess_fn
        self._log = log_fn or _noop_log

    def overlay_visible(self) -> bool:
        try:
            windows = self._window_source()
        except ProcessNotFound:
            return False
        return has_overlay_surface(self._accessor, windows)

    def poll(self, now: Optional[float] = None) -> bool:
        """Run one tick; returns True when a reprocess was triggered."""
        state = self._state
        if not state.reassertion.is_open(now):
            return False
        current = self.overlay_visible()
        previous = state.last_overlay_state
        triggered = False
        if current != previous:
            self._log(
                f"Notification Center state changed ({int(previous)} → {int(current)})"
                + (" - triggering move" if not current else "")
            )
            if not current:
                self._reprocess(now)
                triggered = True
        state.last_overlay_state = current
        return triggered
