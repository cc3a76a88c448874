"""Placement engine facade: owns ``EngineState`` and exposes the two run-loop events."""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from notification_placer.anchor_policy import AnchorSelection
from notification_placer.element_tree import ElementAccessor
from notification_placer.errors import ProcessNotFound
from notification_placer.geometry import ScreenInfo
from notification_placer.layout_cache import LayoutCache
from notification_placer.overlay_monitor import OverlayMonitor, WindowSource
from notification_placer.repositioner import Repositioner
from notification_placer.state import EngineState


def _noop_log(message: str) -> None:
    return None


class PlacementEngine:
    """Entry points for the observer callback, the poll timer and the presentation layer.

    ``window_source`` returns the Notification Center top-level windows and
    raises ``ProcessNotFound`` when the process is missing.
    """

    def __init__(
        self,
        accessor: ElementAccessor,
        window_source: WindowSource,
        primary_screen_fn: Callable[[], Optional[ScreenInfo]],
        *,
        state: Optional[EngineState] = None,
        log_fn: Optional[Callable[[str], None]] = None,
        calibrate_only_on_first_sighting: bool = False,
    ) -> None:
        self._log = log_fn or _noop_log
        self.state = state if state is not None else EngineState(layout_cache=LayoutCache(log_fn=self._log))
        self._window_source = window_source
        self.monitor = OverlayMonitor(
            self.state,
            accessor,
            window_source,
            self.reprocess_all_visible_windows,
            log_fn=self._log,
        )
        self.repositioner = Repositioner(
            self.state,
            accessor,
            primary_screen_fn=primary_screen_fn,
            overlay_visible_fn=self.monitor.overlay_visible,
            log_fn=self._log,
            calibrate_only_on_first_sighting=calibrate_only_on_first_sighting,
        )

    # Presentation-facing API -----------------------------------------

    def get_anchor(self) -> AnchorSelection:
        return self.state.anchor

    def set_anchor(self, selection: AnchorSelection) -> int:
        """Switch anchors and re-place every visible banner; returns the number moved."""
        previous = self.state.anchor
        self.state.anchor = selection
        self._log(f"Position changed: {previous.display_name} → {selection.display_name}")
        return self.reprocess_all_visible_windows()

    def reprocess_all_visible_windows(self, now: Optional[float] = None) -> int:
        try:
            windows: Sequence[Any] = self._window_source()
        except ProcessNotFound as exc:
            self._log(f"Cannot find Notification Center process: {exc}")
            return 0
        moved = 0
        for window in windows:
            if self.repositioner.process_window(window, now):
                moved += 1
        return moved

    # Run-loop events --------------------------------------------------

    def on_window_created(self, window: Any, now: Optional[float] = None) -> bool:
        return self.repositioner.process_window(window, now)

    def on_poll_tick(self, now: Optional[float] = None) -> bool:
        return self.monitor.poll(now)
