"""Per-window placement: find the banner, calibrate once, then write the anchored position.

This module stays free of pyobjc and Qt; callers inject the element accessor,
the screen lookup and the widget-panel check.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from notification_placer.anchor_policy import compute_target_position
from notification_placer.element_tree import (
    BANNER_SUBROLES,
    ElementAccessor,
    find_first,
    get_position,
    get_size,
    set_position,
    subrole_in,
)
from notification_placer.errors import AttributeReadFailure, NoPrimaryScreen, PlacementError
from notification_placer.geometry import Geometry, ScreenInfo
from notification_placer.state import EngineState

ScreenFn = Callable[[], Optional[ScreenInfo]]


def _noop_log(message: str) -> None:
    return None


class Repositioner:
    """Moves one notification window at a time to the anchor held in ``EngineState``.

    ``calibrate_only_on_first_sighting`` controls the very first banner of the
    session: by default it is calibrated and moved in the same call; when set,
    that call only fills the layout cache and the banner stays where macOS put it.
    """

    def __init__(
        self,
        state: EngineState,
        accessor: ElementAccessor,
        *,
        primary_screen_fn: ScreenFn,
        overlay_visible_fn: Callable[[], bool],
        log_fn: Optional[Callable[[str], None]] = None,
        calibrate_only_on_first_sighting: bool = False,
    ) -> None:
        self._state = state
        self._accessor = accessor
        self._primary_screen = primary_screen_fn
        self._overlay_visible = overlay_visible_fn
        self._log = log_fn or _noop_log
        self._calibrate_only_on_first_sighting = calibrate_only_on_first_sighting
        self._is_banner = subrole_in(accessor, BANNER_SUBROLES)

    def process_window(self, window: Any, now: Optional[float] = None) -> bool:
        """Place ``window``; returns True when the anchored position was written."""
        anchor = self._state.anchor
        self._log(f"moveNotification called, currentPosition: {anchor.display_name}")
        if anchor.is_system_default:
            self._log("Skipping - position is topRight (default)")
            return False
        if self._overlay_visible():
            self._log("Skipping move - Notification Center UI detected")
            return False
        try:
            return self._place(window, now)
        except AttributeReadFailure as exc:
            self._log(f"Failed to get notification dimensions or find banner container: {exc}")
        except NoPrimaryScreen as exc:
            self._log(f"Failed to get primary screen: {exc}")
        except PlacementError as exc:
            self._log(f"Notification placement abandoned: {exc}")
        return False

    # Internal helpers -------------------------------------------------

    def _require_screen(self) -> ScreenInfo:
        screen = self._primary_screen()
        if screen is None:
            raise NoPrimaryScreen("no screens reported")
        return screen

    def _place(self, window: Any, now: Optional[float]) -> bool:
        accessor = self._accessor
        window_size = get_size(accessor, window)
        if window_size is None:
            raise AttributeReadFailure("window size unavailable")
        banner = find_first(accessor, window, self._is_banner)
        if banner is None:
            raise AttributeReadFailure("no banner element in window")
        notif_size = get_size(accessor, banner)
        position = get_position(accessor, banner)
        if notif_size is None or position is None:
            raise AttributeReadFailure("banner size or position unavailable")

        cache = self._state.layout_cache
        geometry: Optional[Geometry] = cache.geometry
        if geometry is None:
            screen = self._require_screen()
            geometry = cache.populate(window_size, notif_size, position, screen.width)
            if self._calibrate_only_on_first_sighting:
                return False
        elif position != geometry.position:
            set_position(accessor, window, geometry.position.x, geometry.position.y)

        return self._apply_anchor(window, geometry, now)

    def _apply_anchor(self, window: Any, geometry: Geometry, now: Optional[float]) -> bool:
        anchor = self._state.anchor
        screen = self._require_screen()
        self._log(
            "Calculating new position with "
            f"windowSize: {geometry.window_size.width}x{geometry.window_size.height}, "
            f"notifSize: {geometry.notif_size.width}x{geometry.notif_size.height}, "
            f"position: ({geometry.position.x}, {geometry.position.y}), padding: {geometry.padding}, "
            f"primaryScreen: {screen.width}x{screen.height}"
        )
        new_x, new_y = compute_target_position(anchor, screen, geometry)
        if not set_position(self._accessor, window, new_x, new_y):
            self._log(f"Failed to write position ({new_x}, {new_y}) for {anchor.display_name}")
            return False
        self._state.reassertion.open(now)
        self._log(f"Moved notification to {anchor.display_name} at ({new_x}, {new_y})")
        return True
