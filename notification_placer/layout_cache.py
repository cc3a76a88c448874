"""One-shot capture of the first observed notification banner geometry."""
from __future__ import annotations

from typing import Callable, Optional

from notification_placer.geometry import Geometry, Point, Size

OVERFLOW_PADDING = 16.0


def _noop_log(message: str) -> None:
    return None


class LayoutCache:
    """Holds either nothing or one complete ``Geometry``; never overwritten once set.

    macOS sometimes reports the very first banner of a session past the right
    edge of the screen. When that happens the position is rebuilt as
    right-aligned with a fixed 16pt gap; later banners are trusted as reported.
    """

    def __init__(self, *, log_fn: Optional[Callable[[str], None]] = None) -> None:
        self._geometry: Optional[Geometry] = None
        self._log = log_fn or _noop_log

    @property
    def geometry(self) -> Optional[Geometry]:
        return self._geometry

    @property
    def is_populated(self) -> bool:
        return self._geometry is not None

    def populate(
        self,
        window_size: Size,
        notif_size: Size,
        position: Point,
        screen_width: float,
    ) -> Geometry:
        if self._geometry is not None:
            return self._geometry

        if position.x + notif_size.width > screen_width:
            self._log(f"Detected incorrect initial position.x: {position.x}. Recalculating position.")
            padding = OVERFLOW_PADDING
            effective = Point(x=screen_width - notif_size.width - padding, y=position.y)
        else:
            padding = screen_width - (position.x + notif_size.width)
            effective = position

        self._geometry = Geometry(
            window_size=window_size,
            notif_size=notif_size,
            position=effective,
            padding=padding,
        )
        self._log(
            f"Initial notification cached - size: {notif_size.width}x{notif_size.height}, "
            f"position: ({effective.x}, {effective.y}), padding: {padding}, screenWidth: {screen_width}"
        )
        return self._geometry
