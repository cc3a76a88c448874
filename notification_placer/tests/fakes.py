from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from notification_placer.element_tree import (
    ATTR_IDENTIFIER,
    ATTR_POSITION,
    ATTR_SIZE,
    ATTR_SUBROLE,
    InMemoryElement,
)
from notification_placer.errors import ProcessNotFound
from notification_placer.geometry import Rect, ScreenInfo


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeNotificationCenter:
    """Top-level window list standing in for the Notification Center process."""

    def __init__(self, windows: Optional[List[InMemoryElement]] = None, running: bool = True) -> None:
        self.windows: List[InMemoryElement] = list(windows or [])
        self.running = running
        self.calls = 0

    def __call__(self) -> Sequence[Any]:
        self.calls += 1
        if not self.running:
            raise ProcessNotFound("com.apple.notificationcenterui is not running")
        return list(self.windows)


def screen(width: float = 1920, height: float = 1080, visible_height: float = 1050) -> ScreenInfo:
    return ScreenInfo(
        frame=Rect(0, 0, width, height),
        visible_frame=Rect(0, height - visible_height, width, visible_height),
    )


def notification_window(
    position: Tuple[float, float] = (1900, 20),
    notif_size: Tuple[float, float] = (300, 80),
    window_size: Tuple[float, float] = (1920, 1080),
    subrole: str = "AXNotificationCenterBanner",
    writable: bool = True,
) -> InMemoryElement:
    banner = InMemoryElement(
        attributes={ATTR_SUBROLE: subrole, ATTR_SIZE: notif_size, ATTR_POSITION: position},
        name="banner",
    )
    group = InMemoryElement(attributes={"AXRole": "AXGroup"}, children=[banner], name="group")
    scroll = InMemoryElement(attributes={"AXRole": "AXScrollArea"}, children=[group], name="scroll")
    return InMemoryElement(
        attributes={ATTR_SIZE: window_size, ATTR_POSITION: (0.0, 0.0)},
        children=[scroll],
        writable=writable,
        name="window",
    )


def widget_window(identifier: str = "widget-local:com.apple.weather") -> InMemoryElement:
    return InMemoryElement(attributes={ATTR_IDENTIFIER: identifier}, name=identifier)
