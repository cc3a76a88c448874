"""Anchor selection and target coordinate calculation (pure, no platform types)."""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from notification_placer.geometry import Geometry, ScreenInfo

PADDING_ABOVE_DOCK = 30.0


class AnchorSelection(str, Enum):
    TOP_LEFT = "topLeft"
    TOP_MIDDLE = "topMiddle"
    TOP_RIGHT = "topRight"
    MIDDLE_LEFT = "middleLeft"
    DEAD_CENTER = "deadCenter"
    MIDDLE_RIGHT = "middleRight"
    BOTTOM_LEFT = "bottomLeft"
    BOTTOM_MIDDLE = "bottomMiddle"
    BOTTOM_RIGHT = "bottomRight"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def column(self) -> str:
        return _COLUMNS[self]

    @property
    def row(self) -> str:
        return _ROWS[self]

    @property
    def is_system_default(self) -> bool:
        """Top right is where macOS already puts banners; nothing to move."""
        return self is AnchorSelection.TOP_RIGHT

    @classmethod
    def lookup(cls, value: object) -> Optional["AnchorSelection"]:
        """Match a raw value, display name or member name; None when nothing matches."""
        if isinstance(value, AnchorSelection):
            return value
        if not isinstance(value, str):
            return None
        token = value.strip().lower()
        for member in cls:
            if token in (member.value.lower(), member.display_name.lower(), member.name.lower().replace("_", "-")):
                return member
            if token == member.name.lower():
                return member
        return None

    @classmethod
    def from_value(cls, value: object, default: Optional["AnchorSelection"] = None) -> "AnchorSelection":
        found = cls.lookup(value)
        if found is not None:
            return found
        return default if default is not None else DEFAULT_ANCHOR


_DISPLAY_NAMES = {
    AnchorSelection.TOP_LEFT: "Top Left",
    AnchorSelection.TOP_MIDDLE: "Top Middle",
    AnchorSelection.TOP_RIGHT: "Top Right",
    AnchorSelection.MIDDLE_LEFT: "Middle Left",
    AnchorSelection.DEAD_CENTER: "Middle",
    AnchorSelection.MIDDLE_RIGHT: "Middle Right",
    AnchorSelection.BOTTOM_LEFT: "Bottom Left",
    AnchorSelection.BOTTOM_MIDDLE: "Bottom Middle",
    AnchorSelection.BOTTOM_RIGHT: "Bottom Right",
}

_COLUMNS = {
    AnchorSelection.TOP_LEFT: "left",
    AnchorSelection.MIDDLE_LEFT: "left",
    AnchorSelection.BOTTOM_LEFT: "left",
    AnchorSelection.TOP_MIDDLE: "center",
    AnchorSelection.DEAD_CENTER: "center",
    AnchorSelection.BOTTOM_MIDDLE: "center",
    AnchorSelection.TOP_RIGHT: "right",
    AnchorSelection.MIDDLE_RIGHT: "right",
    AnchorSelection.BOTTOM_RIGHT: "right",
}

_ROWS = {
    AnchorSelection.TOP_LEFT: "top",
    AnchorSelection.TOP_MIDDLE: "top",
    AnchorSelection.TOP_RIGHT: "top",
    AnchorSelection.MIDDLE_LEFT: "middle",
    AnchorSelection.DEAD_CENTER: "middle",
    AnchorSelection.MIDDLE_RIGHT: "middle",
    AnchorSelection.BOTTOM_LEFT: "bottom",
    AnchorSelection.BOTTOM_MIDDLE: "bottom",
    AnchorSelection.BOTTOM_RIGHT: "bottom",
}

DEFAULT_ANCHOR = AnchorSelection.TOP_MIDDLE


def compute_target_position(
    anchor: AnchorSelection,
    screen: ScreenInfo,
    geometry: Geometry,
) -> Tuple[float, float]:
    """Return the absolute window coordinate that places the banner at ``anchor``.

    The coordinate is written to the notification window as-is, so calling this
    twice with the same inputs and writing both results leaves the window where
    the first write put it.
    """
    screen_width = screen.width
    screen_height = screen.height
    notif = geometry.notif_size

    column = anchor.column
    if column == "left":
        new_x = geometry.padding - geometry.position.x
    elif column == "center":
        new_x = (screen_width - notif.width) / 2 - geometry.position.x
    else:
        new_x = 0.0

    row = anchor.row
    if row == "top":
        new_y = 0.0
    elif row == "middle":
        new_y = (screen_height - notif.height) / 2 - screen.dock_inset
    else:
        new_y = screen_height - notif.height - screen.dock_inset - PADDING_ABOVE_DOCK

    return new_x, new_y
