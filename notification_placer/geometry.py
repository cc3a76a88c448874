"""Value types shared by the placement engine (pure, no platform types)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ScreenInfo:
    """Full frame and dock/menu-bar excluding frame of one screen."""

    frame: Rect
    visible_frame: Rect

    @property
    def width(self) -> float:
        return self.frame.width

    @property
    def height(self) -> float:
        return self.frame.height

    @property
    def dock_inset(self) -> float:
        return self.frame.height - self.visible_frame.height


@dataclass(frozen=True)
class Geometry:
    """Layout metrics captured from the first observed notification banner."""

    window_size: Size
    notif_size: Size
    position: Point
    padding: float
