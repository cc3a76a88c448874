"""Screen geometry via Qt; the first screen Qt reports is the menu-bar screen."""
from __future__ import annotations

import logging
from typing import List, Optional

from PyQt6.QtGui import QGuiApplication, QScreen

from notification_placer.geometry import Rect, ScreenInfo


def _rect_from_qt(rect) -> Rect:
    return Rect(x=float(rect.x()), y=float(rect.y()), width=float(rect.width()), height=float(rect.height()))


def screen_info_from_qt(screen: QScreen) -> ScreenInfo:
    return ScreenInfo(
        frame=_rect_from_qt(screen.geometry()),
        visible_frame=_rect_from_qt(screen.availableGeometry()),
    )


class QtScreenProvider:
    """Reads frames from ``QGuiApplication``; requires a running Qt application."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def screens(self) -> List[ScreenInfo]:
        if QGuiApplication.instance() is None:
            self._logger.debug("No Qt application running; no screens reported")
            return []
        primary = QGuiApplication.primaryScreen()
        ordered = list(QGuiApplication.screens())
        if primary is not None and primary in ordered:
            ordered.remove(primary)
            ordered.insert(0, primary)
        return [screen_info_from_qt(screen) for screen in ordered]

    def primary_screen(self) -> Optional[ScreenInfo]:
        screens = self.screens()
        if not screens:
            return None
        return screens[0]
