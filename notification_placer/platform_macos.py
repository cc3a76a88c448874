"""pyobjc adapters for the macOS accessibility API and Notification Center process."""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from AppKit import NSWorkspace
from ApplicationServices import (
    AXIsProcessTrustedWithOptions,
    AXObserverAddNotification,
    AXObserverCreate,
    AXObserverGetRunLoopSource,
    AXObserverRemoveNotification,
    AXUIElementCopyAttributeValue,
    AXUIElementCreateApplication,
    AXUIElementSetAttributeValue,
    AXValueCreate,
    AXValueGetType,
    AXValueGetValue,
    kAXTrustedCheckOptionPrompt,
    kAXValueCGPointType,
    kAXValueCGSizeType,
    kAXWindowCreatedNotification,
)
from CoreFoundation import (
    CFRunLoopAddSource,
    CFRunLoopGetCurrent,
    CFRunLoopRemoveSource,
    kCFRunLoopDefaultMode,
)
from Quartz import CGPoint

from notification_placer.element_tree import ATTR_CHILDREN, ATTR_POSITION, ATTR_SIZE
from notification_placer.errors import PermissionDenied, ProcessNotFound

NOTIFICATION_CENTER_BUNDLE_ID = "com.apple.notificationcenterui"
ATTR_WINDOWS = "AXWindows"
AX_ERROR_SUCCESS = 0

WindowCreatedCallback = Callable[[Any], None]


def is_process_trusted(prompt: bool = False) -> bool:
    options = {kAXTrustedCheckOptionPrompt: bool(prompt)}
    return bool(AXIsProcessTrustedWithOptions(options))


def ensure_accessibility_trust(prompt: bool = True) -> None:
    """Raise ``PermissionDenied`` unless this process may use the accessibility API."""
    if not is_process_trusted(prompt):
        raise PermissionDenied(
            "Accessibility permission is required to detect and move notifications. "
            "Grant it in System Settings > Privacy & Security > Accessibility and restart."
        )


class AXElementAccessor:
    """``ElementAccessor`` backed by ``AXUIElementCopyAttributeValue``/``SetAttributeValue``."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def get_attribute(self, element: Any, name: str) -> Optional[Any]:
        try:
            err, value = AXUIElementCopyAttributeValue(element, name, None)
        except Exception as exc:
            self._logger.debug("AX read of %s raised: %s", name, exc)
            return None
        if err != AX_ERROR_SUCCESS or value is None:
            return None
        if name == ATTR_SIZE:
            return self._decode(value, kAXValueCGSizeType)
        if name == ATTR_POSITION:
            return self._decode(value, kAXValueCGPointType)
        if name in (ATTR_CHILDREN, ATTR_WINDOWS):
            return list(value)
        return value

    def set_attribute(self, element: Any, name: str, value: Any) -> bool:
        if name == ATTR_POSITION:
            x, y = value
            ax_value = AXValueCreate(kAXValueCGPointType, CGPoint(x, y))
        else:
            ax_value = value
        try:
            err = AXUIElementSetAttributeValue(element, name, ax_value)
        except Exception as exc:
            self._logger.debug("AX write of %s raised: %s", name, exc)
            return False
        return err == AX_ERROR_SUCCESS

    @staticmethod
    def _decode(value: Any, expected_type: int) -> Optional[tuple[float, float]]:
        if AXValueGetType(value) != expected_type:
            return None
        ok, decoded = AXValueGetValue(value, expected_type, None)
        if not ok or decoded is None:
            return None
        if expected_type == kAXValueCGSizeType:
            return float(decoded.width), float(decoded.height)
        return float(decoded.x), float(decoded.y)


class NotificationCenterProcess:
    """Looks up the Notification Center process and lists its top-level windows."""

    def __init__(
        self,
        accessor: AXElementAccessor,
        bundle_id: str = NOTIFICATION_CENTER_BUNDLE_ID,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._accessor = accessor
        self._bundle_id = bundle_id
        self._logger = logger or logging.getLogger(__name__)

    def pid(self) -> int:
        for app in NSWorkspace.sharedWorkspace().runningApplications():
            if app.bundleIdentifier() == self._bundle_id:
                return int(app.processIdentifier())
        raise ProcessNotFound(f"{self._bundle_id} is not running")

    def application_element(self) -> Any:
        return AXUIElementCreateApplication(self.pid())

    def top_level_windows(self) -> List[Any]:
        windows = self._accessor.get_attribute(self.application_element(), ATTR_WINDOWS)
        if windows is None:
            self._logger.debug("Failed to get notification windows")
            return []
        return list(windows)


class WindowCreatedObserver:
    """``AXObserver`` for window creation in Notification Center, attached to the current run loop.

    Qt drives the main CFRunLoop on macOS, so the callback fires on the same
    thread as the poll timer.
    """

    def __init__(self, process: NotificationCenterProcess, logger: Optional[logging.Logger] = None) -> None:
        self._process = process
        self._logger = logger or logging.getLogger(__name__)
        self._observer: Any = None
        self._app_element: Any = None
        self._callback: Optional[WindowCreatedCallback] = None

    @property
    def active(self) -> bool:
        return self._observer is not None

    def start(self, callback: WindowCreatedCallback) -> bool:
        if self._observer is not None:
            return True
        try:
            pid = self._process.pid()
        except ProcessNotFound as exc:
            self._logger.debug("Failed to setup observer - Notification Center not found: %s", exc)
            return False
        err, observer = AXObserverCreate(pid, self._handle_notification, None)
        if err != AX_ERROR_SUCCESS or observer is None:
            self._logger.warning("AXObserverCreate failed with error %s", err)
            return False
        app_element = AXUIElementCreateApplication(pid)
        err = AXObserverAddNotification(observer, app_element, kAXWindowCreatedNotification, None)
        if err != AX_ERROR_SUCCESS:
            self._logger.warning("AXObserverAddNotification failed with error %s", err)
            return False
        CFRunLoopAddSource(CFRunLoopGetCurrent(), AXObserverGetRunLoopSource(observer), kCFRunLoopDefaultMode)
        self._observer = observer
        self._app_element = app_element
        self._callback = callback
        self._logger.debug("Observer setup complete for Notification Center (PID: %s)", pid)
        return True

    def stop(self) -> None:
        observer = self._observer
        if observer is None:
            return
        AXObserverRemoveNotification(observer, self._app_element, kAXWindowCreatedNotification)
        CFRunLoopRemoveSource(CFRunLoopGetCurrent(), AXObserverGetRunLoopSource(observer), kCFRunLoopDefaultMode)
        self._observer = None
        self._app_element = None
        self._callback = None

    def _handle_notification(self, observer: Any, element: Any, notification: str, refcon: Any) -> None:
        if str(notification) != str(kAXWindowCreatedNotification):
            return
        if self._callback is not None:
            self._callback(element)
