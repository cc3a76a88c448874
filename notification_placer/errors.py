"""Error kinds raised inside the placement engine."""
from __future__ import annotations


class PlacementError(Exception):
    """Base class for recoverable and fatal placement failures."""


class PermissionDenied(PlacementError):
    """Accessibility access has not been granted to this process."""


class ProcessNotFound(PlacementError):
    """The Notification Center process is not running."""


class AttributeReadFailure(PlacementError):
    """An accessibility attribute could not be read from an element."""


class NoPrimaryScreen(PlacementError):
    """No attached screen was reported."""
