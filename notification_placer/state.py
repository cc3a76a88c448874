"""Mutable engine state shared by the repositioner and the overlay monitor."""
from __future__ import annotations

from dataclasses import dataclass, field

from notification_placer.anchor_policy import DEFAULT_ANCHOR, AnchorSelection
from notification_placer.layout_cache import LayoutCache
from notification_placer.overlay_monitor import ReassertionWindow


@dataclass
class EngineState:
    """Everything the engine remembers between two run-loop callbacks.

    Only ever touched from the main run loop, so nothing here is locked.
    """

    anchor: AnchorSelection = DEFAULT_ANCHOR
    layout_cache: LayoutCache = field(default_factory=LayoutCache)
    reassertion: ReassertionWindow = field(default_factory=ReassertionWindow)
    last_overlay_state: bool = False
