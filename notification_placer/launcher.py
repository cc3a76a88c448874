from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QGuiApplication

from notification_placer import __version__
from notification_placer.anchor_policy import AnchorSelection
from notification_placer.element_tree import ElementAccessor
from notification_placer.engine import PlacementEngine
from notification_placer.errors import PermissionDenied
from notification_placer.geometry import ScreenInfo
from notification_placer.layout_cache import LayoutCache
from notification_placer.logging_utils import DebugLogSink, configure_logger
from notification_placer.overlay_monitor import ReassertionWindow
from notification_placer.screens import QtScreenProvider
from notification_placer.settings import PlacerSettings, default_settings_path, load_settings, save_settings
from notification_placer.state import EngineState

EXIT_OK = 0
EXIT_PERMISSION_DENIED = 1
EXIT_UNSUPPORTED_PLATFORM = 2


def resolve_settings_path(args_settings: Optional[str]) -> Path:
    if args_settings:
        return Path(args_settings).expanduser().resolve()
    return default_settings_path()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Move macOS notification banners to a chosen screen anchor")
    parser.add_argument("--settings", help="Path to settings.json")
    parser.add_argument("--position", help="Anchor to use and remember (e.g. topLeft, bottomMiddle)")
    parser.add_argument("--list-positions", action="store_true", help="Print the available anchors and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging for this run")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def format_positions() -> List[str]:
    return [f"{anchor.value:<13} {anchor.display_name}" for anchor in AnchorSelection]


def build_engine(
    settings: PlacerSettings,
    accessor: ElementAccessor,
    window_source: Callable[[], Sequence[Any]],
    primary_screen_fn: Callable[[], Optional[ScreenInfo]],
    log_fn: Callable[[str], None],
) -> PlacementEngine:
    state = EngineState(
        anchor=settings.anchor,
        layout_cache=LayoutCache(log_fn=log_fn),
        reassertion=ReassertionWindow(settings.reassertion_seconds),
    )
    return PlacementEngine(accessor, window_source, primary_screen_fn, state=state, log_fn=log_fn)


def apply_position_argument(
    parser: argparse.ArgumentParser,
    settings: PlacerSettings,
    settings_path: Path,
    value: Optional[str],
) -> PlacerSettings:
    if not value:
        return settings
    anchor = AnchorSelection.lookup(value)
    if anchor is None:
        parser.error(f"unknown position '{value}'; use --list-positions")
    settings.anchor = anchor
    save_settings(settings_path, settings)
    return settings


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_positions:
        for line in format_positions():
            print(line)
        return EXIT_OK

    settings_path = resolve_settings_path(args.settings)
    settings = load_settings(settings_path)
    settings = apply_position_argument(parser, settings, settings_path, args.position)
    debug_enabled = bool(args.debug or settings.debug_mode)

    logger = configure_logger(debug_enabled=debug_enabled, retention=settings.log_retention)
    debug_log = DebugLogSink(logger, enabled=debug_enabled)
    logger.info("Starting notification placer (pid=%s)", os.getpid())
    logger.debug("Loaded settings from %s: %s", settings_path, settings.to_payload())
    debug_log(f"Notification placer started - position: {settings.anchor.display_name}")

    if sys.platform != "darwin":
        logger.error("Notification placement requires macOS; platform '%s' is not supported", sys.platform)
        return EXIT_UNSUPPORTED_PLATFORM

    from notification_placer import platform_macos

    try:
        platform_macos.ensure_accessibility_trust(prompt=True)
    except PermissionDenied as exc:
        logger.error("%s", exc)
        return EXIT_PERMISSION_DENIED

    app = QGuiApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    accessor = platform_macos.AXElementAccessor(logger)
    process = platform_macos.NotificationCenterProcess(accessor, logger=logger)
    screens = QtScreenProvider(logger)
    engine = build_engine(settings, accessor, process.top_level_windows, screens.primary_screen, debug_log)

    observer = platform_macos.WindowCreatedObserver(process, logger)
    if not observer.start(engine.on_window_created):
        logger.warning("Window observer unavailable; only startup placement will run")

    poll_timer = QTimer()
    poll_timer.setInterval(settings.poll_interval_ms)
    poll_timer.timeout.connect(lambda: engine.on_poll_tick())
    poll_timer.start()

    moved = engine.reprocess_all_visible_windows()
    logger.debug("Startup placement moved %d notification window(s)", moved)

    exit_code = app.exec()
    poll_timer.stop()
    observer.stop()
    logger.info("Notification placer exiting with code %s", exit_code)
    return int(exit_code)
