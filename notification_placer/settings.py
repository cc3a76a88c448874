"""Settings file for the notification placer (anchor, debug flag, timings)."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from notification_placer.anchor_policy import DEFAULT_ANCHOR, AnchorSelection
from notification_placer.overlay_monitor import POLL_INTERVAL_MS, REASSERTION_SECONDS

SETTINGS_ENV_VAR = "NOTIFICATION_PLACER_SETTINGS"
DEBUG_ENV_VAR = "NOTIFICATION_PLACER_DEBUG"
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20
POLL_INTERVAL_MIN_MS = 50


@dataclass
class PlacerSettings:
    """Values persisted between runs."""

    anchor: AnchorSelection = DEFAULT_ANCHOR
    debug_mode: bool = False
    log_retention: int = 5
    poll_interval_ms: int = POLL_INTERVAL_MS
    reassertion_seconds: float = REASSERTION_SECONDS

    def to_payload(self) -> Dict[str, Any]:
        return {
            "notificationPosition": self.anchor.value,
            "debugMode": self.debug_mode,
            "logRetention": self.log_retention,
            "pollIntervalMs": self.poll_interval_ms,
            "reassertionSeconds": self.reassertion_seconds,
        }


def default_settings_path() -> Path:
    env_override = os.getenv(SETTINGS_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser().resolve()
    return Path.home() / "Library" / "Application Support" / "NotificationPlacer" / "settings.json"


_TRUE_TOKENS = {"1", "true", "yes", "on"}
_FALSE_TOKENS = {"0", "false", "no", "off"}


def _parse_flag(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _TRUE_TOKENS:
            return True
        if token in _FALSE_TOKENS:
            return False
    return None


def env_debug_override() -> Optional[bool]:
    return _parse_flag(os.getenv(DEBUG_ENV_VAR))


def _coerce_retention(value: Any, fallback: int) -> int:
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return fallback
    return min(LOG_RETENTION_MAX, max(LOG_RETENTION_MIN, numeric))


def _coerce_poll_interval(value: Any, fallback: int) -> int:
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return fallback
    return max(POLL_INTERVAL_MIN_MS, numeric)


def _coerce_seconds(value: Any, fallback: float) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return fallback
    if numeric != numeric or numeric < 0.0:
        return fallback
    return numeric


def load_settings(settings_path: Path) -> PlacerSettings:
    """Read settings.json; any missing or malformed value falls back to its default."""
    defaults = PlacerSettings()
    data: Dict[str, Any] = {}
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        raw = ""
    if raw:
        try:
            loaded = json.loads(raw)
        except json.JSONDecodeError:
            loaded = {}
        if isinstance(loaded, dict):
            data = loaded

    debug_mode = _parse_flag(data.get("debugMode"))
    if debug_mode is None:
        debug_mode = defaults.debug_mode
    override = env_debug_override()
    if override is not None:
        debug_mode = override

    return PlacerSettings(
        anchor=AnchorSelection.from_value(data.get("notificationPosition"), DEFAULT_ANCHOR),
        debug_mode=debug_mode,
        log_retention=_coerce_retention(data.get("logRetention"), defaults.log_retention),
        poll_interval_ms=_coerce_poll_interval(data.get("pollIntervalMs"), defaults.poll_interval_ms),
        reassertion_seconds=_coerce_seconds(data.get("reassertionSeconds"), defaults.reassertion_seconds),
    )


def save_settings(settings_path: Path, settings: PlacerSettings) -> None:
    """Write settings.json, keeping keys this version does not know about."""
    existing: Dict[str, Any] = {}
    try:
        loaded = json.loads(settings_path.read_text(encoding="utf-8"))
    except (FileNotFoundError, OSError, json.JSONDecodeError):
        loaded = {}
    if isinstance(loaded, dict):
        existing = loaded
    existing.update(settings.to_payload())
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(existing, indent=2, sort_keys=True) + "\n", encoding="utf-8")
