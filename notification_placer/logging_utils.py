from __future__ import annotations

import logging
import os
import tempfile
import time
from collections import deque
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Deque, List, Optional, Tuple

LOGGER_NAME = "NotificationPlacer"
LOG_DIR_NAME = "NotificationPlacer"
LOG_FILENAME = "notification-placer.log"
PROPAGATE_ENV_VAR = "NOTIFICATION_PLACER_PROPAGATE_LOGS"
LOG_DIR_ENV_VAR = "NOTIFICATION_PLACER_LOG_DIR"

_TRUTHY = {"1", "true", "yes", "on"}


def resolve_logs_dir(log_dir_name: str = LOG_DIR_NAME) -> Path:
    """
    Resolve the directory to store placer logs.

    Strategy:
    - Use NOTIFICATION_PLACER_LOG_DIR if set.
    - Prefer `~/Library/Logs/<log_dir_name>` (where Console.app looks on macOS).
    - Fall back to the XDG state location, then `cwd/logs/<log_dir_name>`.
    - Final fallback: tempdir/<log_dir_name>.
    """
    candidates = []

    env_override = os.environ.get(LOG_DIR_ENV_VAR)
    if env_override:
        candidates.append(Path(env_override).expanduser())
    else:
        candidates.append(Path.home() / "Library" / "Logs")
        state_home = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
        candidates.append(state_home)
        candidates.append(Path.cwd() / "logs")

    for base in candidates:
        target = base if env_override else base / log_dir_name
        try:
            target.mkdir(parents=True, exist_ok=True)
            return target
        except OSError:
            continue

    temp_fallback = Path(tempfile.gettempdir()) / log_dir_name
    temp_fallback.mkdir(parents=True, exist_ok=True)
    return temp_fallback


def build_rotating_file_handler(
    log_dir: Path,
    filename: str = LOG_FILENAME,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler with sane defaults."""
    retention = max(1, retention)
    backup_count = max(0, retention - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def resolve_log_level(debug_enabled: bool) -> int:
    return logging.DEBUG if debug_enabled else logging.INFO


def configure_logger(
    *,
    debug_enabled: bool,
    retention: int = 5,
    log_dir: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    """Attach file (and optionally stderr) handlers to the placer logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(debug_enabled))
    logger.propagate = os.environ.get(PROPAGATE_ENV_VAR, "").lower() in _TRUTHY
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    target_dir = log_dir if log_dir is not None else resolve_logs_dir()
    try:
        logger.addHandler(build_rotating_file_handler(target_dir, retention=retention, formatter=formatter))
    except OSError as exc:
        logger.warning("File logging unavailable in %s: %s", target_dir, exc)
    if console:
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        logger.addHandler(stream)
    return logger


class DebugLogSink:
    """``log_fn`` for the engine: keeps ``(timestamp, message)`` pairs when debug is on.

    With debug off every message is dropped.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        *,
        enabled: bool = False,
        max_entries: int = 500,
        time_source: Callable[[], float] = time.time,
    ) -> None:
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self.enabled = enabled
        self._time = time_source
        self._entries: Deque[Tuple[float, str]] = deque(maxlen=max(1, max_entries))

    def __call__(self, message: str) -> None:
        if not self.enabled:
            return
        self._entries.append((self._time(), message))
        self._logger.debug("%s", message)

    @property
    def entries(self) -> List[Tuple[float, str]]:
        return list(self._entries)

    def messages(self) -> List[str]:
        return [message for _, message in self._entries]

    def clear(self) -> None:
        self._entries.clear()
