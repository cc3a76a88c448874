from __future__ import annotations

import logging

from notification_placer.logging_utils import (
    LOG_DIR_ENV_VAR,
    LOG_FILENAME,
    LOGGER_NAME,
    PROPAGATE_ENV_VAR,
    DebugLogSink,
    build_rotating_file_handler,
    configure_logger,
    resolve_log_level,
    resolve_logs_dir,
)


def test_debug_sink_records_timestamped_messages_when_enabled():
    ticks = iter([1.0, 2.0])
    sink = DebugLogSink(enabled=True, time_source=lambda: next(ticks))

    sink("first")
    sink("second")

    assert sink.entries == [(1.0, "first"), (2.0, "second")]
    assert sink.messages() == ["first", "second"]


def test_debug_sink_drops_messages_when_disabled():
    sink = DebugLogSink(enabled=False)

    sink("ignored")

    assert sink.entries == []


def test_debug_sink_is_bounded():
    sink = DebugLogSink(enabled=True, max_entries=2)
    for index in range(5):
        sink(str(index))

    assert sink.messages() == ["3", "4"]
    sink.clear()
    assert sink.entries == []


def test_resolve_log_level():
    assert resolve_log_level(True) == logging.DEBUG
    assert resolve_log_level(False) == logging.INFO


def test_resolve_logs_dir_prefers_env_override(tmp_path, monkeypatch):
    target = tmp_path / "logs-here"
    monkeypatch.setenv(LOG_DIR_ENV_VAR, str(target))

    assert resolve_logs_dir() == target
    assert target.is_dir()


def test_rotating_handler_keeps_retention_minus_one_backups(tmp_path):
    handler = build_rotating_file_handler(tmp_path, retention=3)
    try:
        assert handler.backupCount == 2
        assert handler.baseFilename.endswith(LOG_FILENAME)
    finally:
        handler.close()


def test_configure_logger_sets_level_and_propagation(tmp_path, monkeypatch):
    monkeypatch.delenv(PROPAGATE_ENV_VAR, raising=False)
    logger = configure_logger(debug_enabled=True, log_dir=tmp_path, console=False)
    try:
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_configure_logger_propagates_when_requested(tmp_path, monkeypatch):
    monkeypatch.setenv(PROPAGATE_ENV_VAR, "yes")
    logger = configure_logger(debug_enabled=False, log_dir=tmp_path, console=False)
    try:
        assert logger.propagate is True
        assert logger.level == logging.INFO
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = False
