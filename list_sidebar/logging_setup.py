from __future__ import annotations

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from list_sidebar.settings import LOG_PATH, LOGGER_NAME

SESSION_ID = uuid.uuid4().hex[:8]

LOG_FORMAT = "%(asctime)s [%(session)s] %(levelname)-8s %(name)s: %(message)s"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUPS = 3


class EnsureSessionFilter(logging.Filter):
    """Records logged without the adapter still carry the session id."""
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session"):
            record.session = SESSION_ID
        return True


class SessionAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        kwargs.setdefault("extra", {}).setdefault("session", SESSION_ID)
        return msg, kwargs


def _handlers(log_path: Path, console_level: int) -> list[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT)
    session_filter = EnsureSessionFilter()

    to_file = RotatingFileHandler(
        log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    to_file.setLevel(logging.DEBUG)

    to_console = logging.StreamHandler(sys.stderr)
    to_console.setLevel(console_level)

    for handler in (to_file, to_console):
        handler.setFormatter(formatter)
        handler.addFilter(session_filter)
    return [to_file, to_console]


def setup_logging(
    *,
    console_level: int = logging.INFO,
    log_path: Path | None = None,
) -> SessionAdapter:
    """
    Attach file and console handlers to the package logger, once.

    Modules log through logging.getLogger(__name__) and propagate up to it.
    log_path defaults to the per-user log file.
    """
    logger = logging.getLogger(LOGGER_NAME)
    adapter = SessionAdapter(logger, {})
    if logger.handlers:
        return adapter

    log_path = Path(log_path or LOG_PATH)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in _handlers(log_path, console_level):
        logger.addHandler(handler)

    adapter.info("Logging to %s (session %s)", log_path, SESSION_ID)
    return adapter


def _qt_levels() -> dict:
    from PySide6.QtCore import QtMsgType

    return {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }


def install_global_exception_hooks(log: logging.LoggerAdapter) -> None:
    """Route uncaught exceptions and Qt's own messages into the log."""
    def _excepthook(exc_type, exc, tb):
        log.critical("Uncaught exception", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    try:
        from PySide6.QtCore import qInstallMessageHandler

        levels = _qt_levels()

        def _on_qt_message(mode, context, message):
            file = getattr(context, "file", None)
            line = getattr(context, "line", None)
            origin = f"{file}:{line}" if file else "qt"
            log.log(levels.get(mode, logging.WARNING), "%s (%s)", message, origin)

        qInstallMessageHandler(_on_qt_message)
    except Exception:
        log.exception("Qt message handler not installed")
