from __future__ import annotations
from pathlib import Path

APP_NAME = "list-sidebar"
LOGGER_NAME = "list_sidebar"
LOG_DIR = Path.home() / f".{APP_NAME}" / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
RECOVERY_DIR = Path.home() / f".{APP_NAME}" / "recovery"

DEFAULT_FILE_PATH = "list-sidebar-data.md"
DEFAULT_BASE_NAME = "list-sidebar-data"
