from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from PySide6.QtCore import QSettings

from list_sidebar.core.guard import GuardLimits
from list_sidebar.settings import APP_NAME, DEFAULT_FILE_PATH

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingsKeys:
    FILE_PATH: str = "data/file_path"
    MULTI_LIST_THRESHOLD: str = "guard/multi_list_threshold"
    MIN_CONTENT_LENGTH: str = "guard/min_content_length"
    MIN_CONTENT_LIST_COUNT: str = "guard/min_content_list_count"


@dataclass(frozen=True)
class ListSidebarConfig:
    file_path: str = DEFAULT_FILE_PATH
    limits: GuardLimits = field(default_factory=GuardLimits)

    def with_file_path(self, file_path: str) -> "ListSidebarConfig":
        return replace(self, file_path=file_path)


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def get_int(settings: QSettings, key: str, default: int) -> int:
    try:
        return int(settings.value(key, default))
    except (TypeError, ValueError):
        return default


def coerce_file_path(value: str | None) -> str:
    """
    Stored path as written; blank falls back to the default.
    Normalization needs the vault root and is left to the service.
    """
    value = (value or "").strip()
    return value or DEFAULT_FILE_PATH


class SettingsStore:
    def load(self) -> ListSidebarConfig:
        raise NotImplementedError

    def save(self, config: ListSidebarConfig) -> None:
        raise NotImplementedError


class MemorySettingsStore(SettingsStore):
    def __init__(self, config: ListSidebarConfig | None = None):
        self.config = config or ListSidebarConfig()
        self.saves = 0

    def load(self) -> ListSidebarConfig:
        return self.config

    def save(self, config: ListSidebarConfig) -> None:
        self.config = config
        self.saves += 1


class QSettingsStore(SettingsStore):
    """
    QSettings-backed store.
    With no ini_path QSettings picks the native per-user location.
    """

    def __init__(self, ini_path: Path | None = None):
        if ini_path is not None:
            self._settings = QSettings(str(ini_path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(APP_NAME, APP_NAME)

    def load(self) -> ListSidebarConfig:
        defaults = GuardLimits()
        limits = GuardLimits(
            multi_list_threshold=get_int(
                self._settings, SettingsKeys.MULTI_LIST_THRESHOLD, defaults.multi_list_threshold
            ),
            min_content_length=get_int(
                self._settings, SettingsKeys.MIN_CONTENT_LENGTH, defaults.min_content_length
            ),
            min_content_list_count=get_int(
                self._settings, SettingsKeys.MIN_CONTENT_LIST_COUNT, defaults.min_content_list_count
            ),
        )
        raw_path = get_str(self._settings, SettingsKeys.FILE_PATH, DEFAULT_FILE_PATH)
        return ListSidebarConfig(file_path=coerce_file_path(raw_path), limits=limits)

    def save(self, config: ListSidebarConfig) -> None:
        s = self._settings
        s.setValue(SettingsKeys.FILE_PATH, config.file_path)
        s.setValue(SettingsKeys.MULTI_LIST_THRESHOLD, config.limits.multi_list_threshold)
        s.setValue(SettingsKeys.MIN_CONTENT_LENGTH, config.limits.min_content_length)
        s.setValue(SettingsKeys.MIN_CONTENT_LIST_COUNT, config.limits.min_content_list_count)
        s.sync()
        log.debug("Settings saved: file_path=%s", config.file_path)
