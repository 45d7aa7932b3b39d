# list_sidebar/services/sync.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from PySide6.QtCore import QFileSystemWatcher, QObject, Signal, Slot

from list_sidebar.core.models import SidebarList

from .persistence import ListPersistenceService

log = logging.getLogger(__name__)


class ListSyncController(QObject):
    """
    Keeps the in-memory lists and the data file in step.

    - app edits go through save()
    - external edits arrive from QFileSystemWatcher and trigger a reload
    - a change that leaves the file at the last loaded or written text is not reloaded
    """

    lists_reloaded = Signal(object)
    save_failed = Signal(str)
    notice = Signal(str)

    def __init__(self, *, service: ListPersistenceService, parent: QObject | None = None):
        super().__init__(parent)
        self._service = service
        self._watcher = QFileSystemWatcher(self)
        self._watcher.fileChanged.connect(self._on_file_changed)

        self._forward_to = service.on_notice
        service.on_notice = self._forward_notice

    @property
    def service(self) -> ListPersistenceService:
        return self._service

    # ───────────────────────── public API ─────────────────────────

    def start(self) -> list[SidebarList]:
        lists = self._service.load_lists()
        self._rewatch()
        self.lists_reloaded.emit(lists)
        return lists

    def save(self, lists: Sequence[SidebarList]) -> tuple[bool, str | None]:
        ok, err = self._service.save_lists(lists)
        # atomic replace drops the inotify watch on the old inode
        self._rewatch()
        if not ok:
            self.save_failed.emit(err or "")
        return ok, err

    def on_external_change(self, path: str) -> bool:
        """
        Change feed hook. Returns True if the lists were reloaded.
        """
        if not self._service.is_configured_path(path):
            return False

        handle = self._service.current_file()
        if handle is not None and self._service.synced_text is not None:
            try:
                if self._service.store.read(handle) == self._service.synced_text:
                    log.debug("Change on %s matches the synced text, not reloading", path)
                    self._rewatch()
                    return False
            except OSError:
                log.exception("Failed to read %s after change notification", handle)

        log.info("External change on %s, reloading", path)
        lists = self._service.load_lists()
        self._rewatch()
        self.lists_reloaded.emit(lists)
        return True

    def set_file_path(self, value: str) -> list[SidebarList]:
        self._service.set_file_path(value)
        return self.start()

    def watched_files(self) -> list[str]:
        return list(self._watcher.files())

    # ───────────────────────── internal ─────────────────────────

    def _rewatch(self) -> None:
        current = self._watcher.files()
        if current:
            self._watcher.removePaths(current)

        handle = self._service.current_file()
        if handle is not None:
            if not self._watcher.addPath(str(handle)):
                log.warning("Could not watch %s", handle)

    def _forward_notice(self, message: str) -> None:
        self.notice.emit(message)
        if self._forward_to is not None:
            self._forward_to(message)

    @Slot(str)
    def _on_file_changed(self, path: str) -> None:
        self.on_external_change(str(Path(path)))
