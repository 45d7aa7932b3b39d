# list_sidebar/services/persistence.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

from list_sidebar.config import ListSidebarConfig, SettingsStore
from list_sidebar.core.guard import GuardDecision, SafetyGuard
from list_sidebar.core.list_format import parse_lists
from list_sidebar.core.models import ListCollection, SidebarList
from list_sidebar.core.paths import (
    default_strategies,
    normalize_path,
    resolution_candidates,
    scan_candidates,
)
from list_sidebar.infrastructure.filesystem import write_recovery_copy
from list_sidebar.infrastructure.vault_store import VaultFileStore
from list_sidebar.settings import DEFAULT_BASE_NAME, DEFAULT_FILE_PATH

log = logging.getLogger(__name__)


class ListPersistenceService:
    """
    Loads and saves the list collection of one vault.

    Responsibilities:
    - resolve the configured path to a file (with fallbacks)
    - load: read + parse, never raising
    - save: guard -> generate -> write, never raising
    - keep the configuration in step when a fallback finds the real file
    """

    def __init__(
        self,
        *,
        store: VaultFileStore,
        settings_store: SettingsStore,
        config: ListSidebarConfig | None = None,
        guard: SafetyGuard | None = None,
        on_notice: Callable[[str], None] | None = None,
        recovery_dir: Path | None = None,
    ):
        self.store = store
        self._settings_store = settings_store
        self.on_notice = on_notice
        self._recovery_dir = recovery_dir
        self._vault_root = str(store.vault_dir)
        # text of the file as last loaded or written by this service
        self.synced_text: str | None = None

        if config is None:
            # stored paths only become vault-relative once the vault root is known
            self.config = settings_store.load()
            self._update_file_path(self.normalized_path() or DEFAULT_FILE_PATH)
        else:
            self.config = config
        self.guard = guard or SafetyGuard(limits=self.config.limits)

    # ───────────────────────── configuration ─────────────────────────

    @property
    def file_path(self) -> str:
        return self.config.file_path

    def normalized_path(self, path: str | None = None) -> str:
        return normalize_path(self.file_path if path is None else path, vault_root=self._vault_root)

    def set_file_path(self, value: str) -> str:
        """User-entered path: normalize, persist, return the stored value."""
        normalized = self.normalized_path(value)
        self._update_file_path(normalized)
        return normalized

    def is_configured_path(self, path: str) -> bool:
        """True when path (absolute or vault-relative) names the configured file."""
        if not path:
            return False
        candidate = path
        if Path(path).is_absolute():
            candidate = self.store.relative(Path(path))
        return self.normalized_path(candidate) == self.normalized_path()

    def _update_file_path(self, new_path: str) -> None:
        if new_path == self.config.file_path:
            return
        log.info("file_path: %s -> %s", self.config.file_path, new_path)
        self.config = self.config.with_file_path(new_path)
        self._settings_store.save(self.config)

    def _notice(self, message: str) -> None:
        log.info("Notice: %s", message)
        if self.on_notice is not None:
            self.on_notice(message)

    # ───────────────────────── resolution ─────────────────────────

    def current_file(self) -> Path | None:
        """Strategy lookups only, without touching the configuration."""
        strategies = default_strategies(vault_root=self._vault_root)
        for candidate in resolution_candidates(self.file_path, strategies):
            handle = self.store.find(candidate.path)
            if handle is not None:
                return handle
        return None

    def resolve(self, *, allow_scan: bool = False) -> Path | None:
        configured = self.file_path
        strategies = default_strategies(vault_root=self._vault_root)

        for candidate in resolution_candidates(configured, strategies):
            handle = self.store.find(candidate.path)
            if handle is None:
                continue
            if candidate.adopt:
                log.info("Resolved %r via %s strategy", configured, candidate.strategy)
                self._update_file_path(self.store.relative(handle))
            return handle

        if not allow_scan:
            return None

        log.warning("No file at %r, scanning the vault for a data file", configured)
        for rel in scan_candidates(self.store.files(), self.normalized_path(), DEFAULT_BASE_NAME):
            handle = self.store.find(rel)
            if handle is None or not self._holds_lists(rel, handle):
                continue
            self._update_file_path(rel)
            self._notice(f'Loaded list data from "{rel}"')
            return handle
        return None

    def _holds_lists(self, rel: str, handle: Path) -> bool:
        """Scanned files are adopted only if named like a data file or already holding lists."""
        if DEFAULT_BASE_NAME in rel:
            return True
        try:
            return bool(parse_lists(self.store.read(handle)))
        except (OSError, UnicodeDecodeError):
            log.warning("Skipping unreadable scan candidate %s", rel)
            return False

    # ───────────────────────── public API ─────────────────────────

    def load_lists(self) -> ListCollection:
        try:
            handle = self.resolve(allow_scan=True)
            if handle is None:
                log.info("load_lists: no file for %r, starting empty", self.file_path)
                self.synced_text = None
                return []

            text = self.store.read(handle)
            self.synced_text = text
            lists = parse_lists(text)
            log.info("load_lists: %s -> %d list(s)", handle, len(lists))
            return lists
        except Exception:
            log.exception("load_lists failed (file_path=%s)", self.file_path)
            return []

    def save_lists(self, lists: Sequence[SidebarList]) -> tuple[bool, str | None]:
        """
        Returns (ok, error_message).
        A refused or failed save never raises and never writes partial data.
        """
        content: str | None = None
        target: Path | None = None
        try:
            existing = self.current_file()
            existing_text = self.store.read(existing) if existing is not None else None

            decision: GuardDecision = self.guard.check(lists, existing_text, self.file_path)
            if not decision.allow:
                self._notice(f"Save refused: {decision.reason}")
                return False, decision.reason

            content = decision.content or ""
            target = self.resolve(allow_scan=False)
            if target is not None:
                self.store.write(target, content)
                log.info("save_lists: updated %s (lists=%d)", target, len(lists))
            else:
                rel = self.normalized_path()
                if not rel:
                    return False, "no data file configured"
                target = self.store.create(rel, content)
                log.info("save_lists: created %s (lists=%d)", target, len(lists))

            self.synced_text = content
            return True, None

        except Exception as e:
            log.exception("save_lists failed (file_path=%s)", self.file_path)

            if content is not None:
                try:
                    rec_path = write_recovery_copy(
                        target or Path(self.normalized_path() or self.file_path),
                        content,
                        recovery_dir=self._recovery_dir,
                    )
                    log.critical("Recovery copy written: %s", rec_path)
                except Exception:
                    log.exception("Failed to write recovery copy")

            message = f"Failed to save list data: {e}"
            self._notice(message)
            return False, message
