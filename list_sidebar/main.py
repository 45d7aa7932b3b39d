"""Headless entry point: load, dump, or watch a vault's list file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication

from list_sidebar.config import QSettingsStore
from list_sidebar.core.list_format import generate_lists
from list_sidebar.infrastructure.vault_store import VaultFileStore
from list_sidebar.logging_setup import SESSION_ID, install_global_exception_hooks, setup_logging
from list_sidebar.services.persistence import ListPersistenceService
from list_sidebar.services.sync import ListSyncController


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Named lists persisted in a vault Markdown file")
    p.add_argument(
        "--vault",
        type=Path,
        default=Path.cwd(),
        help="Path to the vault folder",
    )
    p.add_argument("--file", default=None, help="Data file path (relative to the vault root)")
    p.add_argument("--settings", type=Path, default=None, help="Explicit settings .ini file")
    p.add_argument("--dump", action="store_true", help="Print the canonical text of the loaded lists")
    p.add_argument("--watch", action="store_true", help="Reload on external edits until interrupted")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    log = setup_logging()
    install_global_exception_hooks(log)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])

    store = VaultFileStore(args.vault)
    store.ensure()

    service = ListPersistenceService(
        store=store,
        settings_store=QSettingsStore(args.settings),
        on_notice=lambda msg: print(msg, file=sys.stderr),
    )
    if args.file:
        service.set_file_path(args.file)

    controller = ListSyncController(service=service)
    controller.lists_reloaded.connect(
        lambda lists: log.info("Lists loaded: %d (%s)", len(lists), service.file_path)
    )
    lists = controller.start()
    log.info("list-sidebar started, SID=%s", SESSION_ID)

    if args.dump:
        sys.stdout.write(generate_lists(lists))

    if args.watch:
        return app.exec()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
