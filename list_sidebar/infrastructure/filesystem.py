# list_sidebar/infrastructure/filesystem.py

from __future__ import annotations

import os
import uuid
from datetime import datetime
from pathlib import Path

from list_sidebar.settings import RECOVERY_DIR


# ───────────────────────── public API ─────────────────────────

def atomic_write_text(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """
    Atomic-ish file write:
    - write to temp file in same directory
    - fsync
    - replace()

    Prevents partial writes on crash/power loss.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass


def write_recovery_copy(data_path: Path, text: str, *, recovery_dir: Path | None = None) -> Path:
    """
    Best-effort emergency save when the normal save fails.

    Writes a timestamped copy into ~/.list-sidebar/recovery/ (or recovery_dir).
    """
    data_path = Path(data_path)
    target_dir = Path(recovery_dir) if recovery_dir is not None else RECOVERY_DIR

    stem = data_path.stem or "list-sidebar-data"
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")

    recovery_path = target_dir / f"{stem}.recovery.{ts}.md"
    atomic_write_text(recovery_path, text, encoding="utf-8")
    return recovery_path
