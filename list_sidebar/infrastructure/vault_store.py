# list_sidebar/infrastructure/vault_store.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .filesystem import atomic_write_text


@dataclass(frozen=True)
class VaultFileStore:
    """
    File store over a vault directory.

    Lookups take vault-relative keys and match them literally, the way a
    vault index does: "a\\b.md" is not "a/b.md". Handles are absolute Paths.
    """
    vault_dir: Path

    def ensure(self) -> None:
        self.vault_dir.mkdir(parents=True, exist_ok=True)

    def _inside(self, path: Path) -> bool:
        try:
            path.resolve().relative_to(self.vault_dir.resolve())
        except ValueError:
            return False
        return True

    def find(self, rel_path: str) -> Path | None:
        if not rel_path:
            return None
        path = self.vault_dir / rel_path
        if not self._inside(path) or not path.is_file():
            return None
        return path

    def relative(self, path: Path) -> str:
        """Vault-relative, forward-slash key of a path (absolute or already relative)."""
        path = Path(path)
        if path.is_absolute():
            try:
                path = path.resolve().relative_to(self.vault_dir.resolve())
            except ValueError:
                return path.as_posix()
        return path.as_posix()

    def files(self) -> list[str]:
        """Every file of the vault, skipping hidden entries (.obsidian, temp files)."""
        out: list[str] = []
        for p in self.vault_dir.rglob("*"):
            rel = p.relative_to(self.vault_dir)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if p.is_file():
                out.append(rel.as_posix())
        return sorted(out, key=str.lower)

    def read(self, handle: Path) -> str:
        return Path(handle).read_text(encoding="utf-8")

    def write(self, handle: Path, text: str) -> None:
        atomic_write_text(Path(handle), text, encoding="utf-8")

    def create(self, rel_path: str, text: str) -> Path:
        if not rel_path:
            raise ValueError("create(): empty path")
        path = self.vault_dir / rel_path
        if not self._inside(path):
            raise ValueError(f"create(): path escapes the vault: {rel_path}")
        if path.exists():
            raise FileExistsError(path)
        atomic_write_text(path, text, encoding="utf-8")
        return path
