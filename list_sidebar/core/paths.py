# list_sidebar/core/paths.py

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable


WINDOWS_ABS_RE = re.compile(r"^[a-zA-Z]:[/\\]")
DRIVE_PREFIX_RE = re.compile(r"^[a-zA-Z]:[/\\]?")
EDGE_SLASHES_RE = re.compile(r"^/+|/+$")
SLASH_RUN_RE = re.compile(r"/+")


# ───────────────────────── normalization ─────────────────────────

def to_forward_slashes(path: str) -> str:
    return path.replace("\\", "/")


def is_windows_absolute(path: str) -> bool:
    """C:\\path\\file.md or C:/path/file.md"""
    return bool(WINDOWS_ABS_RE.match(path or ""))


def _vault_marker(vault_root: str | None) -> str:
    """
    The vault root as it appears inside a drive-stripped path:
    forward slashes, no drive, no edge slashes.
    """
    if not vault_root:
        return ""
    marker = DRIVE_PREFIX_RE.sub("", to_forward_slashes(vault_root))
    return EDGE_SLASHES_RE.sub("", marker)


def windows_path_to_relative(windows_path: str, *, vault_root: str | None = None) -> str:
    """
    Best-effort conversion of an absolute Windows path to a vault-relative one.

        C:/Users/me/vault/data.md -> Users/me/vault/data.md
        (with vault_root ".../me/vault") -> data.md
    """
    path = DRIVE_PREFIX_RE.sub("", to_forward_slashes(windows_path))

    marker = _vault_marker(vault_root)
    if marker:
        index = path.find(marker)
        if index >= 0:
            path = path[index + len(marker):].lstrip("/")

    return path


def normalize_path(path: str, *, vault_root: str | None = None) -> str:
    """
    Canonical vault-relative form of a user-supplied path.

    - backslashes become forward slashes
    - absolute Windows paths lose their drive (and the vault prefix, when found)
    - otherwise: no leading/trailing slashes, no repeated slashes

    Never raises; empty input comes back unchanged.
    """
    if not path:
        return path

    if is_windows_absolute(path):
        return windows_path_to_relative(path, vault_root=vault_root)

    out = to_forward_slashes(path)
    out = EDGE_SLASHES_RE.sub("", out)
    return SLASH_RUN_RE.sub("/", out)


# ───────────────────────── resolution strategies ─────────────────────────

@dataclass(frozen=True)
class ResolutionStrategy:
    """
    One way of turning the configured path into a lookup candidate.

    adopt=True: when the candidate hits, the found file's path replaces the
    configured one (the configuration was stale or un-normalized).
    """
    name: str
    candidate: Callable[[str], str | None]
    adopt: bool = False


@dataclass(frozen=True)
class Candidate:
    strategy: str
    path: str
    adopt: bool


def _backslash_variant(path: str) -> str | None:
    if "\\" not in path:
        return None
    return to_forward_slashes(path)


def default_strategies(*, vault_root: str | None = None) -> tuple[ResolutionStrategy, ...]:
    return (
        ResolutionStrategy("normalized", lambda p: normalize_path(p, vault_root=vault_root)),
        ResolutionStrategy("raw", lambda p: p, adopt=True),
        ResolutionStrategy("forward-slashes", _backslash_variant, adopt=True),
    )


def resolution_candidates(
    configured_path: str,
    strategies: Iterable[ResolutionStrategy],
) -> list[Candidate]:
    """Ordered, de-duplicated lookup candidates; empty candidates are dropped."""
    out: list[Candidate] = []
    seen: set[str] = set()
    for strategy in strategies:
        path = strategy.candidate(configured_path or "")
        if not path or path in seen:
            continue
        seen.add(path)
        out.append(Candidate(strategy=strategy.name, path=path, adopt=strategy.adopt))
    return out


def scan_candidates(files: Iterable[str], normalized_path: str, base_name: str) -> list[str]:
    """
    Last-resort lookup over every file in the vault.

    Only used when the configured file lives at the vault root. Root-level
    files whose name contains base_name come first, then other root-level
    Markdown files.
    """
    if "/" in (normalized_path or ""):
        return []

    root_files = [
        f for f in files
        if "/" not in f and (base_name in f or f.endswith(".md"))
    ]
    named = [f for f in root_files if base_name in f]
    others = [f for f in root_files if base_name not in f]
    return named + others
