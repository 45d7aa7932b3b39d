# list_sidebar/core/list_format.py

"""
On-disk format of the list file.

Two dialects are read:

  heading dialect (canonical, always written)::

      ## Groceries <!-- expanded:true -->

      - milk
      - eggs

  front-matter dialect (legacy, read only)::

      ---
      Groceries:
        expanded: true
        - milk
      ---

Both are read by the same single-pass state machine; only the line
classifier differs.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from .models import ListCollection, SidebarList

log = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(r"\A---\n(.*?)\n---\n", re.DOTALL)
FM_LIST_START_RE = re.compile(r"(\w+):")
HEADING_RE = re.compile(r"## (.+?)(\s*<!--.*?-->)?")

ITEM_PREFIX = "- "
EXPANDED_KEY = "expanded:"
EXPANDED_TRUE_TOKEN = "expanded:true"
EXPANDED_MARKER = "<!-- expanded:true -->"
COLLAPSED_MARKER = "<!-- expanded:false -->"


class LineKind(Enum):
    LIST_START = "list_start"
    EXPANDED_FLAG = "expanded_flag"
    ITEM = "item"
    OTHER = "other"


@dataclass(frozen=True)
class Line:
    kind: LineKind
    text: str = ""
    expanded: bool = False


class _State(Enum):
    IDLE = "idle"
    IN_LIST = "in_list"


# ───────────────────────── line classifiers ─────────────────────────

def _item_text(stripped: str) -> str | None:
    if stripped.startswith(ITEM_PREFIX):
        return stripped[len(ITEM_PREFIX):]
    return None


def classify_front_matter_line(line: str) -> Line:
    m = FM_LIST_START_RE.fullmatch(line)
    if m:
        # legacy lists start expanded unless told otherwise
        return Line(LineKind.LIST_START, m.group(1), expanded=True)

    stripped = line.strip()
    content = _item_text(stripped)
    if content is not None:
        return Line(LineKind.ITEM, content)

    if stripped.startswith(EXPANDED_KEY):
        value = stripped[len(EXPANDED_KEY):].strip()
        return Line(LineKind.EXPANDED_FLAG, expanded=value == "true")

    return Line(LineKind.OTHER)


def classify_heading_line(line: str) -> Line:
    m = HEADING_RE.fullmatch(line)
    if m:
        comment = m.group(2) or ""
        return Line(LineKind.LIST_START, m.group(1).strip(), expanded=EXPANDED_TRUE_TOKEN in comment)

    content = _item_text(line.strip())
    if content is not None:
        return Line(LineKind.ITEM, content)

    return Line(LineKind.OTHER)


# ───────────────────────── state machine ─────────────────────────

def _collect(lines: Iterable[str], classify: Callable[[str], Line]) -> ListCollection:
    lists: ListCollection = []
    current: SidebarList | None = None
    state = _State.IDLE

    for lineno, raw in enumerate(lines, start=1):
        line = classify(raw)

        if line.kind is LineKind.LIST_START:
            if current is not None:
                lists.append(current)
                current = None
            if not line.text:
                log.warning("Skipping list with empty name (line %d)", lineno)
                state = _State.IDLE
                continue
            current = SidebarList(name=line.text, expanded=line.expanded)
            state = _State.IN_LIST

        elif state is _State.IN_LIST and current is not None:
            if line.kind is LineKind.ITEM:
                current.add_item(line.text)
            elif line.kind is LineKind.EXPANDED_FLAG:
                current.expanded = line.expanded

        elif line.kind is not LineKind.OTHER:
            log.debug("Ignoring %s outside of a list (line %d)", line.kind.value, lineno)

    if current is not None:
        lists.append(current)
    return lists


# ───────────────────────── public API ─────────────────────────

def split_front_matter(text: str) -> tuple[str | None, str]:
    """Returns (front matter block or None, body)."""
    m = FRONT_MATTER_RE.match(text)
    if not m:
        return None, text
    return m.group(1), text[m.end():]


def parse_front_matter(block: str) -> ListCollection:
    return _collect(block.split("\n"), classify_front_matter_line)


def parse_headings(body: str) -> ListCollection:
    return _collect(body.split("\n"), classify_heading_line)


def parse_lists(text: str | None) -> ListCollection:
    """
    Parse the list file. Never raises: unreadable fragments are skipped,
    empty or unrecognised text gives an empty collection.
    """
    if not text:
        return []

    text = text.replace("\r\n", "\n")
    block, body = split_front_matter(text)

    if block is not None:
        lists = parse_front_matter(block)
        if lists:
            return lists

    return parse_headings(body)


def generate_lists(lists: Iterable[SidebarList]) -> str:
    """Canonical (heading dialect) text for the collection. Empty collection -> ""."""
    parts: list[str] = []
    for index, lst in enumerate(lists):
        if index > 0:
            parts.append("\n")
        marker = EXPANDED_MARKER if lst.expanded else COLLAPSED_MARKER
        parts.append(f"## {lst.name} {marker}\n\n")
        for item in lst.items:
            parts.append(f"- {item.content}\n")
    return "".join(parts)
