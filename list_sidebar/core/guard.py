# list_sidebar/core/guard.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from list_sidebar.settings import DEFAULT_FILE_PATH

from .list_format import generate_lists, parse_lists
from .models import SidebarList

log = logging.getLogger(__name__)

DENY_DEFAULT_OVERWRITE = "would overwrite non-empty default file with empty data"
DENY_MULTI_LIST_ERASE = "data-loss risk: multi-list file would be erased"
DENY_SHORT_CONTENT = "generated content implausibly short for list count"


@dataclass(frozen=True)
class GuardLimits:
    multi_list_threshold: int = 3
    min_content_length: int = 30
    min_content_list_count: int = 2


@dataclass(frozen=True)
class GuardDecision:
    allow: bool
    reason: str | None = None
    content: str | None = None


class SafetyGuard:
    """
    Vetoes saves that look like accidental erasure.

    Rules (first match wins):
      1. empty save over a non-empty file at the default path
      2. empty save over a file holding more than multi_list_threshold lists
      3. generated text shorter than min_content_length for more than
         min_content_list_count lists
    Thresholds are trip-wires, not proofs.
    """

    def __init__(
        self,
        *,
        limits: GuardLimits | None = None,
        default_path: str = DEFAULT_FILE_PATH,
        generate: Callable[[Sequence[SidebarList]], str] = generate_lists,
    ):
        self.limits = limits or GuardLimits()
        self.default_path = default_path
        self._generate = generate

    def check(
        self,
        proposed: Sequence[SidebarList],
        existing_text: str | None,
        configured_path: str,
    ) -> GuardDecision:
        if not proposed and existing_text is not None:
            existing = parse_lists(existing_text)

            if configured_path == self.default_path and existing:
                log.error("Save refused: empty data over default file (existing lists=%d)", len(existing))
                return GuardDecision(False, DENY_DEFAULT_OVERWRITE)

            if len(existing) > self.limits.multi_list_threshold:
                log.error("Save refused: empty data over multi-list file (existing lists=%d)", len(existing))
                return GuardDecision(False, DENY_MULTI_LIST_ERASE)

        content = self._generate(proposed)
        if (
            len(content) < self.limits.min_content_length
            and len(proposed) > self.limits.min_content_list_count
        ):
            log.error(
                "Save refused: content too short (lists=%d, chars=%d)",
                len(proposed), len(content),
            )
            return GuardDecision(False, DENY_SHORT_CONTENT)

        return GuardDecision(True, content=content)
