import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from list_sidebar.core.guard import (
    DENY_DEFAULT_OVERWRITE,
    DENY_MULTI_LIST_ERASE,
    DENY_SHORT_CONTENT,
    GuardLimits,
    SafetyGuard,
)
from list_sidebar.core.list_format import generate_lists
from list_sidebar.core.models import ListItem, SidebarList
from list_sidebar.settings import DEFAULT_FILE_PATH


def _lists(*names):
    return [SidebarList(n, True, [ListItem(f"{n} item")]) for n in names]


def test_empty_over_default_file_denied():
    existing = generate_lists(_lists("A", "B"))
    decision = SafetyGuard().check([], existing, DEFAULT_FILE_PATH)
    assert not decision.allow
    assert decision.reason == DENY_DEFAULT_OVERWRITE


def test_default_file_rule_checked_first():
    existing = generate_lists(_lists("A", "B", "C", "D"))
    decision = SafetyGuard().check([], existing, DEFAULT_FILE_PATH)
    assert decision.reason == DENY_DEFAULT_OVERWRITE


def test_empty_over_multi_list_file_denied():
    existing = generate_lists(_lists("A", "B", "C", "D"))
    decision = SafetyGuard().check([], existing, "lists/mine.md")
    assert not decision.allow
    assert decision.reason == DENY_MULTI_LIST_ERASE


def test_empty_over_small_file_allowed():
    existing = generate_lists(_lists("A"))
    decision = SafetyGuard().check([], existing, "lists/mine.md")
    assert decision.allow
    assert decision.content == ""


def test_threshold_is_strict():
    existing = generate_lists(_lists("A", "B", "C"))
    assert SafetyGuard().check([], existing, "mine.md").allow


def test_empty_over_empty_default_file_allowed():
    assert SafetyGuard().check([], "", DEFAULT_FILE_PATH).allow
    assert SafetyGuard().check([], "just prose\n", DEFAULT_FILE_PATH).allow


def test_no_existing_file_allowed():
    assert SafetyGuard().check([], None, DEFAULT_FILE_PATH).allow


def test_non_empty_save_carries_content():
    proposed = _lists("A", "B", "C")
    decision = SafetyGuard().check(proposed, generate_lists(_lists("X") * 5), DEFAULT_FILE_PATH)
    assert decision.allow
    assert decision.content == generate_lists(proposed)


def test_short_content_denied():
    guard = SafetyGuard(generate=lambda lists: "x")
    decision = guard.check(_lists("A", "B", "C"), None, "mine.md")
    assert not decision.allow
    assert decision.reason == DENY_SHORT_CONTENT

    assert guard.check(_lists("A", "B"), None, "mine.md").allow


def test_configurable_limits():
    guard = SafetyGuard(limits=GuardLimits(multi_list_threshold=1))
    existing = generate_lists(_lists("A", "B"))
    assert guard.check([], existing, "mine.md").reason == DENY_MULTI_LIST_ERASE
