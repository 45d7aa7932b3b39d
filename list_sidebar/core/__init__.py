from .models import ListCollection, ListItem, SidebarList
from .paths import normalize_path, resolution_candidates, default_strategies, scan_candidates
from .list_format import parse_lists, generate_lists
from .guard import GuardDecision, GuardLimits, SafetyGuard

__all__ = ["ListCollection",
           "ListItem",
           "SidebarList",
           "normalize_path",
           "resolution_candidates",
           "default_strategies",
           "scan_candidates",
           "parse_lists",
           "generate_lists",
           "GuardDecision",
           "GuardLimits",
           "SafetyGuard"
           ]
