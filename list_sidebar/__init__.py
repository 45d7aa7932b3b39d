from .core.models import ListCollection, ListItem, SidebarList
from .core.paths import normalize_path
from .core.list_format import parse_lists, generate_lists
from .core.guard import GuardDecision, GuardLimits, SafetyGuard
from .config import ListSidebarConfig, MemorySettingsStore, QSettingsStore, SettingsStore
from .infrastructure.vault_store import VaultFileStore
from .services.persistence import ListPersistenceService
from .services.sync import ListSyncController

__all__ = ['ListCollection',
           'ListItem',
           'SidebarList',
           'normalize_path',
           'parse_lists',
           'generate_lists',
           'GuardDecision',
           'GuardLimits',
           'SafetyGuard',
           'ListSidebarConfig',
           'MemorySettingsStore',
           'QSettingsStore',
           'SettingsStore',
           'VaultFileStore',
           'ListPersistenceService',
           'ListSyncController'
           ]
