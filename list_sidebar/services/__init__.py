from .persistence import ListPersistenceService
from .sync import ListSyncController

__all__ = [
    "ListPersistenceService",
    "ListSyncController",
]
