from .filesystem import atomic_write_text, write_recovery_copy
from .vault_store import VaultFileStore

__all__ = [
    "atomic_write_text",
    "write_recovery_copy",
    "VaultFileStore",
]
