# objectlog/store/__init__.py
"""
Object stores.

Example:
    store = MemoryStore()
    store.create(BaseObject(kind=ObjectKind.TASK, created_by="you"))

    # Persistent variant, same contract:
    store = JsonFileStore("/path/to/store")
"""

from .base import ObjectStore
from .memory import MemoryStore
from .file import JsonFileStore
from .locking import RWLock

__all__ = ["ObjectStore", "MemoryStore", "JsonFileStore", "RWLock"]
