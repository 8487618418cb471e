# objectlog/store/memory.py
"""
In-process object store.

Objects live in a dict keyed by id. Reads share the lock, writes take it
exclusively, and every value is deep-copied on the way in and out, so one
MemoryStore can be shared freely between threads.
"""

import logging
from typing import Any, Dict, List, Optional

from ..errors import AlreadyExistsError, NotFoundError
from ..objects import BaseObject, ObjectKind
from .base import ObjectStore
from .locking import RWLock

logger = logging.getLogger(__name__)


class MemoryStore(ObjectStore):
    """Thread-safe, non-persistent ObjectStore."""

    def __init__(self):
        self._lock = RWLock()
        self._objects: Dict[str, BaseObject] = {}

    def create(self, obj: BaseObject) -> None:
        with self._lock.write():
            if obj.id in self._objects:
                raise AlreadyExistsError(obj.id)
            self._objects[obj.id] = obj.copy()
            self._changed()
        logger.debug(f"Created {obj.kind} {obj.id}")

    def get(self, object_id: str) -> BaseObject:
        with self._lock.read():
            obj = self._objects.get(object_id)
            if obj is None:
                raise NotFoundError(object_id)
            return obj.copy()

    def update(self, obj: BaseObject) -> None:
        with self._lock.write():
            if obj.id not in self._objects:
                raise NotFoundError(obj.id)
            self._objects[obj.id] = obj.copy()
            self._changed()
        logger.debug(f"Updated {obj.kind} {obj.id}")

    def delete(self, object_id: str) -> None:
        with self._lock.write():
            if object_id not in self._objects:
                raise NotFoundError(object_id)
            del self._objects[object_id]
            self._changed()
        logger.debug(f"Deleted {object_id}")

    def query(
        self,
        kind: ObjectKind | str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[BaseObject]:
        # filters are not applied; callers filter the result themselves
        with self._lock.read():
            return [obj.copy() for obj in self._objects.values() if obj.kind == kind]

    def clear(self) -> None:
        """Remove every object."""
        with self._lock.write():
            self._objects = {}
            self._changed()

    def count(self) -> int:
        with self._lock.read():
            return len(self._objects)

    def _changed(self) -> None:
        """Called with the write lock held after every successful mutation."""

    def __contains__(self, object_id: str) -> bool:
        with self._lock.read():
            return object_id in self._objects

    def __len__(self) -> int:
        return self.count()
