# objectlog/store/base.py
"""
Storage contract for BaseObjects.

Implementations must isolate values: whatever crosses the store boundary,
in either direction, is copied. Mutating an object after create()/update(),
or mutating what get()/query() returned, never changes what the store
returns later.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..objects import BaseObject, ObjectKind


class ObjectStore(ABC):
    """Create/read/update/delete/query over BaseObjects."""

    @abstractmethod
    def create(self, obj: BaseObject) -> None:
        """Store a new object. Raises AlreadyExistsError on a duplicate id."""

    @abstractmethod
    def get(self, object_id: str) -> BaseObject:
        """Return the object with this id. Raises NotFoundError."""

    @abstractmethod
    def update(self, obj: BaseObject) -> None:
        """Replace the stored object with obj. Raises NotFoundError."""

    @abstractmethod
    def delete(self, object_id: str) -> None:
        """Remove the object with this id. Raises NotFoundError."""

    @abstractmethod
    def query(
        self,
        kind: ObjectKind | str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[BaseObject]:
        """
        Return every object of the given kind, in insertion order.

        Args:
            kind: Object kind to match
            filters: Reserved for predicate push-down; implementations may
                ignore it and leave filtering to the caller
        """
