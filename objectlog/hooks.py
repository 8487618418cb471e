# objectlog/hooks.py
"""
Activity generation hooks.

Domain code mutates an object through its ObjectStore first and then calls
the matching hook. The hook writes exactly one ActivityObject through the
same store (none for an update that changed nothing).

The two writes are independent: a hook never undoes the domain mutation,
and if the activity write fails the error simply propagates. The activity
stream is a best-effort trail, not a ledger of object state.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .activity import ActivityObject, ActivityVerb, calculate_changes, new_activity_object
from .objects import BaseObject
from .store import ObjectStore

logger = logging.getLogger(__name__)


class ActivityHooks(ABC):
    """Lifecycle callbacks invoked after a domain mutation."""

    @abstractmethod
    def on_create(self, obj: BaseObject) -> Optional[ActivityObject]:
        ...

    @abstractmethod
    def on_update(self, old_obj: BaseObject, new_obj: BaseObject) -> Optional[ActivityObject]:
        ...

    @abstractmethod
    def on_delete(self, obj: BaseObject) -> Optional[ActivityObject]:
        ...


class ActivityGenerator(ActivityHooks):
    """
    Writes audit activities into an ObjectStore.

    The acting identity is always the object's created_by; there is no
    separate "who made this edit" argument.
    """

    def __init__(self, store: ObjectStore):
        self.store = store

    def _record(self, activity: ActivityObject) -> ActivityObject:
        self.store.create(activity)
        fields = activity.get_fields()
        logger.debug(
            f"Activity {activity.id}: {fields.actor_id} {fields.verb} "
            f"{fields.object_kind} {fields.object_id}"
        )
        return activity

    def on_create(self, obj: BaseObject) -> ActivityObject:
        """Record that obj was created."""
        activity = new_activity_object(
            obj.created_by, ActivityVerb.CREATED, obj.id, obj.kind,
        )
        return self._record(activity)

    def on_update(self, old_obj: BaseObject, new_obj: BaseObject) -> Optional[ActivityObject]:
        """
        Record an update if anything changed.

        Returns:
            The stored activity, or None when old and new are identical
        """
        changes = calculate_changes(old_obj, new_obj)
        if not changes:
            logger.debug(f"No changes to {new_obj.id}, skipping activity")
            return None

        activity = new_activity_object(
            new_obj.created_by,
            ActivityVerb.UPDATED,
            new_obj.id,
            new_obj.kind,
            {"changes": changes},
        )
        return self._record(activity)

    def on_delete(self, obj: BaseObject) -> ActivityObject:
        """Record that obj was deleted."""
        activity = new_activity_object(
            obj.created_by, ActivityVerb.DELETED, obj.id, obj.kind,
        )
        return self._record(activity)
