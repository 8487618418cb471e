# objectlog/activity.py
"""
Audit-trail events.

An ActivityObject records one lifecycle event (created, updated, ...) of
some other object. It is an ordinary BaseObject of kind `activity` whose
fields hold:

    {"actorId": ..., "verb": ..., "objectId": ..., "objectKind": ..., "metadata": {...}}

Activities are write-once: nothing in this package updates or deletes them.
For `updated` events metadata["changes"] holds the field-level diff produced
by calculate_changes().
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .errors import DecodeError
from .objects import ACLEntry, BaseObject, ObjectKind, utcnow


class ActivityVerb(str, Enum):
    """What happened to the object."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    VIEWED = "viewed"
    SHARED = "shared"

    def __str__(self) -> str:
        return self.value


@dataclass
class ActivityFields:
    """Typed view of an activity's fields."""
    actor_id: str
    verb: ActivityVerb
    object_id: str
    object_kind: ObjectKind | str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actorId": self.actor_id,
            "verb": self.verb.value,
            "objectId": self.object_id,
            "objectKind": str(self.object_kind),
            "metadata": copy.deepcopy(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ActivityFields":
        """
        Decode activity fields.

        Raises:
            DecodeError: data is not a mapping, the verb is unknown, or a
                field has the wrong type
        """
        if not isinstance(data, dict):
            raise DecodeError(f"activity fields must be a mapping, got {type(data).__name__}")

        for key in ("actorId", "objectId", "objectKind"):
            if not isinstance(data.get(key, ""), str):
                raise DecodeError(f"activity field {key!r} must be a string")

        try:
            verb = ActivityVerb(data.get("verb"))
        except ValueError as e:
            raise DecodeError(f"unknown activity verb: {data.get('verb')!r}") from e

        metadata = data.get("metadata")
        if metadata is None:
            metadata = {}
        elif not isinstance(metadata, dict):
            raise DecodeError("activity metadata must be a mapping")

        return cls(
            actor_id=data.get("actorId", ""),
            verb=verb,
            object_id=data.get("objectId", ""),
            object_kind=ObjectKind.parse(data.get("objectKind", "")),
            metadata=copy.deepcopy(metadata),
        )


@dataclass
class ActivityObject(BaseObject):
    """A BaseObject of kind `activity`."""
    kind: ObjectKind | str = ObjectKind.ACTIVITY

    def get_fields(self) -> ActivityFields:
        """Decode fields. Raises DecodeError if they are not activity fields."""
        return ActivityFields.from_dict(self.fields)

    @classmethod
    def from_base(cls, obj: BaseObject) -> "ActivityObject":
        """Wrap a stored BaseObject (no copy of fields is taken)."""
        return cls(
            kind=obj.kind,
            id=obj.id,
            created_at=obj.created_at,
            updated_at=obj.updated_at,
            created_by=obj.created_by,
            acl=obj.acl,
            tags=obj.tags,
            fields=obj.fields,
        )


def new_activity_object(
    actor_id: str,
    verb: ActivityVerb,
    object_id: str,
    object_kind: ObjectKind | str,
    metadata: Optional[Dict[str, Any]] = None,
) -> ActivityObject:
    """
    Build an activity owned by its actor.

    Args:
        actor_id: Who performed the action (also created_by and ACL owner)
        verb: What happened
        object_id: Id of the object the event is about
        object_kind: Kind of that object
        metadata: Extra details; for updates, {"changes": ...}

    Returns:
        An unsaved ActivityObject timestamped now
    """
    now = utcnow()
    activity_fields = ActivityFields(
        actor_id=actor_id,
        verb=ActivityVerb(verb),
        object_id=object_id,
        object_kind=object_kind,
        metadata=metadata or {},
    )
    return ActivityObject(
        kind=ObjectKind.ACTIVITY,
        created_at=now,
        updated_at=now,
        created_by=actor_id,
        acl=[ACLEntry(actor_id=actor_id, role="owner")],
        fields=activity_fields.to_dict(),
    )


def _same_value(a: Any, b: Any) -> bool:
    """Deep equality that keeps JSON types apart (1, 1.0 and True differ)."""
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_same_value(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_same_value(x, y) for x, y in zip(a, b))
    if isinstance(a, float) and a != a:
        return b != b
    return a == b


def _change(before: Any, after: Any) -> Dict[str, Any]:
    return {"before": copy.deepcopy(before), "after": copy.deepcopy(after)}


def calculate_changes(old_obj: BaseObject, new_obj: BaseObject) -> Dict[str, Dict[str, Any]]:
    """
    Diff two versions of an object.

    Mapping fields are compared key by key (a key missing on one side
    compares as None), with values of different JSON types never equal,
    so 1 -> true is a change. Tags are compared as a set and reported as a single
    `tags` entry holding both lists.

    Returns:
        {name: {"before": ..., "after": ...}} for every difference; empty
        when nothing changed
    """
    changes: Dict[str, Dict[str, Any]] = {}
    if old_obj is new_obj:
        return changes

    old_fields, new_fields = old_obj.fields, new_obj.fields
    if isinstance(old_fields, dict) and isinstance(new_fields, dict):
        for key in list(old_fields) + [k for k in new_fields if k not in old_fields]:
            before, after = old_fields.get(key), new_fields.get(key)
            if not _same_value(before, after):
                changes[key] = _change(before, after)
    elif not _same_value(old_fields, new_fields):
        changes["fields"] = _change(old_fields, new_fields)

    if set(old_obj.tags) != set(new_obj.tags):
        changes["tags"] = _change(list(old_obj.tags), list(new_obj.tags))

    return changes
