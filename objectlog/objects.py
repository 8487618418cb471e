# objectlog/objects.py
"""
Generic object envelope.

Every domain object (contact, task, message, audit event...) is stored as a
BaseObject. The envelope carries identity, timestamps, ownership and tags;
everything kind-specific lives in the open `fields` document, which typed
accessors (ActivityFields, TaskObject) decode on read. New kinds therefore
need no schema migration.
"""

import copy
import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import DecodeError


class ObjectKind(str, Enum):
    """Built-in object kinds."""
    USER = "user"
    RECORD = "record"
    TASK = "task"
    EVENT = "event"
    MESSAGE = "message"
    ACTIVITY = "activity"
    NOTIFICATION = "notification"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "ObjectKind | str":
        """Return the built-in kind for value, or value itself for custom kinds."""
        try:
            return cls(value)
        except ValueError:
            return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 string (or datetime) into an aware UTC datetime."""
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str):
        raise DecodeError(f"invalid timestamp: {value!r}")
    try:
        return _as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError as e:
        raise DecodeError(f"invalid timestamp: {value!r}") from e


def _generate_id() -> str:
    return str(uuid.uuid4())


@dataclass
class ACLEntry:
    """An (actor, role) pair. Carried as data; never enforced here."""
    actor_id: str
    role: str

    def to_dict(self) -> Dict[str, str]:
        return {"actorId": self.actor_id, "role": self.role}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ACLEntry":
        try:
            return cls(actor_id=data["actorId"], role=data["role"])
        except (KeyError, TypeError) as e:
            raise DecodeError(f"invalid ACL entry: {data!r}") from e


@dataclass
class BaseObject:
    """
    The envelope shared by every stored object.

    Attributes:
        kind: Object kind (ObjectKind, or a plain string for custom kinds)
        id: Unique id within a store (generated when omitted)
        created_at: Creation time, UTC
        updated_at: Last modification time, UTC (defaults to created_at)
        created_by: Actor that created the object
        acl: Ordered access control entries
        tags: Free-form tags
        fields: Kind-specific, schema-free document
    """
    kind: ObjectKind | str
    id: str = field(default_factory=_generate_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    created_by: str = ""
    acl: List[ACLEntry] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    fields: Any = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.kind, str):
            self.kind = ObjectKind.parse(self.kind)
        self.created_at = _as_utc(self.created_at)
        if self.updated_at is None:
            self.updated_at = self.created_at
        else:
            self.updated_at = _as_utc(self.updated_at)
        if self.updated_at < self.created_at:
            raise ValueError(
                f"Object {self.id}: updated_at {self.updated_at.isoformat()} "
                f"is before created_at {self.created_at.isoformat()}"
            )

    def copy(self) -> "BaseObject":
        """Deep copy; nothing is shared with the original."""
        return copy.deepcopy(self)

    def touch(self, when: datetime = None) -> None:
        """Bump updated_at (never before created_at)."""
        when = _as_utc(when) if when is not None else utcnow()
        self.updated_at = max(when, self.created_at)

    def fields_as_json(self) -> str:
        return json.dumps(self.fields)

    def acl_as_json(self) -> str:
        return json.dumps([entry.to_dict() for entry in self.acl])

    def tags_as_json(self) -> str:
        if not self.tags:
            return "[]"
        return json.dumps(self.tags)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": str(self.kind),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "created_by": self.created_by,
            "acl": [entry.to_dict() for entry in self.acl],
            "tags": list(self.tags),
            "fields": copy.deepcopy(self.fields),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseObject":
        if not isinstance(data, dict):
            raise DecodeError(f"object record must be a mapping, got {type(data).__name__}")
        try:
            object_id = data["id"]
            kind = data["kind"]
        except KeyError as e:
            raise DecodeError(f"object record missing {e.args[0]!r}") from e

        if not isinstance(kind, str):
            raise DecodeError(f"object {object_id!r} kind must be a string")
        acl = data.get("acl") or []
        tags = data.get("tags") or []
        for name, value in (("acl", acl), ("tags", tags)):
            if not isinstance(value, list):
                raise DecodeError(f"object {object_id!r} {name} must be a list")

        created_at = parse_timestamp(data.get("created_at", utcnow()))
        updated_at = data.get("updated_at")
        try:
            return cls(
                kind=ObjectKind.parse(kind),
                id=object_id,
                created_at=created_at,
                updated_at=parse_timestamp(updated_at) if updated_at else None,
                created_by=data.get("created_by", ""),
                acl=[ACLEntry.from_dict(a) for a in acl],
                tags=list(tags),
                fields=copy.deepcopy(data.get("fields", {})),
            )
        except DecodeError:
            raise
        except (TypeError, ValueError) as e:
            raise DecodeError(str(e)) from e
