# objectlog/tasks.py
"""
Task objects.

A task is a BaseObject of kind `task`; its fields hold

    {"title", "status", "assigneeId", "dueAt", "completedAt", "relatedRecordIds"}

with timestamps as ISO 8601 strings. The accessors below decode on read, so
anything a store hands back can be used as a task without conversion.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from .errors import DecodeError
from .objects import ACLEntry, BaseObject, ObjectKind, parse_timestamp, utcnow


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


def _parse_optional(value) -> Optional[datetime]:
    if value in (None, ""):
        return None
    return parse_timestamp(value)


@dataclass
class TaskObject(BaseObject):
    """A BaseObject of kind `task` with typed accessors over its fields."""
    kind: ObjectKind | str = ObjectKind.TASK

    @classmethod
    def from_base(cls, obj: BaseObject) -> "TaskObject":
        if obj.kind != ObjectKind.TASK:
            raise DecodeError(f"object {obj.id} is a {obj.kind}, not a task")
        if not isinstance(obj.fields, dict):
            raise DecodeError(f"task {obj.id} fields must be a mapping")
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

    @property
    def title(self) -> str:
        return self.fields.get("title", "")

    @property
    def status(self) -> TaskStatus:
        try:
            return TaskStatus(self.fields.get("status", TaskStatus.TODO.value))
        except ValueError as e:
            raise DecodeError(f"task {self.id} has invalid status {self.fields.get('status')!r}") from e

    @property
    def assignee_id(self) -> str:
        return self.fields.get("assigneeId", "")

    @property
    def due_at(self) -> Optional[datetime]:
        return _parse_optional(self.fields.get("dueAt"))

    @property
    def completed_at(self) -> Optional[datetime]:
        return _parse_optional(self.fields.get("completedAt"))

    @property
    def related_record_ids(self) -> List[str]:
        return list(self.fields.get("relatedRecordIds") or [])

    def transition_status(self, status: TaskStatus | str, now: datetime = None) -> None:
        """
        Move the task to a new status.

        Entering `done` stamps completedAt; leaving it clears the stamp.

        Raises:
            ValueError: status is not a task status (the task is unchanged)
        """
        try:
            status = TaskStatus(status)
        except ValueError:
            raise ValueError(f"invalid task status: {status!r}") from None

        now = now or utcnow()
        self.fields["status"] = status.value
        if status is TaskStatus.DONE:
            self.fields["completedAt"] = now.isoformat()
        else:
            self.fields["completedAt"] = None
        self.touch(now)

    def add_related_record(self, record_id: str) -> None:
        """Link a record (contact, deal...) to the task. Idempotent."""
        related = self.related_record_ids
        if record_id in related:
            return
        related.append(record_id)
        self.fields["relatedRecordIds"] = related
        self.touch()

    def is_overdue(self, now: datetime = None) -> bool:
        due = self.due_at
        if due is None or self.status is TaskStatus.DONE:
            return False
        return due < (now or utcnow())

    def is_due_soon(self, days: int, now: datetime = None) -> bool:
        """Due within the next `days` days (and not already overdue or done)."""
        due = self.due_at
        if due is None or self.status is TaskStatus.DONE:
            return False
        now = now or utcnow()
        return now <= due <= now + timedelta(days=days)


def new_task_object(
    created_by: str,
    title: str,
    assignee_id: str = "",
    due_at: datetime = None,
) -> TaskObject:
    """Build an unsaved task in the `todo` state, owned by its creator."""
    now = utcnow()
    return TaskObject(
        kind=ObjectKind.TASK,
        created_at=now,
        created_by=created_by,
        acl=[ACLEntry(actor_id=created_by, role="owner")],
        fields={
            "title": title,
            "status": TaskStatus.TODO.value,
            "assigneeId": assignee_id,
            "dueAt": parse_timestamp(due_at).isoformat() if due_at else None,
            "completedAt": None,
            "relatedRecordIds": [],
        },
    )
