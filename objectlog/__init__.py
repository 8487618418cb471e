# objectlog - Generic object model with an activity audit trail
#
# Domain objects are stored as schema-free envelopes. Lifecycle hooks turn
# each create/update/delete into an immutable activity record, and the
# timeline queries those records chronologically.
#
# Core concepts:
# - BaseObject: Envelope with identity, timestamps, ACL, tags and open fields
# - ObjectStore: Create/get/update/delete/query contract (MemoryStore, JsonFileStore)
# - ActivityObject: One audit event about another object
# - ActivityGenerator: Hooks that diff before/after state and record activities
# - Timeline: Filtered, newest-first view of the activity stream

from .errors import ObjectLogError, NotFoundError, AlreadyExistsError, DecodeError
from .objects import ObjectKind, ACLEntry, BaseObject
from .store import ObjectStore, MemoryStore, JsonFileStore
from .activity import (
    ActivityVerb,
    ActivityFields,
    ActivityObject,
    new_activity_object,
    calculate_changes,
)
from .hooks import ActivityHooks, ActivityGenerator
from .timeline import Timeline, TimelineFilter, TimelineView
from .tasks import TaskObject, TaskStatus, new_task_object
from .config import Config

__all__ = [
    # Errors
    "ObjectLogError",
    "NotFoundError",
    "AlreadyExistsError",
    "DecodeError",
    # Objects
    "ObjectKind",
    "ACLEntry",
    "BaseObject",
    "ObjectStore",
    "MemoryStore",
    "JsonFileStore",
    # Activities
    "ActivityVerb",
    "ActivityFields",
    "ActivityObject",
    "new_activity_object",
    "calculate_changes",
    "ActivityHooks",
    "ActivityGenerator",
    # Timeline
    "Timeline",
    "TimelineFilter",
    "TimelineView",
    # Typed views
    "TaskObject",
    "TaskStatus",
    "new_task_object",
    "Config",
]

__version__ = "0.1.0"
