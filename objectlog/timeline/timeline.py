# objectlog/timeline/timeline.py
"""
Chronological queries over the activity stream.

All activities are fetched with one kind query and filtered in memory.
That is fine for the in-process stores; a durable store should narrow by
kind and date range itself before handing results back.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..activity import ActivityFields, ActivityObject, ActivityVerb
from ..errors import DecodeError
from ..objects import ObjectKind, parse_timestamp
from ..store import ObjectStore

logger = logging.getLogger(__name__)


@dataclass
class TimelineFilter:
    """
    Filter for timeline queries. Unset dimensions match everything;
    set dimensions are ANDed.

    Attributes:
        object_id: Activities about this object
        actor_id: Activities performed by this actor
        verb: Activities with this verb
        object_kind: Activities about objects of this kind
        start_date: created_at >= start_date
        end_date: created_at <= end_date
        limit: Keep the newest `limit` activities (0 = no limit)
    """
    object_id: str = ""
    actor_id: str = ""
    verb: Optional[ActivityVerb | str] = None
    object_kind: Optional[ObjectKind | str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    limit: int = 0

    def matches(self, activity: ActivityObject, fields: ActivityFields) -> bool:
        if self.object_id and fields.object_id != self.object_id:
            return False
        if self.actor_id and fields.actor_id != self.actor_id:
            return False
        if self.verb and fields.verb != self.verb:
            return False
        if self.object_kind and fields.object_kind != self.object_kind:
            return False
        if self.start_date is not None and activity.created_at < parse_timestamp(self.start_date):
            return False
        if self.end_date is not None and activity.created_at > parse_timestamp(self.end_date):
            return False
        return True


class Timeline:
    """Read-only query engine over ActivityObjects in a store."""

    def __init__(self, store: ObjectStore):
        self.store = store

    def get_timeline(self, timeline_filter: TimelineFilter = None) -> List[ActivityObject]:
        """
        Activities matching timeline_filter, newest first.

        Activities whose fields cannot be decoded are left out. Activities
        with the same created_at come out in reverse store order, i.e. the
        one written last first.

        Raises:
            ObjectLogError: the store query failed
        """
        timeline_filter = timeline_filter or TimelineFilter()
        stored = self.store.query(ObjectKind.ACTIVITY, {})

        results = []
        for obj in stored:
            activity = ActivityObject.from_base(obj)
            try:
                fields = activity.get_fields()
            except DecodeError as e:
                logger.debug(f"Skipping undecodable activity {obj.id}: {e}")
                continue
            if timeline_filter.matches(activity, fields):
                results.append(activity)

        # sort() is stable: reversing first puts later writes ahead on ties
        results.reverse()
        results.sort(key=lambda a: a.created_at, reverse=True)

        if timeline_filter.limit > 0:
            results = results[:timeline_filter.limit]
        return results

    def get_timeline_for_object(self, object_id: str) -> List[ActivityObject]:
        return self.get_timeline(TimelineFilter(object_id=object_id))

    def get_recent_activities(self, limit: int) -> List[ActivityObject]:
        return self.get_timeline(TimelineFilter(limit=limit))

    def get_activities_by_actor(self, actor_id: str, limit: int = 0) -> List[ActivityObject]:
        return self.get_timeline(TimelineFilter(actor_id=actor_id, limit=limit))

    def get_activities_by_verb(self, verb: ActivityVerb | str, limit: int = 0) -> List[ActivityObject]:
        return self.get_timeline(TimelineFilter(verb=verb, limit=limit))
