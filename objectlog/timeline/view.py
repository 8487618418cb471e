# objectlog/timeline/view.py
"""Plain-text rendering of activity timelines."""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List

from ..activity import ActivityObject, ActivityVerb
from ..errors import ObjectLogError
from ..objects import utcnow
from .timeline import Timeline, TimelineFilter

HEADER = "ACTIVITY TIMELINE"
EMPTY_MESSAGE = "No activities to display"

VERB_INDICATORS = {
    ActivityVerb.CREATED: "+",
    ActivityVerb.UPDATED: "~",
    ActivityVerb.DELETED: "-",
    ActivityVerb.VIEWED: ".",
}


def format_timestamp(when: datetime, now: datetime = None) -> str:
    """Relative time for recent events, a date for older ones."""
    now = now or utcnow()
    diff = now - when

    if diff < timedelta(minutes=1):
        return "just now"
    if diff < timedelta(hours=1):
        return f"{int(diff.total_seconds() // 60)} min ago"
    if diff < timedelta(days=1):
        return f"{int(diff.total_seconds() // 3600)} hours ago"
    if diff < timedelta(days=7):
        return f"{diff.days} days ago"
    return f"{when:%b} {when.day}, {when.year}"


class TimelineView:
    """
    Renders a Timeline as text.

    Usage:
        view = TimelineView(Timeline(store))
        print(view.render("contact-123"))
    """

    def __init__(
        self,
        timeline: Timeline,
        width: int = 80,
        height: int = 40,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.timeline = timeline
        self.width = width
        self.height = height
        self._clock = clock

    def render(self, object_id: str) -> str:
        """Render the timeline of one object."""
        return self.render_filtered(TimelineFilter(object_id=object_id))

    def render_filtered(self, timeline_filter: TimelineFilter) -> str:
        try:
            activities = self.timeline.get_timeline(timeline_filter)
        except ObjectLogError as e:
            return f"Error loading timeline: {e}"

        if not activities:
            return EMPTY_MESSAGE
        return self._render_activities(activities)

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def _render_activities(self, activities: List[ActivityObject]) -> str:
        lines = [HEADER, "=" * len(HEADER), ""]
        now = self._clock()
        for activity in activities:
            lines.append(self._render_activity(activity, now))
        return "\n".join(lines) + "\n"

    def _render_activity(self, activity: ActivityObject, now: datetime) -> str:
        fields = activity.get_fields()
        indicator = VERB_INDICATORS.get(fields.verb, "?")
        timestamp = format_timestamp(activity.created_at, now)

        line = f"  {timestamp:<20}  {fields.actor_id} [{indicator}] {fields.object_kind}"
        if fields.metadata:
            line += "\n" + self._render_metadata(fields.metadata)
        return line

    def _render_metadata(self, metadata: Dict[str, Any]) -> str:
        lines = []

        changes = metadata.get("changes")
        if isinstance(changes, dict):
            lines.append("    Changes:")
            for name, change in changes.items():
                if not isinstance(change, dict):
                    continue
                lines.append(f"      {name}: {change.get('before')} -> {change.get('after')}")

        for key, value in metadata.items():
            if key in ("changes", "timestamp"):
                continue
            lines.append(f"    {key}: {value}")

        return "\n".join(lines)
