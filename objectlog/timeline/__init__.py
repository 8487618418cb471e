# objectlog/timeline/__init__.py
"""
Activity timeline queries and rendering.

Example:
    timeline = Timeline(store)
    recent = timeline.get_recent_activities(10)
    print(TimelineView(timeline).render("contact-123"))
"""

from .timeline import Timeline, TimelineFilter
from .view import TimelineView, format_timestamp

__all__ = ["Timeline", "TimelineFilter", "TimelineView", "format_timestamp"]
