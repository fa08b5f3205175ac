from .complaint import ComplaintModel
from .timeline_event import TimelineEventModel

__all__ = [
    "ComplaintModel",
    "TimelineEventModel",
]
