from .complaint import Complaint, DEFAULT_PRIORITY, DEFAULT_STATUS
from .timeline_event import (
    TimelineEvent,
    DEFAULT_UPDATE_STATUS,
    REGISTERED_EVENT_NOTE,
    REGISTERED_EVENT_STATUS,
)

__all__ = [
    "Complaint",
    "DEFAULT_PRIORITY",
    "DEFAULT_STATUS",
    "TimelineEvent",
    "DEFAULT_UPDATE_STATUS",
    "REGISTERED_EVENT_NOTE",
    "REGISTERED_EVENT_STATUS",
]
