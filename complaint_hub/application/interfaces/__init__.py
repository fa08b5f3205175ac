from .complaint_repository import ComplaintRepository
from .timeline_repository import TimelineRepository

__all__ = [
    "ComplaintRepository",
    "TimelineRepository",
]
