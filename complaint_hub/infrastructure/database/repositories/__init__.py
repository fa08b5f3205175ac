from .complaint_repository import SQLAlchemyComplaintRepository
from .timeline_repository import SQLAlchemyTimelineRepository

__all__ = [
    "SQLAlchemyComplaintRepository",
    "SQLAlchemyTimelineRepository",
]
