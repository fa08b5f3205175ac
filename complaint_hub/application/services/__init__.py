from .complaint_service import (
    AttachmentUpload,
    ComplaintService,
    ComplaintWithTimeline,
    StatusUpdateResult,
)

__all__ = [
    "AttachmentUpload",
    "ComplaintService",
    "ComplaintWithTimeline",
    "StatusUpdateResult",
]
