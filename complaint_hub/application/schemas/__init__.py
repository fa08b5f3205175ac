from .complaint import (
    ComplaintCreate,
    ComplaintCreatedResponse,
    ComplaintDetailSchema,
    ComplaintLookupResponse,
    ErrorResponse,
    TimelineEntrySchema,
    TimelineUpdate,
    TimelineUpdateResponse,
)

__all__ = [
    "ComplaintCreate",
    "ComplaintCreatedResponse",
    "ComplaintDetailSchema",
    "ComplaintLookupResponse",
    "ErrorResponse",
    "TimelineEntrySchema",
    "TimelineUpdate",
    "TimelineUpdateResponse",
]
