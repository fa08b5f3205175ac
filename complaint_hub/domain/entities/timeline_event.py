"""Domain entity: one entry in a complaint's append-only status timeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

REGISTERED_EVENT_STATUS = "Complaint Registered"
REGISTERED_EVENT_NOTE = "Created by user"
DEFAULT_UPDATE_STATUS = "Updated"


@dataclass
class TimelineEvent:
    """A status event belonging to a complaint, correlated by ``complaint_id``."""

    complaint_id: str
    status: str
    note: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
