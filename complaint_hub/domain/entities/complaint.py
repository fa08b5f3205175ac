"""Domain entity for a citizen-submitted complaint."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

DEFAULT_PRIORITY = "Normal"
DEFAULT_STATUS = "Registered"


@dataclass
class Complaint:
    """Core domain entity for a complaint.

    Only ``status`` changes after creation; every other field is fixed once
    the record is stored.
    """

    complaint_id: str
    name: str
    title: str
    details: str
    email: str | None = None
    phone: str | None = None
    category: str | None = None
    location: str | None = None
    priority: str = DEFAULT_PRIORITY
    attachment: str | None = None
    status: str = DEFAULT_STATUS
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def attachment_url(self) -> str | None:
        """Public path of the stored attachment, or None when there is none."""
        if not self.attachment:
            return None
        return f"/uploads/{self.attachment}"
