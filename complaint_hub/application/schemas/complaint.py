"""Pydantic DTOs (Data Transfer Objects) for the complaint feature."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from complaint_hub.domain.entities import Complaint, TimelineEvent

# Form keys accepted for each field, checked in order.
_FORM_KEYS: dict[str, tuple[str, ...]] = {
    "name": ("citizen-name", "name"),
    "email": ("citizen-email", "email"),
    "phone": ("citizen-phone", "phone"),
    "title": ("complaint-title", "title"),
    "details": ("complaint-details", "details"),
}

REQUIRED_FIELDS = ("name", "title", "details")


class ComplaintCreate(BaseModel):
    """Schema for a complaint submission (multipart form or JSON).

    Every field is optional here so that a missing required field can be
    reported by name; blank values count as missing.
    """

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    title: str | None = None
    details: str | None = None
    category: str | None = None
    location: str | None = None
    priority: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _collect_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        collected: dict[str, str] = {}
        for field_name in cls.model_fields:
            for key in _FORM_KEYS.get(field_name, (field_name,)):
                value = data.get(key)
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    value = str(value)
                if isinstance(value, str) and value.strip():
                    collected[field_name] = value.strip()
                    break
        return collected

    def missing_fields(self) -> list[str]:
        """Names of required fields that were not supplied."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


class TimelineUpdate(BaseModel):
    """Schema for appending a status update to a complaint's timeline."""

    status: str | None = Field(None, max_length=100, examples=["In Progress"])
    note: str | None = Field(None, examples=["Crew dispatched to the site"])

    @field_validator("status", "note", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class ComplaintCreatedResponse(BaseModel):
    """Returned after a complaint has been registered."""

    success: bool = True
    complaint_id: str = Field(serialization_alias="complaintId")


class ComplaintDetailSchema(BaseModel):
    name: str
    email: str | None
    phone: str | None
    title: str
    details: str
    category: str | None
    location: str | None
    priority: str
    status: str
    attachment: str | None
    created_at: datetime

    @classmethod
    def from_entity(cls, complaint: Complaint) -> "ComplaintDetailSchema":
        return cls(
            name=complaint.name,
            email=complaint.email,
            phone=complaint.phone,
            title=complaint.title,
            details=complaint.details,
            category=complaint.category,
            location=complaint.location,
            priority=complaint.priority,
            status=complaint.status,
            attachment=complaint.attachment_url,
            created_at=complaint.created_at,
        )


class TimelineEntrySchema(BaseModel):
    status: str
    note: str | None
    date: datetime

    @classmethod
    def from_entity(cls, event: TimelineEvent) -> "TimelineEntrySchema":
        return cls(status=event.status, note=event.note, date=event.created_at)


class ComplaintLookupResponse(BaseModel):
    """Read view of a complaint and its full timeline."""

    success: bool = True
    complaint_id: str = Field(serialization_alias="complaintId")
    complaint: ComplaintDetailSchema
    timeline: list[TimelineEntrySchema]


class TimelineUpdateResponse(BaseModel):
    success: bool = True
    message: str = "Timeline updated"
    status_applied: bool = Field(serialization_alias="statusApplied")


class ErrorResponse(BaseModel):
    """Uniform error envelope."""

    success: bool = False
    message: str
