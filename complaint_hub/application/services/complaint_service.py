"""Application service (use case) for the complaint lifecycle.

Submission, lookup and status updates all run against the repositories of
a single request session. The paired writes of a submission (complaint row
+ creation event) and of a status update (event + current status) are
committed by the service itself, before a result is handed back, so a
failed commit surfaces as an error to the caller.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from complaint_hub.application.interfaces import ComplaintRepository, TimelineRepository
from complaint_hub.application.schemas.complaint import ComplaintCreate, TimelineUpdate
from complaint_hub.domain.entities import (
    DEFAULT_PRIORITY,
    DEFAULT_UPDATE_STATUS,
    REGISTERED_EVENT_NOTE,
    REGISTERED_EVENT_STATUS,
    Complaint,
    TimelineEvent,
)
from complaint_hub.domain.exceptions import (
    ComplaintValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    PayloadTooLargeError,
)
from complaint_hub.domain.identifiers import DEFAULT_PREFIX, generate_complaint_id
from complaint_hub.infrastructure.storage.local_file_storage import LocalFileStorage, StoredFile

logger = logging.getLogger(__name__)


@dataclass
class AttachmentUpload:
    """An attachment as received from the client."""

    content: bytes
    filename: str


@dataclass
class ComplaintWithTimeline:
    complaint: Complaint
    timeline: list[TimelineEvent]


@dataclass
class StatusUpdateResult:
    """Outcome of a status update.

    ``status_applied`` is False when no complaint carries the identifier; the
    event is recorded regardless.
    """

    event: TimelineEvent
    status_applied: bool


class ComplaintService:
    """Orchestrates complaint submission, lookup and status updates."""

    def __init__(
        self,
        complaint_repository: ComplaintRepository,
        timeline_repository: TimelineRepository,
        file_storage: LocalFileStorage,
        *,
        id_prefix: str = DEFAULT_PREFIX,
        max_id_attempts: int = 5,
        max_attachment_bytes: int = 6 * 1024 * 1024,
        id_generator: Callable[[str], str] = generate_complaint_id,
        commit: Callable[[], Awaitable[None]] | None = None,
    ):
        self._complaints = complaint_repository
        self._timeline = timeline_repository
        self._storage = file_storage
        self._id_prefix = id_prefix
        self._max_id_attempts = max(1, max_id_attempts)
        self._max_attachment_bytes = max_attachment_bytes
        self._generate_id = id_generator
        self._commit = commit

    # ── Submission ──────────────────────────────────────────────────

    async def submit_complaint(
        self, data: ComplaintCreate, attachment: AttachmentUpload | None = None
    ) -> Complaint:
        """Validate and register a new complaint with its creation event."""
        missing = data.missing_fields()
        if missing:
            raise ComplaintValidationError(missing)
        if attachment is not None and len(attachment.content) > self._max_attachment_bytes:
            raise PayloadTooLargeError(self._max_attachment_bytes)

        stored: StoredFile | None = None
        if attachment is not None:
            stored = await self._storage.store_file(attachment.content, attachment.filename)

        try:
            complaint = await self._insert_with_fresh_id(
                data, stored.filename if stored else None
            )
            await self._timeline.append(
                complaint.complaint_id, REGISTERED_EVENT_STATUS, REGISTERED_EVENT_NOTE
            )
            await self._save()
        except Exception:
            if stored is not None:
                await self._storage.delete_file(stored.filename)
                logger.warning(
                    "Complaint registration failed; discarded attachment %s", stored.filename
                )
            raise

        logger.info(
            "Registered complaint %s (attachment=%s)",
            complaint.complaint_id,
            complaint.attachment or "none",
        )
        return complaint

    async def _insert_with_fresh_id(
        self, data: ComplaintCreate, attachment: str | None
    ) -> Complaint:
        last_error: DuplicateEntityError | None = None
        for attempt in range(1, self._max_id_attempts + 1):
            complaint = Complaint(
                complaint_id=self._generate_id(self._id_prefix),
                name=data.name,
                email=data.email,
                phone=data.phone,
                title=data.title,
                details=data.details,
                category=data.category,
                location=data.location,
                priority=data.priority or DEFAULT_PRIORITY,
                attachment=attachment,
            )
            try:
                return await self._complaints.insert(complaint)
            except DuplicateEntityError as e:
                last_error = e
                logger.warning(
                    "Complaint id %s already taken (attempt %d/%d)",
                    complaint.complaint_id,
                    attempt,
                    self._max_id_attempts,
                )

        logger.error(
            "Could not allocate a unique complaint id after %d attempts",
            self._max_id_attempts,
        )
        raise last_error

    async def _save(self) -> None:
        if self._commit is not None:
            await self._commit()

    # ── Lookup ──────────────────────────────────────────────────────

    async def get_complaint(self, complaint_id: str) -> ComplaintWithTimeline:
        complaint = await self._complaints.get_by_complaint_id(complaint_id)
        if complaint is None:
            raise EntityNotFoundError("Complaint", complaint_id)
        timeline = await self._timeline.list_by_complaint_id(complaint_id)
        return ComplaintWithTimeline(complaint=complaint, timeline=timeline)

    # ── Status updates ──────────────────────────────────────────────

    async def update_status(
        self, complaint_id: str, data: TimelineUpdate | None = None
    ) -> StatusUpdateResult:
        """Append a timeline event, then mirror its status onto the complaint."""
        status = (data.status if data else None) or DEFAULT_UPDATE_STATUS
        note = data.note if data else None

        event = await self._timeline.append(complaint_id, status, note)
        applied = await self._complaints.update_status(complaint_id, status)
        await self._save()
        if applied:
            logger.info("Complaint %s status set to '%s'", complaint_id, status)
        else:
            logger.warning(
                "Timeline event recorded for unknown complaint %s; no status to update",
                complaint_id,
            )
        return StatusUpdateResult(event=event, status_applied=applied)
