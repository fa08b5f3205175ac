"""Unit tests for the ComplaintService."""

from collections.abc import Iterator

import pytest

from complaint_hub.application.interfaces import ComplaintRepository, TimelineRepository
from complaint_hub.application.schemas import ComplaintCreate, TimelineUpdate
from complaint_hub.application.services import AttachmentUpload, ComplaintService
from complaint_hub.domain.entities import Complaint, TimelineEvent
from complaint_hub.domain.exceptions import (
    ComplaintValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    PayloadTooLargeError,
)
from complaint_hub.infrastructure.storage.local_file_storage import LocalFileStorage


# ── Fake Repositories ────────────────────────────────────────────────

class FakeComplaintRepository(ComplaintRepository):
    """In-memory complaint repository enforcing complaint_id uniqueness."""

    def __init__(self):
        self._complaints: dict[str, Complaint] = {}
        self._next_id = 1

    async def insert(self, complaint: Complaint) -> Complaint:
        if complaint.complaint_id in self._complaints:
            raise DuplicateEntityError("Complaint", "complaint_id", complaint.complaint_id)
        complaint.id = self._next_id
        self._next_id += 1
        self._complaints[complaint.complaint_id] = complaint
        return complaint

    async def get_by_complaint_id(self, complaint_id: str) -> Complaint | None:
        return self._complaints.get(complaint_id)

    async def update_status(self, complaint_id: str, status: str) -> bool:
        complaint = self._complaints.get(complaint_id)
        if complaint is None:
            return False
        complaint.status = status
        return True

    async def count(self) -> int:
        return len(self._complaints)


class FakeTimelineRepository(TimelineRepository):
    def __init__(self):
        self.events: list[TimelineEvent] = []

    async def append(
        self, complaint_id: str, status: str, note: str | None = None
    ) -> TimelineEvent:
        event = TimelineEvent(
            id=len(self.events) + 1, complaint_id=complaint_id, status=status, note=note
        )
        self.events.append(event)
        return event

    async def list_by_complaint_id(self, complaint_id: str) -> list[TimelineEvent]:
        return [e for e in self.events if e.complaint_id == complaint_id]


class BrokenTimelineRepository(FakeTimelineRepository):
    async def append(self, complaint_id, status, note=None):
        raise RuntimeError("timeline table unavailable")


def _ids(*values: str):
    iterator: Iterator[str] = iter(values)
    return lambda prefix: next(iterator)


# ── Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def complaints() -> FakeComplaintRepository:
    return FakeComplaintRepository()


@pytest.fixture
def timeline() -> FakeTimelineRepository:
    return FakeTimelineRepository()


@pytest.fixture
def storage(tmp_path) -> LocalFileStorage:
    return LocalFileStorage(upload_dir=str(tmp_path / "uploads"))


@pytest.fixture
def service(complaints, timeline, storage) -> ComplaintService:
    return ComplaintService(complaints, timeline, storage, max_attachment_bytes=1024)


def _valid(**overrides) -> ComplaintCreate:
    data = {"name": "A", "title": "T", "details": "D"}
    data.update(overrides)
    return ComplaintCreate.model_validate(data)


# ── Submission ───────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_submit_registers_complaint_with_creation_event(service, timeline):
    complaint = await service.submit_complaint(_valid())

    assert complaint.complaint_id.startswith("CCH-")
    assert complaint.status == "Registered"
    assert complaint.priority == "Normal"
    assert complaint.attachment is None
    assert [(e.status, e.note) for e in timeline.events] == [
        ("Complaint Registered", "Created by user")
    ]


@pytest.mark.asyncio
async def test_submit_missing_fields_names_them_and_writes_nothing(
    service, complaints, timeline, storage
):
    data = ComplaintCreate.model_validate({"name": "A", "title": "   "})
    attachment = AttachmentUpload(content=b"img", filename="a.png")

    with pytest.raises(ComplaintValidationError) as exc_info:
        await service.submit_complaint(data, attachment)

    assert exc_info.value.missing_fields == ["title", "details"]
    assert "title" in str(exc_info.value) and "details" in str(exc_info.value)
    assert await complaints.count() == 0
    assert timeline.events == []
    assert list(storage.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_submit_rejects_oversized_attachment(service, complaints, storage):
    attachment = AttachmentUpload(content=b"x" * 1025, filename="big.bin")

    with pytest.raises(PayloadTooLargeError):
        await service.submit_complaint(_valid(), attachment)

    assert await complaints.count() == 0
    assert list(storage.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_submit_stores_attachment_under_assigned_name(service, storage):
    attachment = AttachmentUpload(content=b"%PDF-1.4", filename="water bill.pdf")

    complaint = await service.submit_complaint(_valid(), attachment)

    assert complaint.attachment is not None
    assert complaint.attachment != "water bill.pdf"
    assert complaint.attachment_url == f"/uploads/{complaint.attachment}"
    assert storage.resolve(complaint.attachment).read_bytes() == b"%PDF-1.4"


@pytest.mark.asyncio
async def test_submit_retries_with_fresh_id_on_collision(complaints, timeline, storage):
    await complaints.insert(
        Complaint(complaint_id="CCH-2024-0000011111", name="X", title="Y", details="Z")
    )
    service = ComplaintService(
        complaints,
        timeline,
        storage,
        id_generator=_ids("CCH-2024-0000011111", "CCH-2024-0000022222"),
    )

    complaint = await service.submit_complaint(_valid())

    assert complaint.complaint_id == "CCH-2024-0000022222"
    assert await complaints.count() == 2


@pytest.mark.asyncio
async def test_submit_gives_up_after_max_attempts(complaints, timeline, storage):
    await complaints.insert(
        Complaint(complaint_id="CCH-2024-0000011111", name="X", title="Y", details="Z")
    )
    service = ComplaintService(
        complaints,
        timeline,
        storage,
        max_id_attempts=2,
        id_generator=lambda prefix: "CCH-2024-0000011111",
    )

    with pytest.raises(DuplicateEntityError) as exc_info:
        await service.submit_complaint(
            _valid(), AttachmentUpload(content=b"img", filename="a.png")
        )

    assert exc_info.value.value == "CCH-2024-0000011111"
    assert await complaints.count() == 1
    assert timeline.events == []
    assert list(storage.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_submit_propagates_timeline_failure_and_discards_attachment(
    complaints, storage
):
    service = ComplaintService(complaints, BrokenTimelineRepository(), storage)

    with pytest.raises(RuntimeError):
        await service.submit_complaint(
            _valid(), AttachmentUpload(content=b"img", filename="a.png")
        )

    assert list(storage.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_submit_commits_before_returning(complaints, timeline, storage):
    commits = []

    async def commit():
        commits.append(len(timeline.events))

    service = ComplaintService(complaints, timeline, storage, commit=commit)

    await service.submit_complaint(_valid())

    assert commits == [1]


@pytest.mark.asyncio
async def test_submit_failed_commit_discards_attachment(complaints, timeline, storage):
    async def commit():
        raise RuntimeError("database is locked")

    service = ComplaintService(complaints, timeline, storage, commit=commit)

    with pytest.raises(RuntimeError, match="database is locked"):
        await service.submit_complaint(
            _valid(), AttachmentUpload(content=b"img", filename="a.png")
        )

    assert list(storage.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_submit_uses_configured_prefix(complaints, timeline, storage):
    service = ComplaintService(complaints, timeline, storage, id_prefix="MUN")
    complaint = await service.submit_complaint(_valid())
    assert complaint.complaint_id.startswith("MUN-")


# ── Lookup ───────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_get_complaint_not_found(service):
    with pytest.raises(EntityNotFoundError):
        await service.get_complaint("CCH-2024-0000000000")


@pytest.mark.asyncio
async def test_get_complaint_returns_timeline_in_order(service):
    created = await service.submit_complaint(_valid())
    await service.update_status(created.complaint_id, TimelineUpdate(status="In Progress"))
    await service.update_status(created.complaint_id, TimelineUpdate(status="Resolved"))

    found = await service.get_complaint(created.complaint_id)

    assert found.complaint.status == "Resolved"
    assert [e.status for e in found.timeline] == [
        "Complaint Registered",
        "In Progress",
        "Resolved",
    ]


# ── Status updates ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_update_status_defaults_to_updated(service):
    created = await service.submit_complaint(_valid())

    result = await service.update_status(created.complaint_id)

    assert result.status_applied is True
    assert result.event.status == "Updated"
    assert result.event.note is None
    assert (await service.get_complaint(created.complaint_id)).complaint.status == "Updated"


@pytest.mark.asyncio
async def test_update_status_blank_status_falls_back_to_default(service):
    created = await service.submit_complaint(_valid())
    result = await service.update_status(
        created.complaint_id, TimelineUpdate(status="  ", note="checked")
    )
    assert result.event.status == "Updated"
    assert result.event.note == "checked"


@pytest.mark.asyncio
async def test_update_status_for_unknown_complaint_records_event_only(service, timeline):
    result = await service.update_status(
        "CCH-2024-0000000000", TimelineUpdate(status="Resolved", note="fixed")
    )

    assert result.status_applied is False
    assert result.event.complaint_id == "CCH-2024-0000000000"
    assert len(timeline.events) == 1


@pytest.mark.asyncio
async def test_update_status_commits_both_writes(complaints, timeline, storage):
    commits = []

    async def commit():
        commits.append(timeline.events[-1].status)

    service = ComplaintService(complaints, timeline, storage, commit=commit)
    created = await service.submit_complaint(_valid())

    await service.update_status(created.complaint_id, TimelineUpdate(status="Resolved"))

    assert commits == ["Complaint Registered", "Resolved"]
    assert (await complaints.get_by_complaint_id(created.complaint_id)).status == "Resolved"


@pytest.mark.asyncio
async def test_update_status_propagates_commit_failure(service, complaints, timeline, storage):
    created = await service.submit_complaint(_valid())

    async def commit():
        raise RuntimeError("database is locked")

    failing = ComplaintService(complaints, timeline, storage, commit=commit)

    with pytest.raises(RuntimeError, match="database is locked"):
        await failing.update_status(created.complaint_id, TimelineUpdate(status="Resolved"))
