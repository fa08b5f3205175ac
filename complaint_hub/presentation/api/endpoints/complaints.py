"""Complaint endpoints: submission, lookup and timeline updates."""

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from starlette.datastructures import UploadFile

from complaint_hub.application.schemas import (
    ComplaintCreate,
    ComplaintCreatedResponse,
    ComplaintDetailSchema,
    ComplaintLookupResponse,
    ErrorResponse,
    TimelineEntrySchema,
    TimelineUpdate,
    TimelineUpdateResponse,
)
from complaint_hub.application.services import AttachmentUpload, ComplaintService
from complaint_hub.config import Settings
from complaint_hub.domain.exceptions import (
    ComplaintValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    PayloadTooLargeError,
)
from complaint_hub.infrastructure.dependencies import get_app_settings, get_complaint_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/complaints",
    tags=["Complaints"],
    responses={500: {"model": ErrorResponse}},
)


# ── Helpers ──────────────────────────────────────────────────────────

async def _read_submission(
    request: Request, settings: Settings
) -> tuple[Mapping[str, Any], AttachmentUpload | None]:
    """Pull form fields (or a JSON object) and the optional attachment from the request."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body")
        if not isinstance(payload, dict):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Expected a JSON object"
            )
        return payload, None

    form = await request.form()
    attachment = None
    upload = form.get("attachment")
    # Browsers send an empty, unnamed part when no file was chosen
    if isinstance(upload, UploadFile) and upload.filename:
        # One byte past the limit is enough to tell an oversized file apart
        content = await upload.read(settings.max_upload_size_bytes + 1)
        attachment = AttachmentUpload(content=content, filename=upload.filename)
    return form, attachment


# ── Endpoints ────────────────────────────────────────────────────────

@router.post(
    "/create",
    response_model=ComplaintCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
)
async def create_complaint(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintCreatedResponse:
    """Register a new complaint, with an optional `attachment` file."""
    payload, attachment = await _read_submission(request, settings)
    data = ComplaintCreate.model_validate(payload)

    try:
        complaint = await service.submit_complaint(data, attachment)
    except ComplaintValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PayloadTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except (DuplicateEntityError, SQLAlchemyError):
        logger.exception("Failed to register complaint")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error"
        )
    return ComplaintCreatedResponse(complaint_id=complaint.complaint_id)


@router.get(
    "/{complaint_id}",
    response_model=ComplaintLookupResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_complaint(
    complaint_id: str,
    service: ComplaintService = Depends(get_complaint_service),
) -> ComplaintLookupResponse:
    """Retrieve a complaint together with its full status timeline."""
    try:
        found = await service.get_complaint(complaint_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError:
        logger.exception("Failed to load complaint %s", complaint_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error"
        )

    return ComplaintLookupResponse(
        complaint_id=found.complaint.complaint_id,
        complaint=ComplaintDetailSchema.from_entity(found.complaint),
        timeline=[TimelineEntrySchema.from_entity(event) for event in found.timeline],
    )


@router.post("/{complaint_id}/timeline", response_model=TimelineUpdateResponse)
async def add_timeline_event(
    complaint_id: str,
    data: TimelineUpdate | None = Body(None),
    service: ComplaintService = Depends(get_complaint_service),
) -> TimelineUpdateResponse:
    """Append a status update and make it the complaint's current status."""
    try:
        result = await service.update_status(complaint_id, data)
    except SQLAlchemyError:
        logger.exception("Failed to update timeline of complaint %s", complaint_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error"
        )
    return TimelineUpdateResponse(status_applied=result.status_applied)
