"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_hub.config import Settings
from complaint_hub.application.services import ComplaintService
from complaint_hub.infrastructure.database.session import get_db_session
from complaint_hub.infrastructure.database.repositories import (
    SQLAlchemyComplaintRepository,
    SQLAlchemyTimelineRepository,
)
from complaint_hub.infrastructure.storage.local_file_storage import LocalFileStorage


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_file_storage(request: Request) -> LocalFileStorage:
    return request.app.state.file_storage


async def get_complaint_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
    storage: LocalFileStorage = Depends(get_file_storage),
) -> AsyncGenerator[ComplaintService, None]:
    """Provides a ComplaintService with both repositories bound to the request session.

    The service commits the session itself once a write succeeds, so the
    response is only built from committed data.
    """
    yield ComplaintService(
        complaint_repository=SQLAlchemyComplaintRepository(session),
        timeline_repository=SQLAlchemyTimelineRepository(session),
        file_storage=storage,
        id_prefix=settings.complaint_id_prefix,
        max_id_attempts=settings.complaint_id_max_attempts,
        max_attachment_bytes=settings.max_upload_size_bytes,
        commit=session.commit,
    )
