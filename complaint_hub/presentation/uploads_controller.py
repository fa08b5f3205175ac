"""Attachment file server: exposes stored uploads by their stored name."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from complaint_hub.infrastructure.dependencies import get_file_storage
from complaint_hub.infrastructure.storage.local_file_storage import LocalFileStorage

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.get("/{filename}")
async def download_attachment(
    filename: str,
    storage: LocalFileStorage = Depends(get_file_storage),
) -> FileResponse:
    """Return the raw bytes of a stored attachment."""
    file_path = storage.resolve(filename)
    if file_path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return FileResponse(path=str(file_path))
