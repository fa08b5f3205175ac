"""Local filesystem storage for complaint attachments.

Storage layout:
    <upload_dir>/<uuid4 hex><.ext>    uploaded attachments

The stored name is assigned here and never derived from the uploader's
file name, apart from a sanitised extension.
"""

import logging
import mimetypes
import re
import uuid
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_SUFFIX_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass
class StoredFile:
    """Result of storing a single file on disk."""

    stored_path: str
    filename: str
    original_filename: str
    file_size: int
    mime_type: str


def _safe_suffix(filename: str) -> str:
    """Return the lower-cased extension of ``filename`` if it is a plain one."""
    suffix = Path(filename).suffix
    return suffix.lower() if _SUFFIX_RE.match(suffix) else ""


class LocalFileStorage:
    """Infrastructure adapter for local attachment storage."""

    def __init__(self, upload_dir: str):
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    async def store_file(self, content: bytes, filename: str) -> StoredFile:
        """Store an uploaded attachment under a storage-assigned name."""
        stored_name = f"{uuid.uuid4().hex}{_safe_suffix(filename)}"
        dest_path = self._upload_dir / stored_name
        dest_path.write_bytes(content)

        mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        logger.info(
            "Stored attachment '%s' as %s (%d bytes)", filename, stored_name, len(content)
        )

        return StoredFile(
            stored_path=str(dest_path),
            filename=stored_name,
            original_filename=filename,
            file_size=len(content),
            mime_type=mime_type,
        )

    def resolve(self, filename: str) -> Path | None:
        """Return the path of a stored file, or None if it is not a stored file.

        Only plain names directly inside the upload directory resolve.
        """
        if not filename or Path(filename).name != filename or filename.startswith("."):
            return None
        file_path = self._upload_dir / filename
        if not file_path.is_file():
            return None
        return file_path

    async def delete_file(self, filename: str) -> bool:
        """Delete a stored file. Returns True if deleted, False if not found."""
        file_path = self.resolve(filename)
        if file_path is None:
            return False

        file_path.unlink(missing_ok=True)
        logger.info("Deleted attachment from disk: %s", filename)
        return True
