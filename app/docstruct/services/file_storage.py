"""
Local disk storage for uploaded files.

Files are written under the upload directory as ``<epoch-millis>-<name>``
and addressed by the public URL ``/uploads/<stored name>``.
"""

import logging
import os
import time
from pathlib import Path

from ..models_db import FileType
from .exceptions import UnsupportedFileTypeError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


class FileStorage:
    """Stores raw upload bytes on disk."""

    def __init__(self, upload_dir: str | Path):
        self.upload_dir = Path(upload_dir)

    def ensure_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, stored_name: str) -> Path:
        path = (self.upload_dir / stored_name).resolve()
        # Prevent path traversal
        if path.parent != self.upload_dir.resolve():
            raise ValueError(f"Invalid file name: {stored_name!r}")
        return path

    def save(self, original_name: str, content: bytes) -> str:
        """
        Write bytes under a timestamped name.

        Args:
            original_name: Name of the file as uploaded by the client.
            content: Raw file bytes.

        Returns:
            Public URL of the stored file.

        Raises:
            ValueError: If the name cannot be stored inside the upload directory.
            OSError: If the file cannot be written.
        """
        base_name = os.path.basename(original_name.replace("\\", "/"))
        if not base_name:
            raise ValueError("Empty file name")

        stored_name = f"{int(time.time() * 1000)}-{base_name}"
        path = self._path_for(stored_name)

        self.ensure_dir()
        path.write_bytes(content)
        logger.info("Stored %d bytes as %s", len(content), stored_name)
        return f"{UPLOADS_URL_PREFIX}/{stored_name}"

    def resolve(self, file_url: str) -> Path | None:
        """Map a stored file URL to an existing path, or None if the file is gone."""
        stored_name = file_url.rsplit("/", 1)[-1]
        try:
            path = self._path_for(stored_name)
        except ValueError:
            return None
        return path if path.is_file() else None

    def delete(self, file_url: str) -> None:
        path = self.resolve(file_url)
        if path is not None:
            path.unlink(missing_ok=True)
            logger.info("Removed stored file %s", path.name)


FILE_TYPES_BY_EXTENSION = {
    ".pdf": FileType.PDF,
    ".docx": FileType.DOCX,
}

MEDIA_TYPES_BY_EXTENSION = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def file_type_from_name(filename: str) -> FileType:
    """
    Determine the file type from a file name's extension, case-insensitively.

    Raises:
        UnsupportedFileTypeError: For anything but .pdf and .docx.
    """
    extension = Path(filename).suffix.lower()
    try:
        return FILE_TYPES_BY_EXTENSION[extension]
    except KeyError:
        raise UnsupportedFileTypeError(extension or filename) from None


def extension_of(file_url: str) -> str:
    """Extension of a stored file without the dot, e.g. ``pdf``."""
    return Path(file_url).suffix.lower().lstrip(".")


def media_type_for(path: str | Path) -> str:
    return MEDIA_TYPES_BY_EXTENSION.get(Path(path).suffix.lower(), "application/octet-stream")
