import logging
import os
import time
from pathlib import Path
from typing import Optional

from school_registry.schools.exceptions import ImageStorageError

logger = logging.getLogger(__name__)


class ImageStore:
    """
    Flat directory of uploaded school images.

    Files are named ``<epoch-millis>-<original-filename>`` and are served
    publicly under ``url_prefix``.
    """

    def __init__(self, upload_dir: str, url_prefix: str):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    @staticmethod
    def build_filename(original_filename: str, now_ms: Optional[int] = None) -> str:
        # Drop any client-supplied directory components
        basename = os.path.basename(original_filename.replace("\\", "/")) or "image"
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return f"{now_ms}-{basename}"

    def public_path(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def ensure_directory(self) -> None:
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create upload directory {self.upload_dir}: {e}")
            raise ImageStorageError(f"Could not create upload directory {self.upload_dir}") from e

    def save(self, data: bytes, original_filename: str) -> str:
        """Write ``data`` and return the public path of the stored file."""
        filename = self.build_filename(original_filename)
        self.ensure_directory()
        try:
            (self.upload_dir / filename).write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to write image {filename} to {self.upload_dir}: {e}")
            raise ImageStorageError(f"Could not store image {original_filename}") from e
        logger.info(f"Stored image {filename} ({len(data)} bytes)")
        return self.public_path(filename)

    def delete(self, public_path: str) -> None:
        """Remove a previously stored file, given the path ``save`` returned."""
        filename = public_path[len(self.url_prefix) + 1:] if public_path.startswith(self.url_prefix + "/") else os.path.basename(public_path)
        try:
            (self.upload_dir / filename).unlink(missing_ok=True)
            logger.info(f"Removed image {filename}")
        except OSError as e:
            logger.error(f"Failed to remove image {filename}: {e}")
