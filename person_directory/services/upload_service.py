"""
Upload pipeline: validate an image, store it and hand back its public URL.
"""
import logging
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

from ..core.exceptions import UploadError
from ..core.store.base import BlobStore
from ..utils.image_utils import detect_image_format, file_extension

logger = logging.getLogger(__name__)

class UploadPipeline:
    """Writes uploaded images to blob storage."""

    def __init__(
        self,
        blob_store: BlobStore,
        temp_prefix: str = "temp",
        max_upload_bytes: int = 10 * 1024 * 1024
    ):
        self.blob_store = blob_store
        self.temp_prefix = temp_prefix.strip("/")
        self.max_upload_bytes = max_upload_bytes

    def generate_key(self, filename: Optional[str], image_format: Optional[str] = None, prefix: str = "") -> str:
        """
        Build a collision-resistant storage key.

        The base name is a random UUID; the original extension is preserved.

        Args:
            filename: Original filename
            image_format: Detected format, used when the filename has no extension
            prefix: Optional key prefix (e.g. "temp")

        Returns:
            Storage key such as ``temp/3f2a...c1.jpg``
        """
        name = f"{uuid.uuid4().hex}.{file_extension(filename, image_format)}"
        return f"{prefix}/{name}" if prefix else name

    def _store(self, contents: bytes, filename: Optional[str], prefix: str = "") -> tuple:
        if not contents:
            raise UploadError("Uploaded file is empty")
        if len(contents) > self.max_upload_bytes:
            raise UploadError(
                f"Uploaded file is too large ({len(contents)} bytes, limit {self.max_upload_bytes})"
            )
        try:
            image_format = detect_image_format(contents)
        except ValueError as e:
            raise UploadError(str(e)) from e

        key = self.generate_key(filename, image_format, prefix=prefix)
        self.blob_store.upload(key, contents)
        return key, self.blob_store.get_public_url(key)

    def upload_permanent(self, contents: bytes, filename: Optional[str]) -> str:
        """
        Store an image that outlives the request (person photos).

        Returns:
            Public URL of the stored object

        Raises:
            UploadError: Invalid content or the blob write failed
        """
        key, url = self._store(contents, filename)
        logger.info(f"Uploaded photo {key}")
        return url

    @contextmanager
    def temporary_upload(self, contents: bytes, filename: Optional[str]) -> Iterator[str]:
        """
        Store an image for the duration of a ``with`` block.

        The object is removed when the block exits, whether it returned,
        raised or was cancelled.

        Yields:
            Public URL of the temporary object

        Raises:
            UploadError: Invalid content or the blob write failed; the block
                is not entered
        """
        key, url = self._store(contents, filename, prefix=self.temp_prefix)
        logger.info(f"Uploaded temporary image {key}")
        try:
            yield url
        finally:
            try:
                self.blob_store.remove([key])
            except Exception as e:
                logger.error(f"Error removing temporary image {key}: {e}", exc_info=True)
