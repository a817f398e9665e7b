"""
Local filesystem blob store.

Objects live under ``<storage_dir>/<bucket>/<key>`` and are served by the API
under ``/storage/<bucket>/<key>``.
"""
import logging
from pathlib import Path, PurePosixPath
from typing import Sequence

from ..exceptions import UploadError
from .base import BlobStore

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    """Blob store writing objects to a local bucket directory."""

    def __init__(self, bucket_dir: str, public_url: str):
        self.bucket_dir = Path(bucket_dir)
        self.public_url = public_url.rstrip("/")
        self.bucket_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        parts = PurePosixPath(key).parts
        if not parts or key.startswith("/") or ".." in parts:
            raise ValueError(f"Invalid object key: {key!r}")
        return self.bucket_dir.joinpath(*parts)

    def upload(self, key: str, data: bytes) -> str:
        """
        Write bytes under a new key.

        Args:
            key: Object key, may contain '/' separated prefixes
            data: Object content

        Returns:
            The stored key
        """
        try:
            path = self._path_for(key)
            path.parent.mkdir(parents=True, exist_ok=True)
            # 'xb' refuses to overwrite an existing object
            with open(path, "xb") as f:
                f.write(data)
            logger.info(f"Stored object {key} ({len(data)} bytes)")
            return key
        except FileExistsError as e:
            raise UploadError(f"Object already exists: {key}") from e
        except (OSError, ValueError) as e:
            logger.error(f"Error storing object {key}: {e}", exc_info=True)
            raise UploadError(str(e)) from e

    def get_public_url(self, key: str) -> str:
        return f"{self.public_url}/{key}"

    def key_from_url(self, url: str) -> str:
        """Inverse of get_public_url."""
        prefix = self.public_url + "/"
        if not url.startswith(prefix):
            raise ValueError(f"URL is not served by this store: {url}")
        return url[len(prefix):]

    def remove(self, keys: Sequence[str]) -> None:
        for key in keys:
            path = self._path_for(key)
            try:
                path.unlink()
                logger.info(f"Removed object {key}")
            except FileNotFoundError:
                logger.debug(f"Object {key} already absent")

    def exists(self, key: str) -> bool:
        try:
            return self._path_for(key).is_file()
        except ValueError:
            return False

    def download(self, key: str) -> bytes:
        return self._path_for(key).read_bytes()
