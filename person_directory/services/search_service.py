"""
Search service for text and image search.
"""
import logging
from typing import List, Optional

from ..core.exceptions import QueryError
from ..core.records import PersonRecord, SearchType
from ..core.store.base import DirectoryStore
from .gateway_service import ImageSearchGateway
from .upload_service import UploadPipeline

logger = logging.getLogger(__name__)

class SearchService:
    """Service for search operations."""

    def __init__(
        self,
        store: DirectoryStore,
        upload_pipeline: UploadPipeline,
        gateway: ImageSearchGateway
    ):
        self.store = store
        self.upload_pipeline = upload_pipeline
        self.gateway = gateway

    def search_by_text(self, term: str) -> List[PersonRecord]:
        """
        Search persons by a free-text term.

        Matches the term as a case-insensitive substring of name, address,
        phone number, email or NID number. An empty term matches every person
        with at least one of those fields set.

        Args:
            term: Search term

        Returns:
            Matching persons in insertion order

        Raises:
            QueryError: The store read failed
        """
        logger.info(f"Text search query: '{term}'")
        try:
            results = self.store.search_persons(term)
        except QueryError:
            raise
        except Exception as e:
            logger.error(f"Error in text search: {e}", exc_info=True)
            raise QueryError(str(e)) from e
        logger.info(f"Text search returned {len(results)} persons")
        return results

    def search_by_image(self, contents: bytes, filename: Optional[str]) -> List[PersonRecord]:
        """
        Search persons by an uploaded image.

        The image is stored temporarily, passed to the gateway by URL and
        removed again once the gateway call finishes.

        Raises:
            UploadError: The temporary upload failed; the gateway is not called
            GatewayError: The gateway call failed
        """
        with self.upload_pipeline.temporary_upload(contents, filename) as image_url:
            return self.gateway.search(image_url)

    def log_search(self, query: str, search_type: SearchType) -> None:
        """Append a search log entry. Failures are logged and swallowed."""
        try:
            self.store.insert_search_log(query, search_type)
        except Exception as e:
            logger.warning(f"Could not record {SearchType(search_type).value} search: {e}")
