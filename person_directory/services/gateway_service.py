"""
Image search gateway.
"""
import logging
from typing import Callable, List, Optional

from ..core.embedders.base import BaseEmbeddingModel
from ..core.exceptions import GatewayError
from ..core.records import PersonRecord
from ..core.store.base import DirectoryStore
from ..utils.image_utils import fetch_image_bytes

logger = logging.getLogger(__name__)

ImageFetcher = Callable[[str], bytes]

class ImageSearchGateway:
    """
    Resolves an image URL to candidate persons.

    Similarity ranking is not implemented. The embedding is computed, so the
    inference call and its latency stay in the request path, and then
    discarded; the result is the first page of persons in insertion order
    regardless of the image.
    """

    def __init__(
        self,
        store: DirectoryStore,
        embedding_model: BaseEmbeddingModel,
        fetch_image: Optional[ImageFetcher] = None,
        result_limit: int = 10
    ):
        self.store = store
        self.embedding_model = embedding_model
        self.fetch_image = fetch_image or fetch_image_bytes
        self.result_limit = result_limit

    def search(self, image_url: str) -> List[PersonRecord]:
        """
        Run an image search.

        Args:
            image_url: Publicly resolvable URL of the query image

        Returns:
            At most ``result_limit`` persons

        Raises:
            GatewayError: Image fetch, inference or store read failed
        """
        try:
            logger.info(f"Image search request for {image_url}")
            image_bytes = self.fetch_image(image_url)
            embedding = self.embedding_model.encode_image(image_bytes)

            # Placeholder: the embedding does not take part in selecting results
            logger.debug(
                f"Discarding {self.embedding_model.name} embedding of size {embedding.size}"
            )

            results = self.store.list_persons(self.result_limit)
            logger.info(f"Image search returning {len(results)} persons")
            return results
        except Exception as e:
            logger.error(f"Error in image search gateway: {e}", exc_info=True)
            raise GatewayError(str(e)) from e
