"""
Remote feature extraction through the Hugging Face inference API.
"""
import logging
from typing import Optional

import numpy as np
import requests

from .base import BaseEmbeddingModel

logger = logging.getLogger(__name__)

class HuggingFaceInferenceEmbedder(BaseEmbeddingModel):
    """Sends the raw image to a hosted feature-extraction model."""

    def __init__(
        self,
        model_name: str,
        api_url: str,
        access_token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        self.name = model_name
        self.endpoint = f"{api_url.rstrip('/')}/{model_name}"
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def encode_image(self, image_bytes: bytes) -> np.ndarray:
        """
        Request a feature-extraction embedding for an image.

        Args:
            image_bytes: Encoded image content

        Returns:
            Embedding as a flat float32 array

        Raises:
            requests.RequestException: The inference call failed
            ValueError: The response did not contain a numeric vector
        """
        headers = {"Content-Type": "application/octet-stream"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        logger.info(f"Requesting embedding from {self.endpoint}")
        response = self.session.post(
            self.endpoint,
            data=image_bytes,
            headers=headers,
            timeout=self.timeout
        )
        response.raise_for_status()

        payload = response.json()
        if isinstance(payload, dict) and "error" in payload:
            raise ValueError(f"Inference error: {payload['error']}")

        vector = np.asarray(payload, dtype=np.float32)
        if vector.size == 0:
            raise ValueError("Inference returned an empty embedding")
        return vector.reshape(-1)
