"""
Embedding model interface.
"""
from abc import ABC, abstractmethod

import numpy as np


class BaseEmbeddingModel(ABC):
    """Computes a feature-vector embedding for an image."""

    name: str

    @abstractmethod
    def encode_image(self, image_bytes: bytes) -> np.ndarray:
        """Return a 1-D embedding for the encoded image bytes."""
