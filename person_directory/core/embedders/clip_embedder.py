"""
Local CLIP embedding through sentence-transformers.
"""
import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from .base import BaseEmbeddingModel

logger = logging.getLogger(__name__)

class ClipEmbeddingModel(BaseEmbeddingModel):
    """CLIP image encoder loaded once and kept in memory."""

    def __init__(self, model_name: str = "clip-ViT-B-32", models_dir: str = "./models"):
        # Imported here: torch is only needed by the local backend
        from sentence_transformers import SentenceTransformer

        self.name = model_name
        cache_folder = Path(models_dir) / "sentence_transformers"
        self.model = SentenceTransformer(model_name, cache_folder=str(cache_folder))
        logger.info(f"✓ CLIP loaded from {cache_folder}")

    def encode_image(self, image_bytes: bytes) -> np.ndarray:
        img = Image.open(io.BytesIO(image_bytes))
        if img.mode != 'RGB':
            img = img.convert('RGB')
        return np.asarray(self.model.encode(img, normalize_embeddings=True), dtype=np.float32)
