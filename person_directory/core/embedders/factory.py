"""
Embedding model selection.
"""
import logging
from typing import Optional

from ...config import Settings, get_settings
from .base import BaseEmbeddingModel
from .clip_embedder import ClipEmbeddingModel
from .hf_inference import HuggingFaceInferenceEmbedder

logger = logging.getLogger(__name__)

class ModelFactory:
    """Builds the configured embedding model."""

    @staticmethod
    def create_embedding_model(settings: Optional[Settings] = None) -> BaseEmbeddingModel:
        settings = settings or get_settings()
        backend = settings.embedding_backend.lower()
        logger.info(f"Loading embedding model: {backend} ({settings.embedding_model_name})")

        if backend == "hf-inference":
            if not settings.hugging_face_access_token:
                logger.warning("HUGGING_FACE_ACCESS_TOKEN is not set; inference calls may be rejected")
            return HuggingFaceInferenceEmbedder(
                model_name=settings.embedding_model_name,
                api_url=settings.inference_api_url,
                access_token=settings.hugging_face_access_token,
                timeout=settings.http_timeout
            )
        if backend == "clip":
            # sentence-transformers names the model without its organisation prefix
            model_name = settings.embedding_model_name.split("/")[-1]
            return ClipEmbeddingModel(model_name=model_name, models_dir=settings.models_dir)

        raise ValueError(f"Unknown embedding backend: {settings.embedding_backend}")
