from .base import BaseEmbeddingModel
from .factory import ModelFactory
from .hf_inference import HuggingFaceInferenceEmbedder

__all__ = ["BaseEmbeddingModel", "HuggingFaceInferenceEmbedder", "ModelFactory"]
