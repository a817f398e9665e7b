import numpy as np
import pytest
import requests

from person_directory.config import Settings
from person_directory.core.embedders import HuggingFaceInferenceEmbedder, ModelFactory


class StubResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class StubSession:
    def __init__(self, response):
        self.response = response
        self.requests = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.requests.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        return self.response


def test_inference_request_carries_token_and_bytes():
    session = StubSession(StubResponse([[0.1, 0.2, 0.3]]))
    embedder = HuggingFaceInferenceEmbedder(
        "sentence-transformers/clip-ViT-B-32",
        api_url="https://inference.example/models/",
        access_token="hf_secret",
        timeout=5,
        session=session,
    )

    vector = embedder.encode_image(b"\xff\xd8jpeg")

    assert vector.shape == (3,)
    assert np.allclose(vector, [0.1, 0.2, 0.3])
    sent = session.requests[0]
    assert sent["url"] == "https://inference.example/models/sentence-transformers/clip-ViT-B-32"
    assert sent["data"] == b"\xff\xd8jpeg"
    assert sent["headers"]["Authorization"] == "Bearer hf_secret"
    assert sent["timeout"] == 5


def test_inference_http_error_propagates():
    embedder = HuggingFaceInferenceEmbedder(
        "m", api_url="https://inference.example", session=StubSession(StubResponse({}, status_code=503))
    )
    with pytest.raises(requests.HTTPError):
        embedder.encode_image(b"x")


def test_inference_error_payload_rejected():
    embedder = HuggingFaceInferenceEmbedder(
        "m", api_url="https://inference.example", session=StubSession(StubResponse({"error": "loading"}))
    )
    with pytest.raises(ValueError, match="loading"):
        embedder.encode_image(b"x")


def test_factory_builds_remote_backend_by_default(settings):
    model = ModelFactory.create_embedding_model(settings)

    assert isinstance(model, HuggingFaceInferenceEmbedder)
    assert model.name == "sentence-transformers/clip-ViT-B-32"


def test_factory_rejects_unknown_backend(tmp_path):
    settings = Settings(
        database_url="sqlite://",
        storage_dir=str(tmp_path / "storage"),
        log_dir=str(tmp_path / "logs"),
        embedding_backend="nope",
    )
    with pytest.raises(ValueError, match="nope"):
        ModelFactory.create_embedding_model(settings)

