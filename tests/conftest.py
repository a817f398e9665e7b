import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from person_directory.config import Settings
from person_directory.core.embedders.base import BaseEmbeddingModel
from person_directory.core.exceptions import QueryError
from person_directory.core.store import LocalBlobStore, SqlDirectoryStore, create_store_engine
from person_directory.main import create_app
from person_directory.services.gateway_service import ImageSearchGateway
from person_directory.services.upload_service import UploadPipeline


class RecordingStore(SqlDirectoryStore):
    """SQL store on in-memory SQLite that records calls and fails on demand."""

    def __init__(self, fail_on=()):
        super().__init__(create_store_engine("sqlite://"))
        self.fail_on = set(fail_on)
        self.calls = []

    def _track(self, operation):
        self.calls.append(operation)
        if operation in self.fail_on:
            raise QueryError(f"{operation} unavailable")

    def search_persons(self, term):
        self._track("search_persons")
        return super().search_persons(term)

    def list_persons(self, limit):
        self._track("list_persons")
        return super().list_persons(limit)

    def insert_person(self, values):
        self._track("insert_person")
        return super().insert_person(values)

    def count_persons(self):
        self._track("count_persons")
        return super().count_persons()

    def insert_search_log(self, query, search_type):
        self._track("insert_search_log")
        return super().insert_search_log(query, search_type)

    def count_search_logs(self):
        self._track("count_search_logs")
        return super().count_search_logs()

    def recent_search_logs(self, limit):
        self._track("recent_search_logs")
        return super().recent_search_logs(limit)


class FakeEmbeddingModel(BaseEmbeddingModel):
    name = "fake-clip"

    def __init__(self, fail=False):
        self.fail = fail
        self.inputs = []

    def encode_image(self, image_bytes):
        self.inputs.append(image_bytes)
        if self.fail:
            raise RuntimeError("inference service unavailable")
        return np.ones(512, dtype=np.float32)


class BlobFetcher:
    """Resolves public URLs straight from the local blob store."""

    def __init__(self, blob_store):
        self.blob_store = blob_store
        self.urls = []

    def __call__(self, url):
        self.urls.append(url)
        return self.blob_store.download(self.blob_store.key_from_url(url))


def make_jpeg(size=(64, 64), color=(200, 120, 40)):
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, "JPEG")
    return buf.getvalue()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        storage_dir=str(tmp_path / "storage"),
        log_dir=str(tmp_path / "logs"),
        public_base_url="http://testserver",
    )


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def blob_store(settings):
    return LocalBlobStore(str(settings.bucket_dir), settings.public_storage_url)


@pytest.fixture
def embedding_model():
    return FakeEmbeddingModel()


@pytest.fixture
def fetcher(blob_store):
    return BlobFetcher(blob_store)


@pytest.fixture
def upload_pipeline(blob_store):
    return UploadPipeline(blob_store, temp_prefix="temp")


@pytest.fixture
def gateway(store, embedding_model, fetcher):
    return ImageSearchGateway(store, embedding_model, fetch_image=fetcher, result_limit=10)


@pytest.fixture
def jpeg_bytes():
    return make_jpeg()


@pytest.fixture
def client(settings, store, blob_store, embedding_model, fetcher):
    app = create_app(
        settings,
        store=store,
        blob_store=blob_store,
        embedding_model=embedding_model,
        fetch_image=fetcher,
    )
    return TestClient(app)


def temp_objects(blob_store):
    temp_dir = blob_store.bucket_dir / "temp"
    if not temp_dir.exists():
        return []
    return sorted(p.name for p in temp_dir.iterdir())
