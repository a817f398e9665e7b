from fastapi.testclient import TestClient

from person_directory.core.records import IMAGE_QUERY_MARKER, SearchType
from person_directory.main import create_app

from conftest import FakeEmbeddingModel, RecordingStore, temp_objects


def test_text_search_returns_matches_and_logs_once(client, store):
    store.insert_person({"name": "Alice", "phone_number": "555-1111"})
    store.insert_person({"name": "Bob", "email": "bob@example.com"})

    response = client.get("/search/text", params={"q": "ALI"})

    assert response.status_code == 200
    assert [r["name"] for r in response.json()["results"]] == ["Alice"]
    logs = store.recent_search_logs(10)
    assert [(entry.type, entry.query) for entry in logs] == [(SearchType.TEXT, "ALI")]


def test_text_search_logs_even_without_results(client, store):
    response = client.get("/search/text", params={"q": "999"})

    assert response.status_code == 200
    assert response.json() == {"results": []}
    assert store.calls.count("insert_search_log") == 1
    assert store.count_search_logs() == 1


def test_empty_term_returns_everything(client, store):
    store.insert_person({"name": "Alice"})
    store.insert_person({"name": "Bob"})

    response = client.get("/search/text")

    assert [r["name"] for r in response.json()["results"]] == ["Alice", "Bob"]


def test_log_failure_is_not_surfaced(settings, blob_store, fetcher):
    store = RecordingStore(fail_on={"insert_search_log"})
    client = TestClient(create_app(
        settings, store=store, blob_store=blob_store,
        embedding_model=FakeEmbeddingModel(), fetch_image=fetcher,
    ))

    response = client.get("/search/text", params={"q": "a"})

    assert response.status_code == 200
    assert store.calls.count("insert_search_log") == 1


def test_store_failure_is_reported(settings, blob_store, fetcher):
    store = RecordingStore(fail_on={"search_persons"})
    client = TestClient(create_app(
        settings, store=store, blob_store=blob_store,
        embedding_model=FakeEmbeddingModel(), fetch_image=fetcher,
    ))

    response = client.get("/search/text", params={"q": "a"})

    assert response.status_code == 500
    assert response.json()["detail"] == "search_persons unavailable"
    assert "insert_search_log" not in store.calls


def test_image_search_returns_at_most_ten_and_cleans_up(client, store, blob_store, fetcher, jpeg_bytes):
    for i in range(13):
        store.insert_person({"name": f"Person {i}"})

    response = client.post("/search/image", files={"file": ("query.jpg", jpeg_bytes, "image/jpeg")})

    assert response.status_code == 200
    assert len(response.json()["results"]) == 10
    assert len(fetcher.urls) == 1
    assert "/temp/" in fetcher.urls[0]
    assert not blob_store.exists(blob_store.key_from_url(fetcher.urls[0]))
    assert temp_objects(blob_store) == []

    logs = store.recent_search_logs(10)
    assert [(entry.type, entry.query) for entry in logs] == [(SearchType.IMAGE, IMAGE_QUERY_MARKER)]


def test_image_search_cleans_up_when_gateway_fails(settings, store, blob_store, fetcher, jpeg_bytes):
    client = TestClient(create_app(
        settings, store=store, blob_store=blob_store,
        embedding_model=FakeEmbeddingModel(fail=True), fetch_image=fetcher,
    ))

    response = client.post("/search/image", files={"file": ("query.jpg", jpeg_bytes, "image/jpeg")})

    assert response.status_code == 502
    assert "inference service unavailable" in response.json()["detail"]
    assert len(fetcher.urls) == 1
    assert temp_objects(blob_store) == []
    assert "insert_search_log" not in store.calls


def test_image_search_rejects_invalid_upload(client, store, fetcher):
    response = client.post("/search/image", files={"file": ("query.jpg", b"not an image", "image/jpeg")})

    assert response.status_code == 400
    assert fetcher.urls == []
    assert "insert_search_log" not in store.calls


def test_percent_term_over_http(client, store):
    store.insert_person({"name": "Discount", "address": "50% Street"})
    store.insert_person({"name": "Other", "address": "500 Street"})

    response = client.get("/search/text", params={"q": "50%"})

    assert [r["name"] for r in response.json()["results"]] == ["Discount"]


def test_long_term_is_searched_not_rejected(client, store):
    long_address = "Flat 4, " + "a" * 300
    store.insert_person({"name": "Long", "address": long_address})

    miss = client.get("/search/text", params={"q": "b" * 300})
    hit = client.get("/search/text", params={"q": "a" * 300})

    assert miss.status_code == 200
    assert miss.json() == {"results": []}
    assert [r["name"] for r in hit.json()["results"]] == ["Long"]


def test_image_search_log_failure_is_not_surfaced(settings, blob_store, fetcher, jpeg_bytes):
    store = RecordingStore(fail_on={"insert_search_log"})
    store.insert_person({"name": "Alice"})
    client = TestClient(create_app(
        settings, store=store, blob_store=blob_store,
        embedding_model=FakeEmbeddingModel(), fetch_image=fetcher,
    ))

    response = client.post("/search/image", files={"file": ("query.jpg", jpeg_bytes, "image/jpeg")})

    assert response.status_code == 200
    assert [r["name"] for r in response.json()["results"]] == ["Alice"]
    assert store.calls.count("insert_search_log") == 1
    assert temp_objects(blob_store) == []
