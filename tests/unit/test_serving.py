"""Unit tests for the serving layer."""

from __future__ import annotations

from collections.abc import Iterator

import oci
import oracledb
import pytest
from fastapi.testclient import TestClient

from oci_rag.factory import build_chat_service, build_document_loader, build_embedding_model, build_vector_store
from oci_rag.serving.app import app


@pytest.fixture()
def client(vector_store, embedding_model, chat_service, document_loader) -> Iterator[TestClient]:
    app.dependency_overrides[build_vector_store] = lambda: vector_store
    app.dependency_overrides[build_embedding_model] = lambda: embedding_model
    app.dependency_overrides[build_chat_service] = lambda: chat_service
    app.dependency_overrides[build_document_loader] = lambda: document_loader
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_endpoint() -> None:
    """GET /health should return 200 with status ok."""
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_endpoint(client: TestClient, vector_store) -> None:
    assert client.get("/ready").json() == {"status": "ready"}
    vector_store.healthy = False
    assert client.get("/ready").status_code == 503


def test_ingest_endpoint(client: TestClient, vector_store) -> None:
    response = client.post("/ingest", json={"bucket_name": "bucket", "object_prefix": "docs/"})
    assert response.status_code == 200
    assert response.json() == {"chunks_stored": 4}
    assert vector_store.created is True


def test_ingest_requires_bucket(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    from oci_rag.config import settings

    monkeypatch.setattr(settings, "oci_bucket_name", "")
    assert client.post("/ingest", json={}).status_code == 422


def test_query_endpoint(client: TestClient, chat_service) -> None:
    client.post("/ingest", json={"bucket_name": "bucket", "object_prefix": "docs/"})

    response = client.post("/query", json={"query": "What is Germany famous for?", "min_score": 0.7})

    assert response.status_code == 200
    body = response.json()
    assert body["answer"] == chat_service.reply
    assert body["sources"] == ["Germany is famous for Oktoberfest."]


def test_query_rejects_empty_question(client: TestClient) -> None:
    assert client.post("/query", json={"query": ""}).status_code == 422


def test_oci_service_error_maps_to_bad_gateway(client: TestClient, embedding_model, monkeypatch) -> None:
    def fail(text: str):
        raise oci.exceptions.ServiceError(429, "TooManyRequests", {}, "Rate limit exceeded")

    monkeypatch.setattr(embedding_model, "embed", fail)
    response = client.post("/query", json={"query": "anything"})
    assert response.status_code == 502
    assert response.json() == {"detail": "Rate limit exceeded", "code": "TooManyRequests"}


def test_database_error_maps_to_service_unavailable(client: TestClient, vector_store, monkeypatch) -> None:
    def fail(request):
        raise oracledb.DatabaseError("DPY-4011: connection closed")

    monkeypatch.setattr(vector_store, "search", fail)
    assert client.post("/query", json={"query": "anything"}).status_code == 503
