"""Shared pytest configuration and fixtures.

The fakes below stand in for the OCI services and Oracle Database so the
workflows and the serving layer can be tested without credentials.
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import pytest
from langchain_core.documents import Document

from oci_rag.models import Embedding, SearchRequest
from oci_rag.retrieval.base import VectorStoreBase

# Each known word is one dimension; the last dimension keeps vectors non-zero.
VOCABULARY = ("germany", "oktoberfest", "beer", "france", "wine", "paris")
DIMENSIONS = len(VOCABULARY) + 1


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    return dot / (math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b)))


class FakeVectorStore(VectorStoreBase):
    """In-memory store with exact cosine search."""

    def __init__(self, dimensions: int = DIMENSIONS, healthy: bool = True) -> None:
        super().__init__("fake_store", dimensions)
        self.rows: list[Embedding] = []
        self.requests: list[SearchRequest] = []
        self.created = False
        self.healthy = healthy

    def create_table_if_not_exists(self) -> None:
        self.created = True

    def add_all(self, embeddings: list[Embedding]) -> None:
        self._check_dimensions(embeddings)
        self.rows.extend(embeddings)

    def search(self, request: SearchRequest) -> list[Embedding]:
        self.requests.append(request)
        scored = [row.model_copy(update={"score": _cosine(row.vector, request.vector)}) for row in self.rows]
        hits = [row for row in scored if row.score >= request.min_score]
        hits.sort(key=lambda row: row.score, reverse=True)
        return hits[: request.max_results]

    def health_check(self) -> bool:
        return self.healthy


class FakeEmbeddingModel:
    """Bag-of-words embeddings over :data:`VOCABULARY`."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def embed(self, text: str) -> Embedding:
        return self.embed_all([text])[0]

    def embed_all(self, texts: list[str]) -> list[Embedding]:
        self.calls.append(list(texts))
        return [Embedding(content=t, vector=self._vector(t)) for t in texts]

    @staticmethod
    def _vector(text: str) -> list[float]:
        lowered = text.lower()
        return [float(word in lowered) for word in VOCABULARY] + [1.0]


class FakeChatService:
    """Records prompts and answers with a canned reply."""

    def __init__(self, reply: str = "Germany is famous for Oktoberfest.") -> None:
        self.reply = reply
        self.prompts: list[str] = []

    def chat(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


class FakeDocumentLoader:
    """Serves in-memory texts keyed by object name."""

    def __init__(self, objects: dict[str, str]) -> None:
        self.objects = objects
        self.namespace = "fake-namespace"

    def stream_documents(self, bucket_name: str, object_prefix: str = "") -> Iterator[Document]:
        for name, text in self.objects.items():
            if name.startswith(object_prefix):
                yield Document(page_content=text, metadata={"source": f"oci://{bucket_name}@fake/{name}"})


SAMPLE_OBJECTS = {
    "docs/germany.txt": "Germany is famous for Oktoberfest.\n\nOktoberfest is a beer festival in Munich.\n",
    "docs/france.txt": "France is known for wine.\nParis is the capital of France.\n",
    "other/empty.txt": "   \n\n",
}


@pytest.fixture()
def vector_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def embedding_model() -> FakeEmbeddingModel:
    return FakeEmbeddingModel()


@pytest.fixture()
def chat_service() -> FakeChatService:
    return FakeChatService()


@pytest.fixture()
def document_loader() -> FakeDocumentLoader:
    return FakeDocumentLoader(dict(SAMPLE_OBJECTS))
