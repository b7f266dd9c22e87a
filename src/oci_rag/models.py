"""Domain models exchanged between the embedding model and the vector store."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Embedding(BaseModel):
    """Text content together with its vector representation.

    Attributes
    ----------
    content:
        The embedded text chunk.
    vector:
        Dense vector produced by the embedding service.
    score:
        Cosine similarity to the query vector.  Only set on results
        returned by a vector-store search.
    """

    content: str
    vector: list[float]
    score: float | None = None

    def __str__(self) -> str:  # noqa: D105
        score = f"{self.score:.3f} " if self.score is not None else ""
        return f"{score}{self.content[:120]}"


class SearchRequest(BaseModel):
    """Similarity query passed verbatim to :meth:`VectorStoreBase.search`.

    Attributes
    ----------
    vector:
        Query embedding.
    text:
        The query text the vector was computed from (informational).
    max_results:
        Maximum number of results to return.
    min_score:
        Minimum cosine similarity, where 1.0 is the most restrictive and
        0.0 the most permissive.
    """

    vector: list[float]
    text: str | None = None
    max_results: int = Field(default=5, ge=1)
    min_score: float = Field(default=0.0, ge=0.0, le=1.0)
