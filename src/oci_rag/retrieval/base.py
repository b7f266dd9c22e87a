"""Abstract base class for vector-store backends.

Adding a new backend only requires subclassing :class:`VectorStoreBase`
and implementing the four abstract methods.  The workflows are
backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from oci_rag.models import Embedding, SearchRequest


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    table_name:
        Logical name of the table / collection holding the embeddings.
    dimensions:
        Number of dimensions of every stored vector.
    """

    def __init__(self, table_name: str, dimensions: int) -> None:
        if dimensions < 1:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self.table_name = table_name
        self.dimensions = dimensions

    @abstractmethod
    def create_table_if_not_exists(self) -> None:
        """Create the backing table when it does not exist yet."""
        ...

    @abstractmethod
    def add_all(self, embeddings: list[Embedding]) -> None:
        """Persist *embeddings*.  An empty list is a no-op."""
        ...

    @abstractmethod
    def search(self, request: SearchRequest) -> list[Embedding]:
        """Return stored embeddings similar to ``request.vector``.

        Results are ordered by decreasing similarity, hold at most
        ``request.max_results`` items, and each carries a ``score`` of at
        least ``request.min_score``.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    def _check_dimensions(self, embeddings: list[Embedding]) -> None:
        for i, embedding in enumerate(embeddings):
            if len(embedding.vector) != self.dimensions:
                raise ValueError(
                    f"Embedding {i} has {len(embedding.vector)} dimensions, "
                    f"table {self.table_name!r} expects {self.dimensions}"
                )
