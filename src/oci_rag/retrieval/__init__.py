"""
Retrieval — vector persistence and similarity search.

The workflows only talk to :class:`VectorStoreBase`, so they never need
to know which database is backing retrieval.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend.
- :class:`OracleVectorStore` — Oracle Database 23ai backend.
- :func:`create_pool` — ``oracledb`` connection pool factory.
"""

from oci_rag.retrieval.base import VectorStoreBase

__all__ = [
    "OracleVectorStore",
    "VectorStoreBase",
    "create_pool",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import the Oracle backend to avoid pulling in oracledb at import time."""
    if name in ("OracleVectorStore", "create_pool"):
        from oci_rag.retrieval import oracle_store

        return getattr(oracle_store, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
