"""Ingestion workflow — load, split, embed, and store documents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oci_rag.ingestion.embedder import OCIEmbeddingModel
    from oci_rag.ingestion.loader import OCIDocumentLoader
    from oci_rag.ingestion.splitter import Splitter
    from oci_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class EmbeddingWorkflow:
    """Stream documents from Object Storage into the vector store.

    Parameters
    ----------
    vector_store:
        Destination for the embeddings.
    embedding_model:
        Model used to embed every chunk.
    document_loader:
        Object Storage loader bound to a namespace.
    bucket_name:
        Bucket to read from.
    object_prefix:
        Prefix (or exact object name) selecting the documents.
    splitter:
        Breaks each document into chunks.
    """

    def __init__(
        self,
        vector_store: VectorStoreBase,
        embedding_model: OCIEmbeddingModel,
        document_loader: OCIDocumentLoader,
        bucket_name: str,
        object_prefix: str,
        splitter: Splitter,
    ) -> None:
        self.vector_store = vector_store
        self.embedding_model = embedding_model
        self.document_loader = document_loader
        self.bucket_name = bucket_name
        self.object_prefix = object_prefix
        self.splitter = splitter

    def run(self) -> int:
        """Run the workflow and return the number of chunks stored."""
        stored = 0
        documents = self.document_loader.stream_documents(self.bucket_name, self.object_prefix)
        for document in documents:
            chunks = self.splitter.split(document.page_content)
            if not chunks:
                logger.info("Skipping %s: no content", document.metadata.get("source", "?"))
                continue
            embeddings = self.embedding_model.embed_all(chunks)
            self.vector_store.add_all(embeddings)
            stored += len(embeddings)
            logger.info("Embedded %d chunk(s) from %s", len(embeddings), document.metadata.get("source", "?"))
        logger.info("Ingestion finished: %d chunk(s) stored", stored)
        return stored
