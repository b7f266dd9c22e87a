"""
Ingestion — document loading, splitting, and embedding.

Documents are streamed out of OCI Object Storage, split into chunks and
embedded with the OCI Generative AI service before being written to the
vector store by :class:`~oci_rag.workflow.embedding.EmbeddingWorkflow`.
"""

from oci_rag.ingestion.embedder import OCIEmbeddingModel
from oci_rag.ingestion.loader import OCIDocumentLoader
from oci_rag.ingestion.splitter import LineSplitter, RecursiveSplitter, Splitter

__all__ = [
    "LineSplitter",
    "OCIDocumentLoader",
    "OCIEmbeddingModel",
    "RecursiveSplitter",
    "Splitter",
]
