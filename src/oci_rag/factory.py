"""Build the RAG components from :data:`oci_rag.config.settings`.

SDK clients and the connection pool are created once per process and
shared; chat services are created per conversation because they hold
history.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from oci_rag.chat.service import OCIChatService
from oci_rag.clients import get_genai_client, get_object_storage_client, load_oci_config, serving_mode_for
from oci_rag.config import settings
from oci_rag.ingestion.embedder import OCIEmbeddingModel
from oci_rag.ingestion.loader import OCIDocumentLoader

if TYPE_CHECKING:
    from oci.generative_ai_inference import GenerativeAiInferenceClient

    from oci_rag.retrieval.oracle_store import OracleVectorStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def oci_config() -> dict[str, Any]:
    return load_oci_config()


@lru_cache(maxsize=1)
def genai_client() -> GenerativeAiInferenceClient:
    return get_genai_client(oci_config())


@lru_cache(maxsize=1)
def build_vector_store() -> OracleVectorStore:
    """Oracle vector store on a shared connection pool."""
    from oci_rag.retrieval.oracle_store import OracleVectorStore, create_pool

    pool = create_pool(settings.db_user, settings.db_password, settings.db_dsn)
    return OracleVectorStore(pool, settings.vector_table, settings.vector_dimensions)


@lru_cache(maxsize=1)
def build_embedding_model() -> OCIEmbeddingModel:
    return OCIEmbeddingModel(
        genai_client(),
        model_id=settings.oci_embedding_model_id,
        compartment_id=settings.oci_compartment,
    )


@lru_cache(maxsize=1)
def build_document_loader() -> OCIDocumentLoader:
    return OCIDocumentLoader(get_object_storage_client(oci_config()), settings.oci_namespace)


def build_chat_service() -> OCIChatService:
    """A fresh chat service, i.e. a new conversation."""
    logger.debug("Creating %s chat service for %s", settings.inference_request_type, settings.oci_chat_model_id)
    return OCIChatService(
        genai_client(),
        serving_mode_for(settings.oci_chat_model_id),
        settings.oci_compartment,
        inference_request_type=settings.inference_request_type,
    )
