"""FastAPI application exposing ingestion and RAG chat over HTTP."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import oci
import oracledb
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from oci_rag.chat.service import OCIChatService
from oci_rag.config import settings
from oci_rag.factory import (
    build_chat_service,
    build_document_loader,
    build_embedding_model,
    build_vector_store,
)
from oci_rag.ingestion.embedder import OCIEmbeddingModel
from oci_rag.ingestion.loader import OCIDocumentLoader
from oci_rag.ingestion.splitter import LineSplitter
from oci_rag.logging_config import setup_logging
from oci_rag.retrieval.base import VectorStoreBase
from oci_rag.workflow.chat import ChatWorkflow
from oci_rag.workflow.embedding import EmbeddingWorkflow

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    setup_logging(settings.log_level)
    yield


app = FastAPI(
    title="OCI GenAI RAG API",
    version="0.1.0",
    description="Ingest Object Storage documents into Oracle Database and chat over them.",
    lifespan=lifespan,
)


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """Which objects to ingest; defaults come from settings."""

    bucket_name: str | None = None
    object_prefix: str | None = None


class IngestResponse(BaseModel):
    chunks_stored: int


class QueryRequest(BaseModel):
    """Incoming question from the user."""

    query: str = Field(min_length=1)
    min_score: float | None = Field(default=None, ge=0.0, le=1.0)


class QueryResponse(BaseModel):
    """Answer returned by the chat workflow."""

    answer: str
    sources: list[str] = []


# ── Error handlers ────────────────────────────────────────────────────
@app.exception_handler(oci.exceptions.ServiceError)
async def oci_service_error(_: Request, exc: oci.exceptions.ServiceError) -> JSONResponse:
    logger.error("OCI call failed: %s %s", exc.status, exc.code)
    return JSONResponse(status_code=502, content={"detail": exc.message, "code": exc.code})


@app.exception_handler(oracledb.Error)
async def database_error(_: Request, exc: oracledb.Error) -> JSONResponse:
    logger.error("Database call failed: %s", exc)
    return JSONResponse(status_code=503, content={"detail": "Vector store unavailable"})


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/ready")
def ready(vector_store: VectorStoreBase = Depends(build_vector_store)) -> dict[str, str]:
    """Readiness probe — checks the vector store."""
    if not vector_store.health_check():
        raise HTTPException(status_code=503, detail="Vector store unavailable")
    return {"status": "ready"}


@app.post("/ingest", response_model=IngestResponse)
def ingest(
    request: IngestRequest,
    vector_store: VectorStoreBase = Depends(build_vector_store),
    embedding_model: OCIEmbeddingModel = Depends(build_embedding_model),
    document_loader: OCIDocumentLoader = Depends(build_document_loader),
) -> IngestResponse:
    """Load, split, embed, and store documents from Object Storage."""
    bucket_name = request.bucket_name or settings.oci_bucket_name
    if not bucket_name:
        raise HTTPException(status_code=422, detail="bucket_name is required")
    vector_store.create_table_if_not_exists()
    workflow = EmbeddingWorkflow(
        vector_store=vector_store,
        embedding_model=embedding_model,
        document_loader=document_loader,
        bucket_name=bucket_name,
        object_prefix=request.object_prefix if request.object_prefix is not None else settings.oci_object_prefix,
        splitter=LineSplitter(),
    )
    return IngestResponse(chunks_stored=workflow.run())


@app.post("/query", response_model=QueryResponse)
def query(
    request: QueryRequest,
    vector_store: VectorStoreBase = Depends(build_vector_store),
    embedding_model: OCIEmbeddingModel = Depends(build_embedding_model),
    chat_service: OCIChatService = Depends(build_chat_service),
) -> QueryResponse:
    """Answer the question with context retrieved from the vector store."""
    workflow = ChatWorkflow(
        vector_store=vector_store,
        chat_service=chat_service,
        embedding_model=embedding_model,
        min_score=settings.min_score if request.min_score is None else request.min_score,
        max_results=settings.max_results,
    )
    result = workflow.invoke(request.query)
    return QueryResponse(
        answer=result["answer"],
        sources=[r.content for r in result.get("results", [])],
    )
