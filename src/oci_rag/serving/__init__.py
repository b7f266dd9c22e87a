"""
Serving — FastAPI application for ingestion and RAG chat.

Run locally with ``uvicorn oci_rag.serving.app:app``.
"""
