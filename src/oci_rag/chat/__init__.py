"""Chat — OCI Generative AI chat models with conversation history."""

from oci_rag.chat.service import InferenceRequestType, OCIChatService

__all__ = ["InferenceRequestType", "OCIChatService"]
