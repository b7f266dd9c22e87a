"""
Workflow — the two RAG call sequences.

Public API
----------
- :class:`EmbeddingWorkflow` — load, split, embed, and store documents.
- :class:`ChatWorkflow` — embed a question, retrieve context, and chat.
"""

from oci_rag.workflow.chat import ChatState, ChatWorkflow
from oci_rag.workflow.embedding import EmbeddingWorkflow
from oci_rag.workflow.prompts import RAG_PROMPT_TEMPLATE

__all__ = [
    "RAG_PROMPT_TEMPLATE",
    "ChatState",
    "ChatWorkflow",
    "EmbeddingWorkflow",
]
