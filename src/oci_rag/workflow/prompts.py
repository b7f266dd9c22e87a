"""Prompt template for the retrieval-augmented chat call.

Keeping the template in one place makes it easy to audit and swap.
"""

from __future__ import annotations

from oci_rag.models import Embedding

# https://smith.langchain.com/hub/rlm/rag-prompt
RAG_PROMPT_TEMPLATE = """\
You are an assistant for question-answering tasks. Use the following pieces of retrieved context \
to answer the question. If you don't know the answer, just say that you don't know. \
Use three sentences maximum and keep the answer concise.
Question: {question}
Context: {context}
Answer:
"""

NO_CONTEXT = "No additional context was provided."


def format_context(results: list[Embedding]) -> str:
    """Join the retrieved chunks, or explain that nothing was found."""
    if not results:
        return NO_CONTEXT
    return ", ".join(r.content for r in results)


def build_prompt(template: str, question: str, results: list[Embedding]) -> str:
    """Fill *template*'s ``{question}`` and ``{context}`` placeholders."""
    return template.format(question=question, context=format_context(results))
