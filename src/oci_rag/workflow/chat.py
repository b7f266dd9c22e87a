"""Chat workflow — retrieval-augmented question answering as a LangGraph.

Graph topology::

    embed_question → retrieve → build_prompt → chat → [ END ]

1. **embed_question** — embed the raw user question.
2. **retrieve** — query the vector store with the question's embedding.
3. **build_prompt** — fill the prompt template with the question and
   the retrieved chunks (or a "no context" note).
4. **chat** — call the chat service with the enriched prompt.

Node contract
-------------
* Accepts the full :class:`ChatState` dict.
* Returns a *partial* dict with **only the keys that changed**.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypedDict

from langgraph.graph import END, StateGraph

from oci_rag.models import Embedding, SearchRequest
from oci_rag.workflow.prompts import RAG_PROMPT_TEMPLATE, build_prompt

if TYPE_CHECKING:
    from oci_rag.chat.service import OCIChatService
    from oci_rag.ingestion.embedder import OCIEmbeddingModel
    from oci_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class ChatState(TypedDict, total=False):
    """State flowing through the chat graph.

    Attributes
    ----------
    question:
        The raw user question.
    embedding:
        The question's embedding.
    results:
        Chunks returned by the vector store, most similar first.
    prompt:
        The content-enriched prompt sent to the chat model.
    answer:
        The chat model's response text.
    """

    question: str
    embedding: Embedding
    results: list[Embedding]
    prompt: str
    answer: str


class ChatWorkflow:
    """Answer questions with context retrieved from the vector store.

    Parameters
    ----------
    vector_store:
        Store holding the document embeddings.
    chat_service:
        Chat model used for the final answer.
    embedding_model:
        Must be the model the documents were embedded with.
    prompt_template:
        Template with ``{question}`` and ``{context}`` placeholders.
    min_score:
        Minimum similarity for retrieved chunks, where 1.0 is the most
        restrictive and 0.0 the most permissive.
    max_results:
        Maximum number of chunks added to the prompt.
    """

    def __init__(
        self,
        vector_store: VectorStoreBase,
        chat_service: OCIChatService,
        embedding_model: OCIEmbeddingModel,
        *,
        prompt_template: str = RAG_PROMPT_TEMPLATE,
        min_score: float = 0.0,
        max_results: int = 5,
    ) -> None:
        self.vector_store = vector_store
        self.chat_service = chat_service
        self.embedding_model = embedding_model
        self.prompt_template = prompt_template
        self.min_score = min_score
        self.max_results = max_results
        self._graph = self._build_graph()

    def call(self, user_question: str) -> str:
        """Run the workflow and return the chat response text."""
        return self.invoke(user_question)["answer"]

    def invoke(self, user_question: str) -> ChatState:
        """Run the workflow and return the final state."""
        return self._graph.invoke({"question": user_question})

    # -- nodes ----------------------------------------------------------------

    def _embed_question(self, state: ChatState) -> dict[str, Any]:
        return {"embedding": self.embedding_model.embed(state["question"])}

    def _retrieve(self, state: ChatState) -> dict[str, Any]:
        embedding = state["embedding"]
        request = SearchRequest(
            text=embedding.content,
            vector=embedding.vector,
            max_results=self.max_results,
            min_score=self.min_score,
        )
        results = self.vector_store.search(request)
        logger.info("Retrieved %d chunk(s) for question", len(results))
        return {"results": results}

    def _build_prompt(self, state: ChatState) -> dict[str, Any]:
        prompt = build_prompt(self.prompt_template, state["question"], state.get("results", []))
        return {"prompt": prompt}

    def _chat(self, state: ChatState) -> dict[str, Any]:
        return {"answer": self.chat_service.chat(state["prompt"])}

    def _build_graph(self) -> Any:
        workflow = StateGraph(ChatState)

        workflow.add_node("embed_question", self._embed_question)
        workflow.add_node("retrieve", self._retrieve)
        workflow.add_node("build_prompt", self._build_prompt)
        workflow.add_node("chat", self._chat)

        workflow.set_entry_point("embed_question")
        workflow.add_edge("embed_question", "retrieve")
        workflow.add_edge("retrieve", "build_prompt")
        workflow.add_edge("build_prompt", "chat")
        workflow.add_edge("chat", END)

        return workflow.compile()
