"""Text embedding through the OCI Generative AI service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_core.embeddings import Embeddings
from oci.generative_ai_inference.models import EmbedTextDetails

from oci_rag.clients import serving_mode_for
from oci_rag.models import Embedding

if TYPE_CHECKING:
    from oci.generative_ai_inference import GenerativeAiInferenceClient

logger = logging.getLogger(__name__)

# The embed endpoint accepts at most 96 inputs per request.
MAX_BATCH_SIZE = 96


class OCIEmbeddingModel(Embeddings):
    """OCI GenAI embedding model.

    Also usable anywhere LangChain expects an ``Embeddings`` instance.

    Parameters
    ----------
    client:
        Generative AI inference client.
    model_id:
        Embedding model id (on-demand) or dedicated endpoint OCID.
    compartment_id:
        Compartment the requests are billed to.
    truncate:
        ``NONE``, ``START`` or ``END`` — how inputs over the model's token
        limit are shortened.
    input_type:
        Optional Cohere input type, e.g. ``SEARCH_DOCUMENT``.
    batch_size:
        Number of texts sent per request.
    """

    def __init__(
        self,
        client: GenerativeAiInferenceClient,
        model_id: str,
        compartment_id: str,
        *,
        truncate: str = "END",
        input_type: str | None = None,
        batch_size: int = MAX_BATCH_SIZE,
    ) -> None:
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}")
        self._client = client
        self.model_id = model_id
        self.compartment_id = compartment_id
        self.truncate = truncate
        self.input_type = input_type
        self.batch_size = batch_size
        self._serving_mode = serving_mode_for(model_id)

    def embed(self, text: str) -> Embedding:
        """Embed a single text."""
        return self.embed_all([text])[0]

    def embed_all(self, texts: list[str]) -> list[Embedding]:
        """Embed *texts* in batches, preserving their order."""
        vectors = self.embed_documents(texts)
        return [Embedding(content=t, vector=v) for t, v in zip(texts, vectors)]

    # -- LangChain Embeddings -------------------------------------------------

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for start in range(0, len(texts), self.batch_size):
            batch = texts[start : start + self.batch_size]
            vectors.extend(self._embed_batch(batch))
        if texts:
            logger.debug("Embedded %d text(s) with %s", len(texts), self.model_id)
        return vectors

    def embed_query(self, text: str) -> list[float]:
        return self._embed_batch([text])[0]

    # -- internals ------------------------------------------------------------

    def _embed_batch(self, batch: list[str]) -> list[list[float]]:
        details = EmbedTextDetails(
            inputs=batch,
            serving_mode=self._serving_mode,
            compartment_id=self.compartment_id,
            truncate=self.truncate,
            input_type=self.input_type,
        )
        response = self._client.embed_text(details)
        embeddings = response.data.embeddings
        if len(embeddings) != len(batch):
            raise RuntimeError(f"Expected {len(batch)} embeddings from {self.model_id}, got {len(embeddings)}")
        return embeddings
