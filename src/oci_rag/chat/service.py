"""Chat through the OCI Generative AI inference service.

Two request formats are supported, selected by :class:`InferenceRequestType`:

1. **COHERE** — ``CohereChatRequest`` with a single ``message`` plus the
   ``chat_history`` returned by the previous response.
2. **LLAMA** — ``GenericChatRequest`` carrying the whole message list;
   used by Meta Llama and the other models served with the generic API
   format.

The service keeps the conversation history between calls, so one
instance is one conversation.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any

from oci.generative_ai_inference.models import (
    BaseChatRequest,
    ChatDetails,
    CohereChatRequest,
    CohereChatResponse,
    GenericChatRequest,
    GenericChatResponse,
    TextContent,
    UserMessage,
)

if TYPE_CHECKING:
    from oci.generative_ai_inference import GenerativeAiInferenceClient
    from oci.generative_ai_inference.models import BaseChatResponse, ServingMode

logger = logging.getLogger(__name__)


class InferenceRequestType(str, enum.Enum):
    """API format used to talk to the chat model."""

    COHERE = "COHERE"
    LLAMA = "LLAMA"


class OCIChatService:
    """OCI GenAI chat model with in-memory conversation history.

    Parameters
    ----------
    client:
        Generative AI inference client.
    serving_mode:
        Where the model is hosted (see :func:`oci_rag.clients.serving_mode_for`).
    compartment:
        Compartment OCID the requests are billed to.
    preamble_override:
        Replaces the default Cohere preamble (COHERE only).
    temperature, frequency_penalty, max_tokens, presence_penalty, top_p, top_k:
        Sampling parameters.  ``top_k`` defaults to ``0`` for COHERE and
        ``-1`` for LLAMA, which disables top-k sampling for each format.
    inference_request_type:
        Request / response format, COHERE by default.
    """

    def __init__(
        self,
        client: GenerativeAiInferenceClient,
        serving_mode: ServingMode,
        compartment: str,
        *,
        preamble_override: str | None = None,
        temperature: float | None = None,
        frequency_penalty: float | None = None,
        max_tokens: int | None = None,
        presence_penalty: float | None = None,
        top_p: float | None = None,
        top_k: int | None = None,
        inference_request_type: InferenceRequestType | str | None = None,
    ) -> None:
        self._client = client
        self.serving_mode = serving_mode
        self.compartment = compartment
        self.preamble_override = preamble_override

        self.temperature = 1.0 if temperature is None else temperature
        self.frequency_penalty = 0.0 if frequency_penalty is None else frequency_penalty
        self.max_tokens = 600 if max_tokens is None else max_tokens
        self.presence_penalty = 0.0 if presence_penalty is None else presence_penalty
        self.top_p = 0.75 if top_p is None else top_p
        if isinstance(inference_request_type, str):
            inference_request_type = inference_request_type.upper()
        self.inference_request_type = InferenceRequestType(inference_request_type or InferenceRequestType.COHERE)
        if top_k is None:
            top_k = 0 if self.inference_request_type is InferenceRequestType.COHERE else -1
        self.top_k = top_k

        self._cohere_history: list[Any] | None = None
        self._generic_history: list[Any] = []

    # -- public API -----------------------------------------------------------

    def chat(self, prompt: str) -> str:
        """Send *prompt* to the chat model and return the response text."""
        chat_request = self._create_chat_request(prompt)
        details = ChatDetails(
            compartment_id=self.compartment,
            serving_mode=self.serving_mode,
            chat_request=chat_request,
        )
        response = self._client.chat(details)
        chat_response = response.data.chat_response
        text = _extract_text(chat_response)
        self._save_history(chat_request, chat_response)
        logger.debug("Chat response (%d chars) from %s request", len(text), self.inference_request_type.value)
        return text

    @property
    def history(self) -> list[Any]:
        """Conversation history in the format of the active request type."""
        if self.inference_request_type is InferenceRequestType.COHERE:
            return list(self._cohere_history or [])
        return list(self._generic_history)

    def reset_history(self) -> None:
        """Forget the conversation so far."""
        self._cohere_history = None
        self._generic_history = []

    # -- internals ------------------------------------------------------------

    def _create_chat_request(self, prompt: str) -> BaseChatRequest:
        if self.inference_request_type is InferenceRequestType.COHERE:
            return CohereChatRequest(
                message=prompt,
                chat_history=self._cohere_history,
                preamble_override=self.preamble_override,
                frequency_penalty=self.frequency_penalty,
                presence_penalty=self.presence_penalty,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                top_p=self.top_p,
                top_k=self.top_k,
                is_stream=False,
            )
        if self.inference_request_type is InferenceRequestType.LLAMA:
            message = UserMessage(name="USER", content=[TextContent(text=prompt)])
            return GenericChatRequest(
                messages=[*self._generic_history, message],
                frequency_penalty=self.frequency_penalty,
                presence_penalty=self.presence_penalty,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                top_p=self.top_p,
                top_k=self.top_k,
                is_stream=False,
            )
        raise ValueError(f"Unsupported inference request type: {self.inference_request_type!r}")

    def _save_history(self, chat_request: BaseChatRequest, chat_response: BaseChatResponse) -> None:
        if isinstance(chat_response, CohereChatResponse):
            self._cohere_history = chat_response.chat_history
        elif isinstance(chat_response, GenericChatResponse):
            # The generic API returns only the reply, so the sent messages
            # are kept too and the next request carries both sides.
            sent = list(chat_request.messages or []) if isinstance(chat_request, GenericChatRequest) else []
            self._generic_history = sent + [choice.message for choice in chat_response.choices or []]
        else:
            raise RuntimeError(f"Unexpected chat response type: {type(chat_response).__name__}")


def _extract_text(chat_response: BaseChatResponse) -> str:
    """Pull the reply text out of a Cohere or generic chat response."""
    if isinstance(chat_response, CohereChatResponse):
        return chat_response.text
    if isinstance(chat_response, GenericChatResponse) and chat_response.choices:
        contents = chat_response.choices[-1].message.content or []
        if contents and isinstance(contents[-1], TextContent):
            return contents[-1].text
    raise RuntimeError(f"Unexpected chat response type: {type(chat_response).__name__}")
