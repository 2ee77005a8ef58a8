"""Per-endpoint request handling.

A handler validates its inbound fields, builds the outbound request, makes
one provider call and extracts the answer. Each step either continues or
ends in a :data:`HandlerResult`, so every terminal state is explicit:

- ``Rejected(400)`` for a missing credential or field,
- ``Rejected(502)`` when the text provider refuses the call,
- ``Rejected(500)`` when the call cannot complete,
- ``Answered`` otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from .config import Settings
from .extraction import extract_answer, remedy_fallback
from .prompts import build_chat_request, build_remedy_request, build_translate_request
from .providers import GeminiAdapter, OpenAITextAdapter, ProviderAdapter
from .schemas import ChatRequest, RemedyRequest, TranslateRequest
from .types import OutboundRequest, Provider, ProviderFailure, ProviderOutcome, TransportFailure

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
CHAT_ERROR = "Failed to get response."
TRANSLATION_PROVIDER_ERROR = "Translation provider error"


@dataclass(frozen=True, slots=True)
class Rejected:
    status_code: int
    error: str
    details: str | None = None

    def body(self) -> dict[str, Any]:
        if self.details:
            return {"error": self.error, "details": self.details}
        return {"error": self.error}


@dataclass(frozen=True, slots=True)
class Answered:
    field: str
    answer: str | None
    status_code: int = 200

    def body(self) -> dict[str, Any]:
        return {self.field: self.answer}


HandlerResult = Union[Rejected, Answered]


def missing_field(field: str) -> Rejected:
    return Rejected(400, f"Missing {field} in request body")


def missing_credential(name: str) -> Rejected:
    return Rejected(400, f"Missing {name} in server environment")


class Gateway:
    """Orchestrates translate, chat and remedy requests against two providers."""

    def __init__(
        self,
        settings: Settings,
        text_provider: ProviderAdapter,
        multimodal_provider: ProviderAdapter,
    ) -> None:
        self._settings = settings
        self._adapters: dict[Provider, ProviderAdapter] = {
            Provider.TEXT: text_provider,
            Provider.MULTIMODAL: multimodal_provider,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> Gateway:
        return cls(
            settings,
            text_provider=OpenAITextAdapter.from_settings(settings),
            multimodal_provider=GeminiAdapter.from_settings(settings),
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    async def _call(self, request: OutboundRequest, model: str | None = None) -> ProviderOutcome:
        adapter = self._adapters[request.provider]
        return await adapter.generate(request, model=model)

    async def translate(self, request: TranslateRequest) -> HandlerResult:
        if not self._settings.openai_api_key:
            return missing_credential("OPENAI_API_KEY")
        if not request.text:
            return missing_field("text")

        outcome = await self._call(build_translate_request(request.text, request.target))
        if isinstance(outcome, ProviderFailure):
            return Rejected(502, TRANSLATION_PROVIDER_ERROR, outcome.body)
        if isinstance(outcome, TransportFailure):
            logger.error("Translate failed: %r", outcome.error)
            return Rejected(500, INTERNAL_ERROR)
        return Answered("translated", extract_answer(outcome.raw))

    async def chat(self, request: ChatRequest) -> HandlerResult:
        if not request.message:
            return missing_field("message")

        outbound = build_chat_request(
            request.message,
            request.history,
            include_history=self._settings.chat_include_history,
        )
        outcome = await self._call(outbound, model=self._settings.gemini_chat_model)
        if isinstance(outcome, (ProviderFailure, TransportFailure)):
            logger.error("Chat failed: %r", outcome)
            return Rejected(500, CHAT_ERROR)
        return Answered("reply", extract_answer(outcome.raw))

    async def remedy(self, request: RemedyRequest) -> HandlerResult:
        logger.info("Received remedy request: %s", request.log_summary())
        if not self._settings.gemini_api_key:
            return missing_credential("GEMINI_API_KEY")
        if not request.disease_name and not request.image_base64:
            return missing_field("diseaseName or imageBase64")

        outbound = build_remedy_request(request.disease_name, request.image_base64, request.lang)
        outcome = await self._call(outbound, model=self._settings.gemini_remedy_model)
        if isinstance(outcome, (ProviderFailure, TransportFailure)):
            logger.error("Remedy generation failed: %r", outcome)
            return Rejected(500, INTERNAL_ERROR)
        return Answered("remedy", extract_answer(outcome.raw, fallback=remedy_fallback(request.lang)))
