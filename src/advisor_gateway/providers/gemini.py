"""Gemini multimodal provider used for chat and remedy requests."""

from __future__ import annotations

import base64
import logging
from typing import Any

from google import genai
from google.genai import types

from ..config import Settings
from ..types import (
    ImagePart,
    OutboundRequest,
    ProviderOutcome,
    ProviderSuccess,
    TextPart,
    TransportFailure,
)
from .base import ProviderAdapter

logger = logging.getLogger(__name__)

_GEMINI_ROLES = {"user": "user", "assistant": "model"}


def _to_part(part: TextPart | ImagePart) -> types.Part:
    if isinstance(part, ImagePart):
        return types.Part.from_bytes(data=base64.b64decode(part.data), mime_type=part.mime_type)
    return types.Part.from_text(text=part.text)


def build_contents(request: OutboundRequest) -> list[types.Content]:
    """Prior turns first, then one user content holding images before text."""
    contents = [
        types.Content(role=_GEMINI_ROLES[turn.role], parts=[types.Part.from_text(text=turn.text)])
        for turn in request.history
    ]
    contents.append(types.Content(role="user", parts=[_to_part(part) for part in request.content]))
    return contents


def build_config(request: OutboundRequest) -> types.GenerateContentConfig | None:
    if not request.system_instruction:
        return None
    return types.GenerateContentConfig(system_instruction=request.system_instruction)


class GeminiAdapter(ProviderAdapter):
    """Calls ``generate_content`` through the async google-genai client.

    The SDK surfaces every failure as an exception, so this adapter only
    ever reports :class:`ProviderSuccess` or :class:`TransportFailure`.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = "gemini-2.0-flash",
        client: Any | None = None,
    ) -> None:
        super().__init__("gemini")
        self._api_key = api_key
        self._model = model
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, client: Any | None = None) -> GeminiAdapter:
        return cls(settings.gemini_api_key, model=settings.gemini_chat_model, client=client)

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate(self, request: OutboundRequest, *, model: str | None = None) -> ProviderOutcome:
        model_id = model or self._model
        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=model_id,
                contents=build_contents(request),
                config=build_config(request),
            )
        except Exception as e:
            logger.exception("Gemini generate_content failed (model=%s): %s", model_id, e)
            return TransportFailure(e)
        return ProviderSuccess(response)
