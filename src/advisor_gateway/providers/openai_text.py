"""OpenAI-compatible chat completions provider used for translation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..types import (
    ImagePart,
    OutboundRequest,
    ProviderFailure,
    ProviderOutcome,
    ProviderSuccess,
    TextPart,
    TransportFailure,
)
from .base import ProviderAdapter

logger = logging.getLogger(__name__)


def _user_content(request: OutboundRequest) -> str | list[dict[str, Any]]:
    """Plain string for text-only content, content-part list when images are present."""
    if not any(isinstance(part, ImagePart) for part in request.content):
        return request.text
    parts: list[dict[str, Any]] = []
    for part in request.content:
        if isinstance(part, ImagePart):
            parts.append(
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{part.mime_type};base64,{part.data}"},
                }
            )
        elif isinstance(part, TextPart):
            parts.append({"type": "text", "text": part.text})
    return parts


def build_messages(request: OutboundRequest) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []
    if request.system_instruction:
        messages.append({"role": "system", "content": request.system_instruction})
    for turn in request.history:
        messages.append({"role": turn.role, "content": turn.text})
    messages.append({"role": "user", "content": _user_content(request)})
    return messages


class OpenAITextAdapter(ProviderAdapter):
    """Single-turn chat completion over plain HTTP."""

    def __init__(
        self,
        api_key: str | None,
        *,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_tokens: int = 1000,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__("openai")
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.AsyncClient | None = None) -> OpenAITextAdapter:
        return cls(
            settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=settings.translate_model,
            temperature=settings.translate_temperature,
            max_tokens=settings.translate_max_tokens,
            timeout=settings.provider_timeout_seconds,
            client=client,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, request: OutboundRequest, model: str | None = None) -> dict[str, Any]:
        return {
            "model": model or self._model,
            "messages": build_messages(request),
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self._url, headers=self._headers(), json=payload, timeout=self._timeout)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(self._url, headers=self._headers(), json=payload)

    async def generate(self, request: OutboundRequest, *, model: str | None = None) -> ProviderOutcome:
        payload = self.build_payload(request, model)
        try:
            response = await self._post(payload)
        except Exception as e:
            logger.exception("OpenAI request failed: %s", e)
            return TransportFailure(e)

        if not response.is_success:
            error_text = response.text
            logger.error("OpenAI error %s: %s", response.status_code, error_text)
            return ProviderFailure(status_code=response.status_code, body=error_text)

        try:
            data = response.json()
        except ValueError as e:
            logger.exception("OpenAI returned an undecodable body: %s", e)
            return TransportFailure(e)
        return ProviderSuccess(data)
