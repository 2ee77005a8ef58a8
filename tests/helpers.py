"""Shared test helpers (provider doubles, settings)."""

from __future__ import annotations

from typing import Any

from advisor_gateway.config import Settings
from advisor_gateway.providers.base import ProviderAdapter
from advisor_gateway.types import OutboundRequest, ProviderOutcome, ProviderSuccess


def make_settings(**overrides: Any) -> Settings:
    """Settings with both keys present, isolated from any local .env file."""
    values: dict[str, Any] = {
        "openai_api_key": "sk-test",
        "gemini_api_key": "gm-test",
        "chat_include_history": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class StubAdapter(ProviderAdapter):
    """Provider double returning a fixed outcome and recording every call."""

    def __init__(self, outcome: ProviderOutcome | None = None, name: str = "stub") -> None:
        super().__init__(name)
        self.outcome = outcome if outcome is not None else ProviderSuccess({})
        self.calls: list[tuple[OutboundRequest, str | None]] = []

    async def generate(self, request: OutboundRequest, *, model: str | None = None) -> ProviderOutcome:
        self.calls.append((request, model))
        return self.outcome

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_request(self) -> OutboundRequest:
        return self.calls[-1][0]
