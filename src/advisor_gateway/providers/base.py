from __future__ import annotations

from abc import ABC, abstractmethod

from ..types import OutboundRequest, ProviderOutcome


class ProviderAdapter(ABC):
    """Base class for adapters that send one outbound request to a provider.

    Implementations perform exactly one call per ``generate`` and never
    raise: every result is reported as a :data:`ProviderOutcome`.
    """

    name: str

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    async def generate(self, request: OutboundRequest, *, model: str | None = None) -> ProviderOutcome:
        """Send ``request`` and classify the result."""
