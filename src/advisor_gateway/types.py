"""Provider-agnostic request and outcome types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Union


class Provider(str, Enum):
    """Upstream provider family an outbound request is meant for."""

    TEXT = "text"
    MULTIMODAL = "multimodal"


@dataclass(frozen=True, slots=True)
class TextPart:
    text: str


@dataclass(frozen=True, slots=True)
class ImagePart:
    mime_type: str
    data: str
    """Base64-encoded image bytes."""


ContentPart = Union[TextPart, ImagePart]


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    role: Literal["user", "assistant"]
    text: str


@dataclass(frozen=True, slots=True)
class OutboundRequest:
    """Canonical request handed to a provider adapter."""

    provider: Provider
    system_instruction: str | None
    content: tuple[ContentPart, ...]
    history: tuple[ConversationTurn, ...] = ()

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("OutboundRequest needs at least one content part")
        has_image = any(isinstance(part, ImagePart) for part in self.content)
        if has_image and not isinstance(self.content[-1], TextPart):
            raise ValueError("A text part must follow the image parts")

    @property
    def text(self) -> str:
        """All text parts joined, in order."""
        return "\n".join(part.text for part in self.content if isinstance(part, TextPart))


@dataclass(frozen=True, slots=True)
class ProviderSuccess:
    """The provider answered; ``raw`` is its untouched response."""

    raw: Any


@dataclass(frozen=True, slots=True)
class ProviderFailure:
    """The provider was reachable but rejected the call."""

    status_code: int
    body: str


@dataclass(frozen=True, slots=True)
class TransportFailure:
    """The call could not complete at all."""

    error: BaseException


ProviderOutcome = Union[ProviderSuccess, ProviderFailure, TransportFailure]
