"""Provider adapters."""

from .base import ProviderAdapter
from .gemini import GeminiAdapter
from .openai_text import OpenAITextAdapter

__all__ = [
    "ProviderAdapter",
    "GeminiAdapter",
    "OpenAITextAdapter",
]
