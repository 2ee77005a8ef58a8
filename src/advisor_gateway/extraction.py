"""Answer extraction from provider responses.

Providers (and SDK versions of the same provider) expose their output under
different field paths. Extraction walks an ordered list of strategies and
keeps the first non-empty string; when none matches, a caller-chosen
fallback is returned instead of an error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional

from .prompts import is_malayalam

logger = logging.getLogger(__name__)

NO_REMEDY_EN = "No remedy found."
NO_REMEDY_ML = "പരിഹാരം കണ്ടെത്താനായില്ല."

_MISSING = object()


def _get(obj: Any, key: str | int) -> Any:
    """Read ``key`` from a mapping, sequence or attribute-style object."""
    if obj is None or obj is _MISSING:
        return _MISSING
    if isinstance(key, int):
        if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)) and len(obj) > key:
            return obj[key]
        return _MISSING
    if isinstance(obj, Mapping):
        return obj.get(key, _MISSING)
    return getattr(obj, key, _MISSING)


def _dig(obj: Any, *path: str | int) -> Any:
    for key in path:
        obj = _get(obj, key)
        if obj is _MISSING:
            return None
    return obj


def _text_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def completion_text(raw: Any) -> str | None:
    """Chat-completion shape: ``choices[0].message.content`` or ``choices[0].text``."""
    return _text_or_none(_dig(raw, "choices", 0, "message", "content")) or _text_or_none(
        _dig(raw, "choices", 0, "text")
    )


def candidate_text(raw: Any) -> str | None:
    """Nested candidate shape, directly or under a ``response`` wrapper."""
    path = ("candidates", 0, "content", "parts", 0, "text")
    return _text_or_none(_dig(raw, "response", *path)) or _text_or_none(_dig(raw, *path))


def flat_text(raw: Any) -> str | None:
    """Top-level ``text`` convenience field."""
    return _text_or_none(_dig(raw, "text"))


Strategy = Callable[[Any], Optional[str]]

STRATEGIES: tuple[Strategy, ...] = (completion_text, candidate_text, flat_text)


def extract_answer(
    raw: Any,
    fallback: str | None = None,
    strategies: Sequence[Strategy] = STRATEGIES,
) -> str | None:
    """Return the first non-empty answer found in ``raw``, else ``fallback``."""
    for strategy in strategies:
        try:
            answer = strategy(raw)
        except Exception:
            logger.debug("Extraction strategy %s failed", strategy.__name__, exc_info=True)
            continue
        if answer:
            return answer
    logger.info("No answer found in provider response, using fallback")
    return fallback


def remedy_fallback(lang: str | None) -> str:
    return NO_REMEDY_ML if is_malayalam(lang) else NO_REMEDY_EN
