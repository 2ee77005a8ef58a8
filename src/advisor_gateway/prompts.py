"""Prompt building for translate, chat and remedy requests.

Each builder turns endpoint fields into an :class:`OutboundRequest`: an
optional system instruction plus ordered content parts. Builders are pure;
they never look at configuration or credentials.
"""

from __future__ import annotations

from typing import Any, Iterable

from .types import ConversationTurn, ImagePart, OutboundRequest, Provider, TextPart

MALAYALAM = "ml"
DEFAULT_TARGET_LANGUAGE = "English"

# Fixed for every inline image; the real encoding is not inspected.
IMAGE_MIME_TYPE = "image/jpeg"

TRANSLATE_MALAYALAM_INSTRUCTION = (
    "You are a professional translator. Translate the user-provided text to Malayalam, "
    "preserving meaning, formatting, and lists when possible."
)
TRANSLATE_INSTRUCTION_TEMPLATE = (
    "You are a professional translator. Translate the user-provided text to {target} "
    "preserving meaning and formatting."
)

REMEDY_PERSONA_EN = (
    "You are an expert agricultural advisor. Provide concise, practical remedies and "
    "prevention steps for crop diseases relevant to Indian farmers."
)
REMEDY_PERSONA_ML = (
    "You are an expert agricultural advisor who replies ONLY in Malayalam. Provide concise, "
    "practical remedies and prevention steps for crop diseases relevant to Indian farmers."
)

REMEDY_FOR_DISEASE_EN = (
    "Provide a concise remedy and prevention steps for: {disease}. Assume the farmer is in India."
)
REMEDY_FOR_DISEASE_ML = "ദയവായി {disease} നുള്ള ചികിത്സയും പ്രതിവിധികളും മലയാളത്തിൽ സംക്ഷിപ്തമായി നൽകുക."

IDENTIFY_AND_REMEDY_EN = (
    "Identify the crop disease shown in the attached image. Then, provide a concise remedy "
    "and prevention steps for this identified disease. Assume the farmer is in India."
)
IDENTIFY_AND_REMEDY_ML = (
    "ചിത്രത്തിൽ കാണിച്ചിരിക്കുന്ന കൃഷിയിലെ രോഗം ഏതാണെന്ന് തിരിച്ചറിഞ്ഞ്, "
    "അതിനുള്ള ചികിത്സയും പ്രതിവിധികളും മലയാളത്തിൽ സംക്ഷിപ്തമായി നൽകുക."
)

DISEASE_HINT_EN = " (Hint: The suspected disease is {disease}.)"
DISEASE_HINT_ML = " (സൂചന: രോഗം {disease} ആയിരിക്കാം.)"

_ASSISTANT_ROLES = {"assistant", "model", "bot"}


def is_malayalam(lang: str | None) -> bool:
    return lang == MALAYALAM


def translate_instruction(target: str | None) -> str:
    """System instruction for translating into ``target``.

    Any target other than the Malayalam sentinel is interpolated as given.
    """
    if is_malayalam(target):
        return TRANSLATE_MALAYALAM_INSTRUCTION
    return TRANSLATE_INSTRUCTION_TEMPLATE.format(target=target or DEFAULT_TARGET_LANGUAGE)


def build_translate_request(text: str, target: str | None) -> OutboundRequest:
    return OutboundRequest(
        provider=Provider.TEXT,
        system_instruction=translate_instruction(target),
        content=(TextPart(text),),
    )


def parse_history(raw: Any) -> tuple[ConversationTurn, ...]:
    """Convert inbound history items into conversation turns.

    Accepts ``{"role": ..., "content": ...}`` or ``{"role": ..., "text": ...}``
    mappings. Items with an unknown role or no text are skipped, and anything
    other than a list or tuple is no history at all.
    """
    if not isinstance(raw, (list, tuple)):
        return ()
    turns: list[ConversationTurn] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        role = str(item.get("role", "")).lower()
        text = item.get("content") or item.get("text")
        if not isinstance(text, str) or not text:
            continue
        if role == "user":
            turns.append(ConversationTurn(role="user", text=text))
        elif role in _ASSISTANT_ROLES:
            turns.append(ConversationTurn(role="assistant", text=text))
    return tuple(turns)


def build_chat_request(
    message: str,
    history: Iterable[Any] | None = None,
    include_history: bool = False,
) -> OutboundRequest:
    """Chat has no system instruction; the message is sent verbatim.

    History is only forwarded when ``include_history`` is set; otherwise the
    request is single-turn.
    """
    turns = parse_history(history) if include_history else ()
    return OutboundRequest(
        provider=Provider.MULTIMODAL,
        system_instruction=None,
        content=(TextPart(message),),
        history=turns,
    )


def remedy_persona(lang: str | None) -> str:
    return REMEDY_PERSONA_ML if is_malayalam(lang) else REMEDY_PERSONA_EN


def remedy_prompt(disease_name: str | None, has_image: bool, lang: str | None) -> str:
    malayalam = is_malayalam(lang)
    if has_image:
        prompt = IDENTIFY_AND_REMEDY_ML if malayalam else IDENTIFY_AND_REMEDY_EN
        if disease_name:
            hint = DISEASE_HINT_ML if malayalam else DISEASE_HINT_EN
            prompt += hint.format(disease=disease_name)
        return prompt
    if not disease_name:
        raise ValueError("A remedy prompt needs a disease name or an image")
    template = REMEDY_FOR_DISEASE_ML if malayalam else REMEDY_FOR_DISEASE_EN
    return template.format(disease=disease_name)


def build_remedy_request(
    disease_name: str | None,
    image_base64: str | None,
    lang: str | None,
) -> OutboundRequest:
    parts: list[TextPart | ImagePart] = []
    if image_base64:
        parts.append(ImagePart(mime_type=IMAGE_MIME_TYPE, data=image_base64))
    parts.append(TextPart(remedy_prompt(disease_name, bool(image_base64), lang)))
    return OutboundRequest(
        provider=Provider.MULTIMODAL,
        system_instruction=remedy_persona(lang),
        content=tuple(parts),
    )
