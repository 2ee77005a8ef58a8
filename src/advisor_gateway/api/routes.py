"""HTTP routes for the gateway endpoints."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Awaitable, Callable, Iterable, TypeVar
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from ..gateway import Gateway, HandlerResult, Rejected
from ..schemas import ChatRequest, HealthResponse, RemedyRequest, TranslateRequest

logger = logging.getLogger(__name__)

router = APIRouter()

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
BODY_TOO_LARGE = "Request body too large"

_BRACKET = re.compile(r"\[([^\]]*)\]")


class InvalidBody(Exception):
    """The request body could not be read as a JSON object or form."""

    def __init__(self, details: str | None = None):
        super().__init__(details or "Invalid request body")
        self.details = details


class BodyTooLarge(Exception):
    """More than the configured number of bytes arrived."""


def get_gateway(request: Request) -> Gateway:
    return request.app.state.gateway


async def read_body(request: Request, limit: int) -> bytes:
    """Read the raw body, stopping as soon as it grows past ``limit`` bytes."""
    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            logger.warning("Rejected %s %s: streamed body over %d bytes", request.method, request.url.path, limit)
            raise BodyTooLarge()
        chunks.append(chunk)
    return b"".join(chunks)


def _key_path(key: str) -> list[str]:
    head, sep, rest = key.partition("[")
    if not sep:
        return [key]
    return [head, *_BRACKET.findall(sep + rest)]


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    items = {k: _listify(v) for k, v in node.items()}
    if items and all(k.isdigit() for k in items):
        return [items[k] for k in sorted(items, key=int)]
    return items


def unflatten_form(pairs: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Nest bracket keys: ``history[0][role]=user`` -> ``{"history": [{"role": "user"}]}``.

    ``key[]`` appends. A key seen both plain and with brackets keeps the
    nested value.
    """
    root: dict[str, Any] = {}
    for key, value in pairs:
        path = _key_path(key)
        node = root
        for part in path[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        leaf = path[-1] or str(len(node))
        if not isinstance(node.get(leaf), dict):
            node[leaf] = value
    return {k: _listify(v) for k, v in root.items()}


async def read_payload(request: Request, limit: int) -> dict[str, Any]:
    """Read a JSON object or url-encoded form body; an empty body is ``{}``."""
    raw = await read_body(request, limit)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPE):
        return unflatten_form(parse_qsl(raw.decode("utf-8", errors="replace"), keep_blank_values=True))

    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise InvalidBody() from e
    if not isinstance(data, dict):
        raise InvalidBody()
    return data


async def parse_body(request: Request, model: type[ModelT], limit: int) -> ModelT:
    payload = await read_payload(request, limit)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(loc) for loc in err["loc"]) for err in e.errors())
        raise InvalidBody(f"Invalid field(s): {fields}") from e


def to_response(result: HandlerResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body())


async def handle(
    request: Request,
    gateway: Gateway,
    model: type[ModelT],
    handler: Callable[[ModelT], Awaitable[HandlerResult]],
) -> JSONResponse:
    try:
        body = await parse_body(request, model, gateway.settings.max_body_bytes)
    except BodyTooLarge:
        return to_response(Rejected(413, BODY_TOO_LARGE))
    except InvalidBody as e:
        return to_response(Rejected(400, "Invalid request body", e.details))
    return to_response(await handler(body))


@router.post("/translate-endpoint")
async def translate(request: Request, gateway: Gateway = Depends(get_gateway)) -> JSONResponse:
    """Translate ``text`` into ``target`` with the text provider."""
    return await handle(request, gateway, TranslateRequest, gateway.translate)


@router.post("/chat-endpoint")
async def chat(request: Request, gateway: Gateway = Depends(get_gateway)) -> JSONResponse:
    """Single reply to ``message`` from the multimodal provider."""
    return await handle(request, gateway, ChatRequest, gateway.chat)


@router.post("/remedy-endpoint")
async def remedy(request: Request, gateway: Gateway = Depends(get_gateway)) -> JSONResponse:
    """Remedy and prevention steps for a named disease and/or a leaf image."""
    return await handle(request, gateway, RemedyRequest, gateway.remedy)


@router.get("/health", response_model=HealthResponse)
async def health_check(gateway: Gateway = Depends(get_gateway)) -> HealthResponse:
    settings = gateway.settings
    return HealthResponse(
        providers={
            "text": "configured" if settings.openai_api_key else "not_configured",
            "multimodal": "configured" if settings.gemini_api_key else "not_configured",
        }
    )
