"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import Settings, get_settings
from ..gateway import INTERNAL_ERROR, Gateway
from .routes import BODY_TOO_LARGE, router

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared ``Content-Length`` is over ``max_body_bytes``.

    Bodies sent without the header (chunked) are counted as they are read
    by ``routes.read_body``.
    """

    def __init__(self, app, max_body_bytes: int):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                return JSONResponse(status_code=400, content={"error": "Invalid Content-Length header"})
            if size > self.max_body_bytes:
                logger.warning("Rejected %s %s: body of %d bytes", request.method, request.url.path, size)
                return JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE})
        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.gateway.settings
    logger.info("Advisor gateway starting...")
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set. /translate-endpoint will not work.")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set. /chat-endpoint and /remedy-endpoint will not work.")
    yield
    logger.info("Advisor gateway shutting down...")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})


def create_app(settings: Settings | None = None, gateway: Gateway | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or (gateway.settings if gateway else get_settings())
    gateway = gateway or Gateway.from_settings(settings)

    app = FastAPI(
        title="Advisor Gateway",
        description="Translation, chat and crop-remedy gateway over OpenAI and Gemini",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.gateway = gateway

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(router)
    return app


app = create_app()
