"""``python -m advisor_gateway`` / ``advisor-gateway``: serve the gateway with uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# Loggers that echo every outbound request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "google_genai")


def configure_logging(settings: Settings) -> None:
    level = settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    if not settings.debug:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    logging.getLogger("advisor_gateway").info(
        "Serving translate, chat and remedy endpoints on %s:%d", settings.app_host, settings.app_port
    )
    uvicorn.run(
        "advisor_gateway.api.app:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
