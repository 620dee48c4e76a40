"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from response_builder.api.handlers import register_exception_handlers
from response_builder.builder import ResponseBuilder
from response_builder.config import Settings, get_settings
from response_builder.exception_handler import ExceptionHandler
from response_builder.messages import MessageCatalog

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def build_exception_handler(settings: Settings) -> ExceptionHandler:
    """Wire config, messages and builder into an ExceptionHandler."""
    config = settings.to_config()
    messages = MessageCatalog(locale=settings.locale, overrides=settings.messages)
    builder = ResponseBuilder(config, messages)
    return ExceptionHandler(config, builder, messages)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.project_name, version=settings.version)
    register_exception_handlers(app, build_exception_handler(settings))
    logger.info(
        "Exception handler ready (debug trace %s)",
        "enabled" if settings.debug_trace_enabled else "disabled",
    )

    @app.get("/")
    async def root():
        return {"name": settings.project_name, "version": settings.version, "docs": "/docs"}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
