"""FastAPI exception handlers backed by ExceptionHandler."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from response_builder.exception_handler import ExceptionHandler
from response_builder.exceptions import AppError, AuthenticationError


def register_exception_handlers(app: FastAPI, handler: ExceptionHandler) -> None:
    """Route every exception that escapes a request through ``handler``."""

    @app.exception_handler(AuthenticationError)
    async def unauthenticated_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
        return handler.handle_unauthenticated(exc).to_json_response()

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return handler.render(exc).to_json_response()

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return handler.render(exc).to_json_response()

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return handler.render(exc).to_json_response()

    @app.exception_handler(Exception)
    async def uncaught_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        return handler.render(exc).to_json_response()
