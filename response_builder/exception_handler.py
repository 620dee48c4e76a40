"""Turns any exception raised while handling a request into an API error response.

Exceptions are classified once, at the framework boundary, into an
``ExceptionInfo``. Resolution then works only on that value: it picks the API
code and HTTP status (configuration overrides first, category defaults
second), a message, an optional validation payload and optional debug trace.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from response_builder.api_codes import BaseApiCodes
from response_builder.builder import (
    DEFAULT_HTTP_CODE_ERROR,
    KEY_MESSAGES,
    KEY_TRACE,
    ResponseBuilder,
    is_error_http_code,
)
from response_builder.categories import (
    KNOWN_CODE_CATEGORIES,
    ExceptionCategory,
    get_defaults,
)
from response_builder.config import (
    CONF_KEY_DEBUG_EX_TRACE_ENABLED,
    CONF_KEY_DEBUG_EX_TRACE_KEY,
    ConfigProvider,
    exception_config_key,
)
from response_builder.exceptions import AppError, AuthenticationError, ValidationFailed
from response_builder.messages import MessageCatalog
from response_builder.schemas.pydantic import ApiErrorResponse, TraceInfo
from response_builder.utils import as_bool, exception_origin, flatten_validation_errors, int_or_none

logger = logging.getLogger(__name__)


class ExceptionKind(str, Enum):
    HTTP = "http"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    GENERIC = "generic"


@dataclass(frozen=True)
class ExceptionInfo:
    """Everything resolution needs to know about an exception."""

    kind: ExceptionKind
    class_name: str
    message: str = ""
    status_code: int | None = None
    code: int | None = None
    validation_messages: dict[str, list[str]] | None = None
    headers: dict[str, str] | None = None
    file: str | None = None
    line: int | None = None


def _http_message(status_code: int, detail: object) -> str:
    """HTTPException detail, with Starlette's stock reason phrase treated as no message."""
    if detail is None:
        return ""
    message = str(detail)
    try:
        if message == HTTPStatus(status_code).phrase:
            return ""
    except ValueError:
        pass
    return message


def classify(exc: BaseException) -> ExceptionInfo:
    """Build the ExceptionInfo for ``exc``. This is the only place concrete types are inspected."""
    file, line = exception_origin(exc)
    common = {
        "class_name": type(exc).__name__,
        "code": int_or_none(getattr(exc, "code", None)),
        "file": file,
        "line": line,
    }

    if isinstance(exc, AuthenticationError):
        return ExceptionInfo(
            kind=ExceptionKind.AUTHENTICATION,
            message=exc.detail,
            status_code=exc.status_code,
            **common,
        )

    if isinstance(exc, ValidationFailed):
        return ExceptionInfo(
            kind=ExceptionKind.VALIDATION,
            message=exc.detail,
            validation_messages=exc.errors,
            **common,
        )

    if isinstance(exc, (RequestValidationError, PydanticValidationError)):
        return ExceptionInfo(
            kind=ExceptionKind.VALIDATION,
            validation_messages=flatten_validation_errors(exc.errors()),
            **common,
        )

    if isinstance(exc, StarletteHTTPException):
        return ExceptionInfo(
            kind=ExceptionKind.HTTP,
            message=_http_message(exc.status_code, exc.detail),
            status_code=exc.status_code,
            headers=dict(exc.headers) if exc.headers else None,
            **common,
        )

    if isinstance(exc, AppError):
        return ExceptionInfo(
            kind=ExceptionKind.HTTP,
            message=exc.detail,
            status_code=exc.status_code,
            headers=dict(exc.headers) if exc.headers else None,
            **common,
        )

    return ExceptionInfo(kind=ExceptionKind.GENERIC, message=str(exc), **common)


_HTTP_STATUS_CATEGORIES: dict[int, ExceptionCategory] = {
    status.HTTP_404_NOT_FOUND: ExceptionCategory.NOT_FOUND,
    status.HTTP_503_SERVICE_UNAVAILABLE: ExceptionCategory.SERVICE_UNAVAILABLE,
    status.HTTP_401_UNAUTHORIZED: ExceptionCategory.UNAUTHORIZED,
}


class ExceptionHandler:
    """Exception classifier and responder."""

    def __init__(
        self,
        config: ConfigProvider,
        builder: ResponseBuilder,
        messages: MessageCatalog | None = None,
    ) -> None:
        self.config = config
        self.builder = builder
        self.messages = messages or builder.messages

    # ── Entry points ──────────────────────────────────────────────────
    def render(self, exc: BaseException) -> ApiErrorResponse:
        """Render any exception that escaped request handling."""
        info = classify(exc)

        if info.kind is ExceptionKind.HTTP:
            category = _HTTP_STATUS_CATEGORIES.get(info.status_code, ExceptionCategory.HTTP_EXCEPTION)
        elif info.kind is ExceptionKind.VALIDATION:
            category = ExceptionCategory.VALIDATION
        elif info.kind is ExceptionKind.AUTHENTICATION:
            return self.handle_unauthenticated(exc)
        else:
            category = ExceptionCategory.UNCAUGHT

        defaults = get_defaults(category)
        response = self.resolve(info, category, defaults.api_code, defaults.http_code)
        self._log(exc, info, category, response)
        return response

    def handle_unauthenticated(self, exc: BaseException) -> ApiErrorResponse:
        """Render an exception raised by the authentication layer."""
        info = classify(exc)
        defaults = get_defaults(ExceptionCategory.UNAUTHORIZED)
        response = self.resolve(info, ExceptionCategory.UNAUTHORIZED, defaults.api_code, defaults.http_code)
        self._log(exc, info, ExceptionCategory.UNAUTHORIZED, response)
        return response

    # ── Resolution ────────────────────────────────────────────────────
    def resolve(
        self,
        info: ExceptionInfo,
        category: ExceptionCategory,
        fallback_api_code: int,
        fallback_http_code: int = DEFAULT_HTTP_CODE_ERROR,
    ) -> ApiErrorResponse:
        """Resolve one classified exception into a response."""
        api_code = self._config_api_code(category, fallback_api_code)
        http_code = self._config_int(exception_config_key(category, "http_code"), fallback_http_code)

        # not a usable error status, try the exception's own
        if not is_error_http_code(http_code):
            http_code = info.status_code if info.kind is ExceptionKind.HTTP else info.code
        if not is_error_http_code(http_code):
            http_code = fallback_http_code

        data = None
        if api_code == self.effective_api_code(ExceptionCategory.VALIDATION):
            if info.validation_messages is not None:
                data = {KEY_MESSAGES: info.validation_messages}
            else:
                logger.warning(
                    "API code %d is configured for both %s and %s; no validation payload attached",
                    api_code, category.value, ExceptionCategory.VALIDATION.value,
                )

        return self.builder.build_error(
            api_code,
            self._resolve_message(info, api_code),
            data,
            http_code,
            info.headers,
            self._debug_data(info),
        )

    def effective_api_code(self, category: ExceptionCategory) -> int:
        """API code of ``category`` after configuration overrides."""
        return self._config_api_code(category, get_defaults(category).api_code)

    def base_category(self, api_code: int) -> ExceptionCategory | None:
        """First known category whose effective code equals ``api_code``."""
        for category in KNOWN_CODE_CATEGORIES:
            if self.effective_api_code(category) == api_code:
                return category
        return None

    def _resolve_message(self, info: ExceptionInfo, api_code: int) -> str:
        if info.message:
            return info.message

        if info.kind is ExceptionKind.HTTP:
            key = f"http_{info.status_code}"
            if self.messages.has(key):
                message = self.messages.get(key, {"api_code": api_code})
                if message:
                    return message

        key = self.builder.get_code_message_key(api_code, include_reserved=False)
        if key is None:
            base = self.base_category(api_code)
            key = base.value if base is not None else BaseApiCodes.get_code_message_key(
                BaseApiCodes.NO_ERROR_MESSAGE
            )
        substitutions = {"api_code": api_code, "message": info.class_name}
        message = self.messages.get(key, substitutions)
        if not message:
            message = self.messages.get("no_error_message", substitutions) or info.class_name
        return message

    def _debug_data(self, info: ExceptionInfo) -> dict | None:
        if not as_bool(self.config.get(CONF_KEY_DEBUG_EX_TRACE_ENABLED, False)):
            return None
        trace_key = self.config.get(CONF_KEY_DEBUG_EX_TRACE_KEY, KEY_TRACE) or KEY_TRACE
        trace = TraceInfo(class_name=info.class_name, file=info.file, line=info.line)
        return {trace_key: trace.model_dump(by_alias=True)}

    def _config_api_code(self, category: ExceptionCategory, default: int) -> int:
        """Configured API code of ``category``. OK is reserved for success and never used."""
        key = exception_config_key(category, "code")
        api_code = self._config_int(key, default)
        if api_code == BaseApiCodes.OK:
            logger.warning("Ignoring config value %s=%r, reserved for success", key, api_code)
            return default
        return api_code

    def _config_int(self, key: str, default: int) -> int:
        value = self.config.get(key, None)
        if value is None:
            return default
        parsed = int_or_none(value)
        if parsed is None:
            logger.warning("Ignoring non-integer config value %s=%r", key, value)
            return default
        return parsed

    @staticmethod
    def _log(
        exc: BaseException,
        info: ExceptionInfo,
        category: ExceptionCategory,
        response: ApiErrorResponse,
    ) -> None:
        if response.http_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "%s handled as %s (api_code=%d, http_code=%d)",
                info.class_name, category.value, response.api_code, response.http_code,
                exc_info=exc,
            )
        else:
            logger.debug(
                "%s handled as %s (api_code=%d, http_code=%d)",
                info.class_name, category.value, response.api_code, response.http_code,
            )
