"""Builds the error envelope returned to API clients."""

from __future__ import annotations

import logging
from typing import Any

from starlette import status

from response_builder.api_codes import BaseApiCodes
from response_builder.config import (
    CONF_KEY_DEBUG_KEY,
    CONF_KEY_LOCALE,
    CONF_KEY_MAP,
    ConfigProvider,
)
from response_builder.exceptions import ResponseBuilderError
from response_builder.messages import MessageCatalog
from response_builder.schemas.pydantic import ApiErrorResponse

logger = logging.getLogger(__name__)

ERROR_HTTP_CODE_MIN = 400
ERROR_HTTP_CODE_MAX = 599
DEFAULT_HTTP_CODE_ERROR = status.HTTP_400_BAD_REQUEST

KEY_MESSAGES = "messages"
KEY_DEBUG = "debug"
KEY_TRACE = "trace"
KEY_CLASS = "class"
KEY_FILE = "file"
KEY_LINE = "line"


def is_error_http_code(http_code: Any) -> bool:
    return isinstance(http_code, int) and ERROR_HTTP_CODE_MIN <= http_code <= ERROR_HTTP_CODE_MAX


class ResponseBuilder:
    """Turns an API code, message and optional payload into an ApiErrorResponse."""

    def __init__(self, config: ConfigProvider, messages: MessageCatalog) -> None:
        self.config = config
        self.messages = messages

    def get_code_message_key(self, api_code: int, include_reserved: bool = True) -> str | None:
        """Template id for ``api_code``: the configured map first, then reserved codes."""
        code_map = self.config.get(CONF_KEY_MAP, {}) or {}
        key = code_map.get(api_code)
        if key is None:
            # env-sourced maps may come in with string keys
            key = code_map.get(str(api_code))
        if key is None and include_reserved:
            key = BaseApiCodes.get_code_message_key(api_code)
        return key

    def build_error(
        self,
        api_code: int,
        message: str | None = None,
        data: dict[str, Any] | None = None,
        http_code: int | None = None,
        headers: dict[str, str] | None = None,
        debug_data: dict[str, Any] | None = None,
    ) -> ApiErrorResponse:
        """Build an error response.

        Raises ResponseBuilderError when ``api_code`` is OK or ``http_code`` is not
        a 4xx/5xx status.
        """
        if api_code == BaseApiCodes.OK:
            raise ResponseBuilderError(f"api_code {api_code} is reserved for success")

        if http_code is None:
            http_code = DEFAULT_HTTP_CODE_ERROR
        if not is_error_http_code(http_code):
            raise ResponseBuilderError(
                f"http_code {http_code!r} is not an error status "
                f"({ERROR_HTTP_CODE_MIN}-{ERROR_HTTP_CODE_MAX})"
            )

        if not message:
            key = self.get_code_message_key(api_code) or BaseApiCodes.get_code_message_key(
                BaseApiCodes.NO_ERROR_MESSAGE
            )
            message = self.messages.get(key, {"api_code": api_code})

        return ApiErrorResponse(
            api_code=api_code,
            http_code=http_code,
            message=message,
            locale=self.config.get(CONF_KEY_LOCALE, self.messages.locale),
            data=data,
            debug=debug_data,
            debug_key=self.config.get(CONF_KEY_DEBUG_KEY, KEY_DEBUG),
            headers=dict(headers) if headers else None,
        )
